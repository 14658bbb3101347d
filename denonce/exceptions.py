"""Domain errors raised by the crud layer.

Each error carries the HTTP status it maps to; routers let them bubble up
and the app-level handler turns them into ``{"detail": message}``.
"""

from fastapi import status


class DenonceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Erreur interne du serveur."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# validation (400)
class MissingFields(DenonceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Les champs titre, description et categorie_id sont requis."


class MissingMessage(DenonceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Message requis."


class InvalidCategory(DenonceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Catégorie invalide ou inactive."


class InvalidStatus(DenonceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Statut invalide."


class InvalidRole(DenonceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Rôle invalide."


# conflicts (400 with a duplicate-key signal)
class DuplicateName(DenonceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Un élément avec ce nom existe déjà."


class DuplicateEmail(DenonceError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Un administrateur avec cet email existe déjà."


# not found (404)
class SignalementNotFound(DenonceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Signalement introuvable."


class InvalidTrackingCode(DenonceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Aucune déclaration trouvée avec ce code de suivi."


class CategorieNotFound(DenonceError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Catégorie introuvable."


# fatal (500)
class DefaultStatusMissing(DenonceError):
    message = "Statut par défaut introuvable. Contactez l'administrateur."


class TrackingCodeExhausted(DenonceError):
    message = "Impossible de générer un code de suivi unique. Réessayez."


class TrackingCodeConflict(DenonceError):
    message = "Conflit de code de suivi lors de l'enregistrement. Réessayez."
