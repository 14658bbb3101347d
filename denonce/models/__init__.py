from .categorie import Categorie
from .statut import Statut
from .signalement import Signalement
from .commentaire import Commentaire
from .historique_statut import HistoriqueStatut
from .administrateur import Administrateur, ROLE_ADMIN, ROLE_SUPER_ADMIN
