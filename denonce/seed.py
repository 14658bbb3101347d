"""Provision the reference data the API cannot run without.

Safe to run repeatedly: rows are matched by their unique name/email and
existing ones are left untouched.

    python -m denonce.seed
"""

from sqlalchemy.orm import Session

from . import models
from .core.logging import get_logger
from .core.security import get_password_hash
from .database import Base, SessionLocal, engine

logger = get_logger(__name__)

DEFAULT_CATEGORIES = [
    {"nom": "Corruption", "description": "Signalements liés à la corruption", "couleur": "#dc2626"},
    {"nom": "Fraude", "description": "Signalements de fraude", "couleur": "#ea580c"},
    {"nom": "Abus de pouvoir", "description": "Signalements d'abus de pouvoir", "couleur": "#7c2d12"},
    {"nom": "Détournement", "description": "Détournement de fonds publics", "couleur": "#991b1b"},
    {"nom": "Harcèlement", "description": "Harcèlement moral ou sexuel", "couleur": "#7c2d12"},
    {"nom": "Discrimination", "description": "Actes discriminatoires", "couleur": "#9333ea"},
    {"nom": "Environnement", "description": "Violations environnementales", "couleur": "#059669"},
    {"nom": "Autre", "description": "Autres types de signalements", "couleur": "#6b7280"},
]

DEFAULT_STATUTS = [
    {"nom": "Non traité", "description": "Signalement reçu, en attente de traitement", "couleur": "#6b7280", "ordre": 1, "est_final": False},
    {"nom": "En cours d'examen", "description": "Signalement en cours d'analyse", "couleur": "#f59e0b", "ordre": 2, "est_final": False},
    {"nom": "En enquête", "description": "Enquête en cours", "couleur": "#3b82f6", "ordre": 3, "est_final": False},
    {"nom": "Résolu", "description": "Signalement traité et résolu", "couleur": "#10b981", "ordre": 4, "est_final": True},
    {"nom": "Rejeté", "description": "Signalement rejeté après examen", "couleur": "#ef4444", "ordre": 5, "est_final": True},
    {"nom": "Classé sans suite", "description": "Signalement classé sans suite", "couleur": "#6b7280", "ordre": 6, "est_final": True},
]

DEFAULT_ADMINS = [
    {"email": "admin@denonce.tg", "nom": "Super Administrateur", "password": "admin123", "role": models.ROLE_SUPER_ADMIN},
    {"email": "moderateur@denonce.tg", "nom": "Modérateur Principal", "password": "admin456", "role": models.ROLE_ADMIN},
]


def seed(db: Session):
    created = {"categories": 0, "statuts": 0, "administrateurs": 0}

    for data in DEFAULT_CATEGORIES:
        if not db.query(models.Categorie).filter(models.Categorie.nom == data["nom"]).first():
            db.add(models.Categorie(**data))
            created["categories"] += 1

    for data in DEFAULT_STATUTS:
        if not db.query(models.Statut).filter(models.Statut.nom == data["nom"]).first():
            db.add(models.Statut(**data))
            created["statuts"] += 1

    for data in DEFAULT_ADMINS:
        if not db.query(models.Administrateur).filter(models.Administrateur.email == data["email"]).first():
            db.add(models.Administrateur(
                email=data["email"],
                nom=data["nom"],
                mot_de_passe=get_password_hash(data["password"]),
                role=data["role"],
            ))
            created["administrateurs"] += 1

    db.commit()
    logger.info(
        "seed done: %d categories, %d statuts, %d administrateurs created",
        created["categories"], created["statuts"], created["administrateurs"]
    )
    return created


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
