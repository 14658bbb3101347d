from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.logging import get_logger
from ..exceptions import CategorieNotFound, DuplicateName

logger = get_logger(__name__)


def _report_counts(db: Session, column):
    return dict(
        db.query(column, func.count(models.Signalement.id)).group_by(column).all()
    )


#categories
def list_active_categories(db: Session):
    return db.query(models.Categorie).filter(
        models.Categorie.active == True
    ).order_by(models.Categorie.nom.asc()).all()


def list_categories(db: Session):
    categories = db.query(models.Categorie).order_by(models.Categorie.nom.asc()).all()
    counts = _report_counts(db, models.Signalement.categorie_id)
    for categorie in categories:
        categorie.nombre_signalements = counts.get(categorie.id, 0)
    return categories


def create_categorie(db: Session, data: schemas.CategorieCreate) -> models.Categorie:
    categorie = models.Categorie(
        nom=data.nom,
        description=data.description,
        couleur=data.couleur,
    )
    db.add(categorie)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateName("Une catégorie avec ce nom existe déjà.")

    db.refresh(categorie)
    logger.info("categorie %s created", categorie.id)
    return categorie


def update_categorie(db: Session, categorie_id: str, data: schemas.CategorieUpdate) -> models.Categorie:
    """Partial update. ``active=False`` is how a category is retired; rows are never deleted."""
    categorie = db.query(models.Categorie).filter(models.Categorie.id == categorie_id).first()
    if categorie is None:
        raise CategorieNotFound()

    changes = data.model_dump(exclude_unset=True)

    # an empty name is ignored rather than blanking the category
    if not changes.get("nom"):
        changes.pop("nom", None)
    if changes.get("active") is None:
        changes.pop("active", None)

    for key, value in changes.items():
        setattr(categorie, key, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateName("Une catégorie avec ce nom existe déjà.")

    db.refresh(categorie)
    return categorie


#statuts
def list_statuts(db: Session):
    statuts = db.query(models.Statut).order_by(models.Statut.ordre.asc()).all()
    counts = _report_counts(db, models.Signalement.statut_id)
    for statut in statuts:
        statut.nombre_signalements = counts.get(statut.id, 0)
    return statuts


def create_statut(db: Session, data: schemas.StatutCreate) -> models.Statut:
    statut = models.Statut(
        nom=data.nom,
        description=data.description,
        couleur=data.couleur,
        ordre=data.ordre or 0,
        est_final=data.est_final or False,
    )
    db.add(statut)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateName("Un statut avec ce nom existe déjà.")

    db.refresh(statut)
    logger.info("statut %s created", statut.id)
    return statut
