"""Report lifecycle: submission, votes, comments, tracking and status changes."""

import math
import secrets
import string
import time

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from .. import models, schemas
from ..core.config import settings
from ..core.logging import get_logger
from ..exceptions import (
    DefaultStatusMissing,
    InvalidCategory,
    InvalidStatus,
    InvalidTrackingCode,
    MissingFields,
    MissingMessage,
    SignalementNotFound,
    TrackingCodeConflict,
    TrackingCodeExhausted,
)

logger = get_logger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
RANDOM_TOKEN_LENGTH = 5


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("negative numbers have no base36 token")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_tracking_code() -> str:
    """``<base36 ms timestamp>-<5 random base36 chars>``, uppercased."""
    timestamp = to_base36(int(time.time() * 1000))
    random_part = "".join(secrets.choice(_BASE36) for _ in range(RANDOM_TOKEN_LENGTH))
    return f"{timestamp}-{random_part}".upper()


def allocate_tracking_code(db: Session, max_attempts: int | None = None, generator=None) -> str:
    """Draw candidates until one is unused in the store.

    The existence check and the later insert are separate statements; the
    unique constraint on ``code_suivi`` still has the final word.
    """
    max_attempts = max_attempts or settings.TRACKING_CODE_MAX_ATTEMPTS
    generator = generator or generate_tracking_code

    for attempt in range(1, max_attempts + 1):
        code = generator()
        existing = db.query(models.Signalement.id).filter(
            models.Signalement.code_suivi == code
        ).first()
        if existing is None:
            return code
        logger.warning("tracking code collision (attempt %d/%d)", attempt, max_attempts)

    logger.error("could not allocate a unique tracking code after %d attempts", max_attempts)
    raise TrackingCodeExhausted()


def get_default_status(db: Session) -> models.Statut:
    """Lowest-ranked non-final status."""
    statut = db.query(models.Statut).filter(
        models.Statut.est_final == False
    ).order_by(models.Statut.ordre.asc(), models.Statut.created_at.asc()).first()

    if statut is None:
        logger.error("no default status provisioned, reports cannot be created")
        raise DefaultStatusMissing()
    return statut


def _present(value: str | None) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _violates_code_suivi(exc: IntegrityError) -> bool:
    # sqlite names the column, postgres the unique index on it
    return "code_suivi" in str(exc.orig)


def create_signalement(db: Session, data: schemas.SignalementCreate, code_generator=None) -> models.Signalement:
    if not (_present(data.titre) and _present(data.description) and _present(data.categorie_id)):
        raise MissingFields()

    categorie = db.query(models.Categorie).filter(
        models.Categorie.id == data.categorie_id,
        models.Categorie.active == True
    ).first()
    if categorie is None:
        raise InvalidCategory()

    statut = get_default_status(db)
    code_suivi = allocate_tracking_code(db, generator=code_generator)

    signalement = models.Signalement(
        titre=data.titre,
        description=data.description,
        categorie_id=categorie.id,
        statut_id=statut.id,
        lieu=data.lieu,
        media_url=data.media_url,
        code_suivi=code_suivi,
    )
    db.add(signalement)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not _violates_code_suivi(e):
            raise
        logger.error("tracking code %s rejected by the store on insert", code_suivi)
        raise TrackingCodeConflict()

    db.refresh(signalement)
    logger.info("signalement created with tracking code %s", code_suivi)
    return signalement


def _with_relations(query):
    return query.options(
        joinedload(models.Signalement.categorie),
        joinedload(models.Signalement.statut),
    )


def _attach_comment_counts(db: Session, signalements):
    ids = [s.id for s in signalements]
    counts = {}
    if ids:
        counts = dict(
            db.query(models.Commentaire.signalement_id, func.count(models.Commentaire.id))
            .filter(models.Commentaire.signalement_id.in_(ids))
            .group_by(models.Commentaire.signalement_id)
            .all()
        )
    for s in signalements:
        s.nombre_commentaires = counts.get(s.id, 0)
    return signalements


def list_signalements(db: Session):
    signalements = _with_relations(db.query(models.Signalement)).order_by(
        models.Signalement.created_at.desc()
    ).all()
    return _attach_comment_counts(db, signalements)


def vote(db: Session, signalement_id: str) -> int:
    """Add exactly one vote and return the new total."""
    updated = db.query(models.Signalement).filter(
        models.Signalement.id == signalement_id
    ).update(
        {models.Signalement.votes: models.Signalement.votes + 1},
        synchronize_session=False,
    )
    if not updated:
        db.rollback()
        raise SignalementNotFound()

    votes = db.query(models.Signalement.votes).filter(
        models.Signalement.id == signalement_id
    ).scalar()
    db.commit()
    return votes


def add_commentaire(db: Session, signalement_id: str, message: str | None) -> models.Commentaire:
    if not _present(message):
        raise MissingMessage()

    exists = db.query(models.Signalement.id).filter(models.Signalement.id == signalement_id).first()
    if exists is None:
        raise SignalementNotFound()

    commentaire = models.Commentaire(message=message, signalement_id=signalement_id)
    db.add(commentaire)
    db.commit()
    db.refresh(commentaire)
    return commentaire


def list_commentaires(db: Session, signalement_id: str):
    return db.query(models.Commentaire).filter(
        models.Commentaire.signalement_id == signalement_id
    ).order_by(models.Commentaire.created_at.asc()).all()


def _detail_query(db: Session):
    return _with_relations(db.query(models.Signalement)).options(
        selectinload(models.Signalement.commentaires),
        selectinload(models.Signalement.historique_statuts).joinedload(models.HistoriqueStatut.ancien_statut),
        selectinload(models.Signalement.historique_statuts).joinedload(models.HistoriqueStatut.nouveau_statut),
        selectinload(models.Signalement.historique_statuts).joinedload(models.HistoriqueStatut.administrateur),
    )


def get_by_code(db: Session, code_suivi: str) -> models.Signalement:
    signalement = _detail_query(db).filter(models.Signalement.code_suivi == code_suivi).first()
    if signalement is None:
        raise InvalidTrackingCode()
    return signalement


def get_status_by_code(db: Session, code_suivi: str) -> models.Signalement:
    signalement = db.query(models.Signalement).options(
        joinedload(models.Signalement.statut)
    ).filter(models.Signalement.code_suivi == code_suivi).first()
    if signalement is None:
        raise InvalidTrackingCode("Code de suivi invalide.")
    return signalement


def get_signalement_detail(db: Session, signalement_id: str) -> models.Signalement:
    signalement = _detail_query(db).filter(models.Signalement.id == signalement_id).first()
    if signalement is None:
        raise SignalementNotFound()
    return signalement


def change_status(
    db: Session,
    signalement_id: str,
    nouveau_statut_id: str,
    admin: models.Administrateur,
    commentaire: str | None = None,
) -> models.Signalement:
    """Move a report to another status and record who did it.

    The history row and the report update share one commit: either both
    are persisted or neither is. Any status may follow any other.
    """
    signalement = db.query(models.Signalement).filter(models.Signalement.id == signalement_id).first()
    if signalement is None:
        raise SignalementNotFound()

    nouveau_statut = db.query(models.Statut).filter(models.Statut.id == nouveau_statut_id).first()
    if nouveau_statut is None:
        raise InvalidStatus()

    ancien_statut_id = signalement.statut_id

    try:
        db.add(models.HistoriqueStatut(
            signalement_id=signalement.id,
            ancien_statut_id=ancien_statut_id,
            nouveau_statut_id=nouveau_statut.id,
            admin_id=admin.id,
            commentaire=commentaire,
        ))
        signalement.statut_id = nouveau_statut.id
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("status change rolled back for signalement %s", signalement_id)
        raise

    logger.info(
        "signalement %s moved from status %s to %s by admin %s",
        signalement.id, ancien_statut_id, nouveau_statut.id, admin.id
    )
    return _with_relations(db.query(models.Signalement)).filter(
        models.Signalement.id == signalement.id
    ).one()


def list_signalements_paginated(
    db: Session,
    page: int = 1,
    limit: int = 20,
    statut_id: str | None = None,
    categorie_id: str | None = None,
):
    query = db.query(models.Signalement)
    if statut_id:
        query = query.filter(models.Signalement.statut_id == statut_id)
    if categorie_id:
        query = query.filter(models.Signalement.categorie_id == categorie_id)

    total = query.count()
    signalements = _with_relations(query).order_by(
        models.Signalement.created_at.desc()
    ).offset((page - 1) * limit).limit(limit).all()

    return {
        "signalements": _attach_comment_counts(db, signalements),
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        },
    }


def dashboard_stats(db: Session, admin: models.Administrateur):
    total = db.query(func.count(models.Signalement.id)).scalar()

    by_statut = db.query(
        models.Statut.id, models.Statut.nom, models.Statut.couleur, func.count(models.Signalement.id)
    ).join(
        models.Signalement, models.Signalement.statut_id == models.Statut.id
    ).group_by(models.Statut.id, models.Statut.nom, models.Statut.couleur).order_by(models.Statut.ordre).all()

    by_categorie = db.query(
        models.Categorie.id, models.Categorie.nom, models.Categorie.couleur, func.count(models.Signalement.id)
    ).join(
        models.Signalement, models.Signalement.categorie_id == models.Categorie.id
    ).group_by(models.Categorie.id, models.Categorie.nom, models.Categorie.couleur).order_by(models.Categorie.nom).all()

    recent = _with_relations(db.query(models.Signalement)).order_by(
        models.Signalement.created_at.desc()
    ).limit(10).all()

    return {
        "total_signalements": total,
        "signalements_by_statut": [
            {"statut_id": sid, "nom": nom, "couleur": couleur, "count": count}
            for sid, nom, couleur, count in by_statut
        ],
        "signalements_by_categorie": [
            {"categorie_id": cid, "nom": nom, "couleur": couleur, "count": count}
            for cid, nom, couleur, count in by_categorie
        ],
        "recent_signalements": recent,
        "admin_info": {"nom": admin.nom, "role": admin.role},
    }
