from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import datetime

from .. import models
from ..core.security import get_password_hash
from ..exceptions import DuplicateEmail, InvalidRole

ROLES = (models.ROLE_ADMIN, models.ROLE_SUPER_ADMIN)


def create_admin(db: Session, email: str, nom: str, password: str, role: str | None = None):
    role = role or models.ROLE_ADMIN
    if role not in ROLES:
        raise InvalidRole()

    existing = db.query(models.Administrateur).filter(models.Administrateur.email == email).first()
    if existing:
        raise DuplicateEmail()

    new_admin = models.Administrateur(
        email=email,
        nom=nom,
        mot_de_passe=get_password_hash(password),
        role=role,
        created_at=datetime.utcnow()
    )
    db.add(new_admin)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent insert of the same email
        db.rollback()
        raise DuplicateEmail()

    db.refresh(new_admin)
    return new_admin


def list_admins(db: Session):
    return db.query(models.Administrateur).order_by(models.Administrateur.created_at.desc()).all()
