from dataclasses import dataclass
from datetime import datetime, timedelta

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from .config import settings
from .logging import get_logger
from .. import models
from ..dependency import get_db

logger = get_logger(__name__)

SECRET_KEY = settings.JWT_SECRET
ALGORITHM = settings.JWT_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/admin/login", auto_error=False)


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode_password(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_encode_password(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed hash in the store
        return False


_DUMMY_HASH = None


def _dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = get_password_hash("denonce-timing-equalizer")
    return _DUMMY_HASH


def authenticate_admin(db: Session, email: str, password: str):
    """Return the active administrator matching the credentials, or None.

    Unknown emails and wrong passwords are indistinguishable to the caller,
    and both paths pay for one bcrypt check.
    """
    admin = db.query(models.Administrateur).filter(
        models.Administrateur.email == email,
        models.Administrateur.actif == True
    ).first()

    if admin is None:
        verify_password(password, _dummy_hash())
        return None

    if not verify_password(password, admin.mot_de_passe):
        return None

    return admin


def create_access_token(admin: models.Administrateur, expires_delta: timedelta | None = None) -> str:
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": admin.id,
        "admin_id": admin.id,
        "email": admin.email,
        "role": admin.role,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry. Raises JWTError on any failure."""
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


@dataclass
class AuthContext:
    admin: models.Administrateur
    claims: dict

    @property
    def role(self) -> str | None:
        return self.claims.get("role")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_admin(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> AuthContext:
    if not token:
        raise _unauthorized("Token manquant.")

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise _unauthorized("Token invalide.")

    admin_id = payload.get("admin_id") or payload.get("sub")
    if not admin_id:
        raise _unauthorized("Token invalide.")

    # the account may have been deactivated after the token was issued
    admin = db.query(models.Administrateur).filter(
        models.Administrateur.id == admin_id,
        models.Administrateur.actif == True
    ).first()
    if admin is None:
        raise _unauthorized("Administrateur introuvable ou inactif.")

    return AuthContext(admin=admin, claims=payload)


# roles
ROLE_RANK = {
    models.ROLE_ADMIN: 1,
    models.ROLE_SUPER_ADMIN: 2,
}

# operation -> minimum role; anything not listed needs a plain admin
CAPABILITIES = {
    "categories:write": models.ROLE_SUPER_ADMIN,
    "statuts:write": models.ROLE_SUPER_ADMIN,
    "administrateurs:read": models.ROLE_SUPER_ADMIN,
    "administrateurs:write": models.ROLE_SUPER_ADMIN,
}


def has_capability(role: str | None, capability: str) -> bool:
    required = CAPABILITIES.get(capability, models.ROLE_ADMIN)
    return ROLE_RANK.get(role, 0) >= ROLE_RANK[required]


def require_capability(capability: str):
    def checker(auth: AuthContext = Depends(get_current_admin)) -> AuthContext:
        if not has_capability(auth.role, capability):
            logger.warning("forbidden: admin %s (%s) attempted %s", auth.admin.id, auth.role, capability)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Accès réservé aux super administrateurs."
            )
        return auth

    return checker
