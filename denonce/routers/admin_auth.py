from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from .. import schemas
from ..core.logging import get_logger
from ..core.security import AuthContext, authenticate_admin, create_access_token, get_current_admin
from ..dependency import get_db

router = APIRouter(prefix="/admin", tags=["Admin"])

logger = get_logger(__name__)


@router.post("/login", response_model=schemas.LoginResponse)
def login(credentials: schemas.AdminLogin, db: Session = Depends(get_db)):
    admin = authenticate_admin(db, credentials.email, credentials.mot_de_passe)
    if admin is None:
        logger.warning("failed administrator login")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Identifiants invalides")

    return {
        "message": "Connexion réussie",
        "token": create_access_token(admin),
        "token_type": "bearer",
        "admin": admin,
    }


@router.get("/me", response_model=schemas.AdminMeResponse)
def read_me(auth: AuthContext = Depends(get_current_admin)):
    return {"admin": auth.admin}
