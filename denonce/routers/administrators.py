from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from .. import schemas
from ..core.security import require_capability
from ..crud import admin_crud
from ..dependency import get_db

router = APIRouter(prefix="/admin/administrateurs", tags=["Admin - Utilisateurs"])


@router.get(
    "",
    response_model=List[schemas.AdminResponse],
    dependencies=[Depends(require_capability("administrateurs:read"))],
)
def list_administrators(db: Session = Depends(get_db)):
    return admin_crud.list_admins(db)


@router.post(
    "",
    response_model=schemas.AdminResponse,
    dependencies=[Depends(require_capability("administrateurs:write"))],
)
def create_administrator(data: schemas.AdminCreate, db: Session = Depends(get_db)):
    return admin_crud.create_admin(
        db=db,
        email=data.email,
        nom=data.nom,
        password=data.mot_de_passe,
        role=data.role,
    )
