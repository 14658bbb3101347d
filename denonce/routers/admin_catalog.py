from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from .. import schemas
from ..core.security import get_current_admin, require_capability
from ..crud import catalog_crud
from ..dependency import get_db

router = APIRouter(prefix="/admin", dependencies=[Depends(get_current_admin)])


@router.get("/categories", response_model=List[schemas.CategorieWithCount], tags=["Admin - Catégories"])
def list_categories(db: Session = Depends(get_db)):
    return catalog_crud.list_categories(db)


@router.post(
    "/categories",
    response_model=schemas.CategorieResponse,
    tags=["Admin - Catégories"],
    dependencies=[Depends(require_capability("categories:write"))],
)
def create_categorie(data: schemas.CategorieCreate, db: Session = Depends(get_db)):
    return catalog_crud.create_categorie(db, data)


@router.patch(
    "/categories/{categorie_id}",
    response_model=schemas.CategorieResponse,
    tags=["Admin - Catégories"],
    dependencies=[Depends(require_capability("categories:write"))],
)
def update_categorie(categorie_id: str, data: schemas.CategorieUpdate, db: Session = Depends(get_db)):
    return catalog_crud.update_categorie(db, categorie_id, data)


@router.get("/statuts", response_model=List[schemas.StatutWithCount], tags=["Admin - Statuts"])
def list_statuts(db: Session = Depends(get_db)):
    return catalog_crud.list_statuts(db)


@router.post(
    "/statuts",
    response_model=schemas.StatutResponse,
    tags=["Admin - Statuts"],
    dependencies=[Depends(require_capability("statuts:write"))],
)
def create_statut(data: schemas.StatutCreate, db: Session = Depends(get_db)):
    return catalog_crud.create_statut(db, data)
