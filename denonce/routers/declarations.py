from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from .. import schemas
from ..crud import catalog_crud, report_crud
from ..dependency import get_db

router = APIRouter(prefix="/declarations", tags=["Signalements"])


@router.post("", response_model=schemas.SignalementResponse)
def create_declaration(data: schemas.SignalementCreate, db: Session = Depends(get_db)):
    return report_crud.create_signalement(db, data)


@router.get("", response_model=List[schemas.SignalementListItem])
def list_declarations(db: Session = Depends(get_db)):
    return report_crud.list_signalements(db)


@router.get("/categories", response_model=List[schemas.CategoriePublic], tags=["Catégories"])
def list_available_categories(db: Session = Depends(get_db)):
    return catalog_crud.list_active_categories(db)


@router.get("/suivi/{code_suivi}", response_model=schemas.SignalementDetail)
def track_declaration(code_suivi: str, db: Session = Depends(get_db)):
    return report_crud.get_by_code(db, code_suivi)


@router.get("/statut/{code_suivi}", response_model=schemas.SuiviStatutResponse)
def declaration_status(code_suivi: str, db: Session = Depends(get_db)):
    return report_crud.get_status_by_code(db, code_suivi)


@router.post("/{signalement_id}/vote", response_model=schemas.VoteResponse)
def vote_declaration(signalement_id: str, db: Session = Depends(get_db)):
    votes = report_crud.vote(db, signalement_id)
    return {"message": "Vote enregistré", "votes": votes}


@router.post("/{signalement_id}/commentaires", response_model=schemas.CommentaireResponse, tags=["Commentaires"])
def add_comment(signalement_id: str, data: schemas.CommentaireCreate, db: Session = Depends(get_db)):
    return report_crud.add_commentaire(db, signalement_id, data.message)


@router.get("/{signalement_id}/commentaires", response_model=List[schemas.CommentaireResponse], tags=["Commentaires"])
def list_comments(signalement_id: str, db: Session = Depends(get_db)):
    return report_crud.list_commentaires(db, signalement_id)
