from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from .. import schemas
from ..core.security import AuthContext, get_current_admin
from ..crud import report_crud
from ..dependency import get_db

router = APIRouter(prefix="/admin", tags=["Admin - Signalements"])


@router.get("/dashboard", response_model=schemas.DashboardResponse, tags=["Admin - Dashboard"])
def dashboard(db: Session = Depends(get_db), auth: AuthContext = Depends(get_current_admin)):
    return report_crud.dashboard_stats(db, auth.admin)


@router.get("/signalements", response_model=schemas.SignalementPage)
def list_signalements(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    statut: str | None = Query(None, description="filtre par statut_id"),
    categorie: str | None = Query(None, description="filtre par categorie_id"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_admin)
):
    return report_crud.list_signalements_paginated(db, page, limit, statut, categorie)


@router.get("/signalements/{signalement_id}", response_model=schemas.SignalementDetail)
def signalement_detail(
    signalement_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_admin)
):
    return report_crud.get_signalement_detail(db, signalement_id)


@router.patch("/signalements/{signalement_id}/statut", response_model=schemas.StatutChangeResponse)
def change_statut(
    signalement_id: str,
    data: schemas.StatutChange,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_current_admin)
):
    signalement = report_crud.change_status(
        db,
        signalement_id,
        data.nouveau_statut_id,
        auth.admin,
        data.commentaire,
    )
    return {
        "message": "Statut mis à jour avec succès",
        "signalement": signalement,
        "updated_by": auth.admin,
    }
