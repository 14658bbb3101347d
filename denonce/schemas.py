from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import List, Optional

#categories
class CategorieCreate(BaseModel):
    nom: str = Field(..., min_length=1)
    description: str | None = None
    couleur: str | None = None

class CategorieUpdate(BaseModel):
    nom: Optional[str] = None
    description: Optional[str] = None
    couleur: Optional[str] = None
    active: Optional[bool] = None

class CategoriePublic(BaseModel):
    id: str
    nom: str
    description: str | None
    couleur: str | None

    class Config:
        from_attributes = True

class CategorieResponse(CategoriePublic):
    active: bool
    created_at: datetime

class CategorieWithCount(CategorieResponse):
    nombre_signalements: int = 0


#statuts
class StatutCreate(BaseModel):
    nom: str = Field(..., min_length=1)
    description: str | None = None
    couleur: str | None = None
    ordre: int = 0
    est_final: bool = False

class StatutPublic(BaseModel):
    id: str
    nom: str
    description: str | None
    couleur: str | None

    class Config:
        from_attributes = True

class StatutResponse(StatutPublic):
    ordre: int
    est_final: bool
    created_at: datetime

class StatutWithCount(StatutResponse):
    nombre_signalements: int = 0

class StatutRef(BaseModel):
    id: str
    nom: str

    class Config:
        from_attributes = True


#signalements
class SignalementCreate(BaseModel):
    titre: str | None = None
    description: str | None = None
    categorie_id: str | None = None
    lieu: str | None = None
    media_url: str | None = None

class SignalementResponse(BaseModel):
    id: str
    titre: str
    description: str
    categorie_id: str
    statut_id: str
    lieu: str | None
    media_url: str | None
    votes: int
    code_suivi: str
    created_at: datetime
    updated_at: datetime
    categorie: CategoriePublic
    statut: StatutPublic

    class Config:
        from_attributes = True

class SignalementListItem(SignalementResponse):
    nombre_commentaires: int = 0


#commentaires
class CommentaireCreate(BaseModel):
    message: str | None = None

class CommentaireResponse(BaseModel):
    id: str
    message: str
    signalement_id: str
    created_at: datetime

    class Config:
        from_attributes = True


#status history
class AdminRef(BaseModel):
    nom: str
    email: str

    class Config:
        from_attributes = True

class HistoriqueStatutResponse(BaseModel):
    id: str
    commentaire: str | None
    created_at: datetime
    ancien_statut: StatutRef | None
    nouveau_statut: StatutRef
    administrateur: AdminRef

    class Config:
        from_attributes = True

class SignalementDetail(SignalementResponse):
    commentaires: List[CommentaireResponse] = []
    historique_statuts: List[HistoriqueStatutResponse] = []


#tracking
class StatutSummary(BaseModel):
    nom: str
    description: str | None
    couleur: str | None
    est_final: bool

    class Config:
        from_attributes = True

class SuiviStatutResponse(BaseModel):
    code_suivi: str
    titre: str
    votes: int
    created_at: datetime
    updated_at: datetime
    statut: StatutSummary

    class Config:
        from_attributes = True

class VoteResponse(BaseModel):
    message: str
    votes: int


#status change
class StatutChange(BaseModel):
    nouveau_statut_id: str
    commentaire: str | None = None

class StatutChangeResponse(BaseModel):
    message: str
    signalement: SignalementResponse
    updated_by: AdminRef


#administrators
class AdminLogin(BaseModel):
    email: str
    mot_de_passe: str

class AdminSummary(BaseModel):
    id: str
    nom: str
    email: str
    role: str

    class Config:
        from_attributes = True

class AdminMe(AdminSummary):
    actif: bool

class AdminMeResponse(BaseModel):
    admin: AdminMe

class LoginResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    admin: AdminSummary

class AdminCreate(BaseModel):
    email: EmailStr
    nom: str
    mot_de_passe: str = Field(..., min_length=6)
    role: str = "admin"

    @field_validator('nom', 'mot_de_passe')
    @classmethod
    def not_empty(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError('Champ requis.')
        return v

class AdminResponse(BaseModel):
    id: str
    email: str
    nom: str
    role: str
    actif: bool
    created_at: datetime

    class Config:
        from_attributes = True


#dashboard
class CountByStatut(BaseModel):
    statut_id: str
    nom: str
    couleur: str | None
    count: int

class CountByCategorie(BaseModel):
    categorie_id: str
    nom: str
    couleur: str | None
    count: int

class AdminInfo(BaseModel):
    nom: str
    role: str

class DashboardResponse(BaseModel):
    total_signalements: int
    signalements_by_statut: List[CountByStatut]
    signalements_by_categorie: List[CountByCategorie]
    recent_signalements: List[SignalementResponse]
    admin_info: AdminInfo

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

class SignalementPage(BaseModel):
    signalements: List[SignalementListItem]
    pagination: Pagination
