from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base, generate_id

ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"

class Administrateur(Base):
    __tablename__ = "administrateurs"

    id = Column(String, primary_key=True, default=generate_id)
    email = Column(String, unique=True, nullable=False, index=True)
    nom = Column(String, nullable=False)
    mot_de_passe = Column(String, nullable=False)
    role = Column(String, default=ROLE_ADMIN, nullable=False)
    actif = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    historique_statuts = relationship("HistoriqueStatut", back_populates="administrateur")
