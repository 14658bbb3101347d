from sqlalchemy import Column, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base, generate_id

class HistoriqueStatut(Base):
    __tablename__ = "historique_statuts"

    id = Column(String, primary_key=True, default=generate_id)

    signalement_id = Column(String, ForeignKey("signalements.id", ondelete="CASCADE"), nullable=False, index=True)

    # null for a report's first recorded transition
    ancien_statut_id = Column(String, ForeignKey("statuts.id"), nullable=True)
    nouveau_statut_id = Column(String, ForeignKey("statuts.id"), nullable=False)

    admin_id = Column(String, ForeignKey("administrateurs.id"), nullable=False)
    commentaire = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    signalement = relationship("Signalement", back_populates="historique_statuts")
    ancien_statut = relationship("Statut", foreign_keys=[ancien_statut_id])
    nouveau_statut = relationship("Statut", foreign_keys=[nouveau_statut_id])
    administrateur = relationship("Administrateur", back_populates="historique_statuts")
