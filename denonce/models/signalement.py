from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Text, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base, generate_id

class Signalement(Base):
    __tablename__ = "signalements"

    id = Column(String, primary_key=True, default=generate_id)

    titre = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    lieu = Column(String, nullable=True)
    media_url = Column(String, nullable=True)

    categorie_id = Column(String, ForeignKey("categories.id"), nullable=False, index=True)
    statut_id = Column(String, ForeignKey("statuts.id"), nullable=False, index=True)

    votes = Column(Integer, default=0, nullable=False)

    # public follow-up identifier, never reassigned
    code_suivi = Column(String, unique=True, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (CheckConstraint("votes >= 0", name="ck_signalements_votes_non_negative"),)

    categorie = relationship("Categorie", back_populates="signalements")
    statut = relationship("Statut", back_populates="signalements")

    commentaires = relationship(
        "Commentaire",
        back_populates="signalement",
        cascade="all, delete-orphan",
        order_by="Commentaire.created_at",
    )

    historique_statuts = relationship(
        "HistoriqueStatut",
        back_populates="signalement",
        cascade="all, delete-orphan",
        order_by="HistoriqueStatut.created_at",
    )
