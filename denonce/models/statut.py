from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base, generate_id

class Statut(Base):
    __tablename__ = "statuts"

    id = Column(String, primary_key=True, default=generate_id)
    nom = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    couleur = Column(String, nullable=True)
    ordre = Column(Integer, default=0, nullable=False)
    est_final = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    signalements = relationship("Signalement", back_populates="statut")
