from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base, generate_id

class Categorie(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, default=generate_id)
    nom = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    couleur = Column(String, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    signalements = relationship("Signalement", back_populates="categorie")
