from sqlalchemy import Column, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base, generate_id

class Commentaire(Base):
    __tablename__ = "commentaires"

    id = Column(String, primary_key=True, default=generate_id)
    message = Column(Text, nullable=False)
    signalement_id = Column(String, ForeignKey("signalements.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    signalement = relationship("Signalement", back_populates="commentaires")
