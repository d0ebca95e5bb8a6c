from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database.database import Base


class Rating(Base):
    """
    Calificación 1-10 (un decimal), como máximo una por visualización
    """
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    viewing_id = Column(
        Integer, ForeignKey("viewings.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    score = Column(Numeric(3, 1, asdecimal=False), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    viewing = relationship("Viewing", back_populates="rating")
