from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database.database import Base


class Review(Base):
    """
    Reseña de una visualización, como máximo una por visualización
    """
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    viewing_id = Column(
        Integer, ForeignKey("viewings.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    text = Column(Text)
    has_spoilers = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    viewing = relationship("Viewing", back_populates="review")

    __table_args__ = (
        Index("idx_review_created", "created_at"),
    )
