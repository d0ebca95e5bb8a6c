from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database.database import Base

MOVIE_TYPE_ID = 1
SERIES_TYPE_ID = 2

CONTENT_TYPE_NAMES = {
    MOVIE_TYPE_ID: "Película",
    SERIES_TYPE_ID: "Serie",
}


class ContentType(Base):
    """
    Tipos de contenido (datos de referencia, no cambian)
    """
    __tablename__ = "content_types"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(20), nullable=False)


class CachedContent(Base):
    """
    Copia local de un contenido de TMDB. Se crea con la primera
    visualización y no se vuelve a actualizar.
    """
    __tablename__ = "cached_content"

    id = Column(Integer, primary_key=True, autoincrement=False)
    type_id = Column(Integer, ForeignKey("content_types.id"), nullable=False)
    title = Column(String(255))
    synced_at = Column(DateTime(timezone=True), server_default=func.now())

    content_type = relationship("ContentType")


class Viewing(Base):
    """
    Visualización: un usuario declara haber visto un contenido
    """
    __tablename__ = "viewings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content_id = Column(Integer, ForeignKey("cached_content.id"), nullable=False, index=True)
    type_id = Column(Integer, ForeignKey("content_types.id"), nullable=False)

    viewed_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="viewings")
    content = relationship("CachedContent")
    content_type = relationship("ContentType")

    rating = relationship("Rating", back_populates="viewing", uselist=False, cascade="all, delete-orphan")
    review = relationship("Review", back_populates="viewing", uselist=False, cascade="all, delete-orphan")
    episodes = relationship("EpisodeWatched", back_populates="viewing", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="uq_viewing_user_content"),
        Index("idx_viewing_user_viewed", "user_id", "viewed_at"),
    )

    @property
    def title(self):
        return self.content.title if self.content else None

    @property
    def type_name(self) -> str:
        if self.content_type is not None:
            return self.content_type.name
        return CONTENT_TYPE_NAMES.get(self.type_id, "")
