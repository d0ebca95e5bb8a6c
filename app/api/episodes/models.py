from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database.database import Base


class EpisodeWatched(Base):
    """
    Episodio visto de una serie (ids de temporada y episodio de TMDB)
    """
    __tablename__ = "episodes_watched"

    id = Column(Integer, primary_key=True, index=True)
    viewing_id = Column(Integer, ForeignKey("viewings.id", ondelete="CASCADE"), nullable=False)
    season_id = Column(Integer, nullable=False)
    episode_id = Column(Integer, nullable=False)

    watched_at = Column(DateTime(timezone=True), server_default=func.now())

    viewing = relationship("Viewing", back_populates="episodes")

    __table_args__ = (
        UniqueConstraint("viewing_id", "season_id", "episode_id", name="uq_episode_viewing_season_episode"),
    )
