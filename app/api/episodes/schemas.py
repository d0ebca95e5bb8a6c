from datetime import datetime
from typing import Optional

from pydantic import Field

from app.core.schemas import CamelModel


class EpisodeRequest(CamelModel):
    """Marcar un episodio como visto"""
    visualizacion_id: int = Field(..., gt=0, description="ID de la visualización")
    temporada_id: int = Field(..., description="ID de temporada en TMDB")
    episodio_id: int = Field(..., description="ID de episodio en TMDB")


class EpisodeInfo(CamelModel):
    id: int
    temporada_id: int
    episodio_id: int
    fecha_visto: Optional[datetime] = None

    @classmethod
    def from_model(cls, episode) -> "EpisodeInfo":
        return cls(
            id=episode.id,
            temporada_id=episode.season_id,
            episodio_id=episode.episode_id,
            fecha_visto=episode.watched_at
        )
