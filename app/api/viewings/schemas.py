from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.api.episodes.schemas import EpisodeInfo
from app.api.ratings.schemas import RatingInfo
from app.api.reviews.schemas import ReviewInfo
from app.core.schemas import CamelModel


class RegisterViewingRequest(CamelModel):
    """Añadir un contenido a la lista del usuario"""
    contenido_id: int = Field(..., gt=0, description="ID del contenido en TMDB")
    tipo_id: int = Field(..., ge=1, le=2, description="1 = Película, 2 = Serie")
    titulo: Optional[str] = Field(None, max_length=255, description="Título")


class ViewingResponse(CamelModel):
    visualizacion_id: int
    contenido_id: int
    titulo: Optional[str] = None
    tipo_contenido: str = ""
    fecha_visualizacion: Optional[datetime] = None
    calificacion: Optional[RatingInfo] = None
    resena: Optional[ReviewInfo] = None
    episodios_vistos: List[EpisodeInfo] = Field(default_factory=list)

    @classmethod
    def from_model(cls, viewing) -> "ViewingResponse":
        episodes = sorted(viewing.episodes, key=lambda e: (e.season_id, e.episode_id))
        return cls(
            visualizacion_id=viewing.id,
            contenido_id=viewing.content_id,
            titulo=viewing.title,
            tipo_contenido=viewing.type_name,
            fecha_visualizacion=viewing.viewed_at,
            calificacion=RatingInfo.from_model(viewing.rating) if viewing.rating else None,
            resena=ReviewInfo.from_model(viewing.review) if viewing.review else None,
            episodios_vistos=[EpisodeInfo.from_model(e) for e in episodes]
        )
