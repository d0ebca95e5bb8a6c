from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.core.schemas import CamelModel


class RatingRequest(CamelModel):
    """Calificar una visualización"""
    visualizacion_id: int = Field(..., gt=0, description="ID de la visualización")
    puntuacion: float = Field(..., ge=1, le=10, description="Puntuación 1-10, un decimal")

    @field_validator("puntuacion")
    @classmethod
    def validate_precision(cls, v: float) -> float:
        if round(v, 1) != v:
            raise ValueError("La puntuación admite un solo decimal")
        return v


class RatingInfo(CamelModel):
    calificacion_id: int
    puntuacion: float
    fecha_calificacion: Optional[datetime] = None
    fecha_actualizacion: Optional[datetime] = None

    @classmethod
    def from_model(cls, rating) -> "RatingInfo":
        return cls(
            calificacion_id=rating.id,
            puntuacion=rating.score,
            fecha_calificacion=rating.created_at,
            fecha_actualizacion=rating.updated_at
        )


class ContentAverage(CamelModel):
    contenido_id: int
    promedio: Optional[float] = Field(None, description="Media redondeada a un decimal")
    total_calificaciones: int = 0
