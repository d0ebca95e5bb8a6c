from datetime import datetime
from typing import Optional

from pydantic import Field

from app.core.schemas import CamelModel

SPOILER_PLACEHOLDER = "[Esta reseña contiene spoilers]"


class ReviewRequest(CamelModel):
    """Escribir o actualizar la reseña de una visualización"""
    visualizacion_id: int = Field(..., gt=0, description="ID de la visualización")
    texto: str = Field(..., min_length=1, description="Texto de la reseña")
    contiene_spoilers: bool = Field(False, description="Contiene spoilers")


class ReviewInfo(CamelModel):
    resena_id: int
    texto: str
    contiene_spoilers: bool
    fecha_resena: Optional[datetime] = None
    fecha_actualizacion: Optional[datetime] = None

    @classmethod
    def from_model(cls, review) -> "ReviewInfo":
        return cls(
            resena_id=review.id,
            texto=review.text or "",
            contiene_spoilers=review.has_spoilers,
            fecha_resena=review.created_at,
            fecha_actualizacion=review.updated_at
        )


class PublicReview(CamelModel):
    """Reseña pública (texto oculto si tiene spoilers y se pide ocultarlos)"""
    resena_id: int
    nombre_usuario: str
    contenido_id: int
    titulo_contenido: Optional[str] = None
    tipo_contenido: str = ""
    texto: str
    contiene_spoilers: bool
    puntuacion: Optional[float] = None
    fecha_resena: Optional[datetime] = None
