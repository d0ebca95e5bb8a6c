from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.core.schemas import CamelModel


class BasicStats(CamelModel):
    total_contenidos_vistos: int = 0
    total_peliculas: int = 0
    total_series: int = 0
    promedio_calificacion: Optional[float] = None
    total_resenas: int = 0
    total_episodios_vistos: int = 0


class RatingBucket(CamelModel):
    puntuacion: int
    cantidad: int = 0


class MonthlyActivity(CamelModel):
    mes: str = Field(..., description="YYYY-MM")
    peliculas: int = 0
    series: int = 0


class RecentViewing(CamelModel):
    contenido_id: int
    titulo: Optional[str] = None
    tipo_contenido: str = ""
    fecha_visualizacion: Optional[datetime] = None
    puntuacion: Optional[float] = None


class TopRatedViewing(CamelModel):
    contenido_id: int
    titulo: Optional[str] = None
    tipo_contenido: str = ""
    puntuacion: float


class DetailedStats(BasicStats):
    total_calificaciones: int = 0
    minutos_totales_estimados: int = 0
    horas_totales_estimadas: int = 0
    dias_totales_estimados: int = 0
    distribucion_calificaciones: List[RatingBucket] = Field(default_factory=list)
    actividad_mensual: List[MonthlyActivity] = Field(default_factory=list)
    contenidos_recientes: List[RecentViewing] = Field(default_factory=list)
    mejores_calificados: List[TopRatedViewing] = Field(default_factory=list)
