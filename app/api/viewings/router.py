from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.auth.dependencies import get_current_active_user
from app.api.auth.models import User
from app.api.stats.runtime import TmdbRuntimeEstimator, get_runtime_estimator
from app.api.stats.schemas import BasicStats, DetailedStats
from app.api.stats.service import StatsService
from app.api.viewings.schemas import RegisterViewingRequest, ViewingResponse
from app.api.viewings.service import ViewingService
from app.core.responses import ApiResponse, ok
from app.database.database import get_db

router = APIRouter(prefix="/api/v1/viewings", tags=["viewings"])


def get_viewing_service(db: Session = Depends(get_db)) -> ViewingService:
    return ViewingService(db)


def get_stats_service(
        db: Session = Depends(get_db),
        estimator: TmdbRuntimeEstimator = Depends(get_runtime_estimator)
) -> StatsService:
    return StatsService(db, estimator)


@router.post("", response_model=ApiResponse[ViewingResponse])
async def register_viewing(
        data: RegisterViewingRequest,
        current_user: User = Depends(get_current_active_user),
        viewing_service: ViewingService = Depends(get_viewing_service)
):
    return ok(viewing_service.register_viewing(current_user.id, data), "Visualización registrada exitosamente")


@router.get("", response_model=ApiResponse[List[ViewingResponse]])
async def list_viewings(
        current_user: User = Depends(get_current_active_user),
        viewing_service: ViewingService = Depends(get_viewing_service)
):
    return ok(viewing_service.list_viewings(current_user.id), "Visualizaciones obtenidas")


@router.get("/estadisticas", response_model=ApiResponse[BasicStats])
async def basic_stats(
        current_user: User = Depends(get_current_active_user),
        db: Session = Depends(get_db)
):
    return ok(StatsService(db).basic_stats(current_user.id), "Estadísticas obtenidas")


@router.get("/estadisticas/detalladas", response_model=ApiResponse[DetailedStats])
def detailed_stats(
        recientes: int = Query(5, ge=1, le=50),
        mejores: int = Query(5, ge=1, le=50),
        current_user: User = Depends(get_current_active_user),
        stats_service: StatsService = Depends(get_stats_service)
):
    # síncrono: la estimación de duración consulta TMDB
    return ok(stats_service.detailed_stats(current_user.id, recientes, mejores), "Estadísticas detalladas obtenidas")


@router.get("/{viewing_id}", response_model=ApiResponse[ViewingResponse])
async def get_viewing(
        viewing_id: int,
        current_user: User = Depends(get_current_active_user),
        viewing_service: ViewingService = Depends(get_viewing_service)
):
    return ok(viewing_service.get_viewing(current_user.id, viewing_id), "Visualización obtenida")


@router.delete("/{viewing_id}", response_model=ApiResponse[bool])
async def remove_viewing(
        viewing_id: int,
        current_user: User = Depends(get_current_active_user),
        viewing_service: ViewingService = Depends(get_viewing_service)
):
    return ok(viewing_service.remove_viewing(current_user.id, viewing_id), "Visualización eliminada")
