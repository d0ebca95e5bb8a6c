from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth.dependencies import get_current_active_user
from app.api.auth.models import User
from app.api.ratings.schemas import ContentAverage, RatingInfo, RatingRequest
from app.api.ratings.service import RatingService
from app.core.responses import ApiResponse, ok
from app.database.database import get_db

router = APIRouter(prefix="/api/v1/ratings", tags=["ratings"])


def get_rating_service(db: Session = Depends(get_db)) -> RatingService:
    return RatingService(db)


@router.post("", response_model=ApiResponse[RatingInfo])
async def upsert_rating(
        data: RatingRequest,
        current_user: User = Depends(get_current_active_user),
        rating_service: RatingService = Depends(get_rating_service)
):
    rating = rating_service.upsert(current_user.id, data.visualizacion_id, data.puntuacion)
    return ok(rating, "Calificación guardada exitosamente")


@router.get("/content/{content_id}/average", response_model=ApiResponse[ContentAverage])
async def content_average(content_id: int, rating_service: RatingService = Depends(get_rating_service)):
    average = rating_service.average_for_content(content_id)
    if average.total_calificaciones == 0:
        return ok(average, "Este contenido aún no tiene calificaciones")
    return ok(average, "Promedio obtenido")


@router.get("/{viewing_id}", response_model=ApiResponse[RatingInfo])
async def get_rating(
        viewing_id: int,
        current_user: User = Depends(get_current_active_user),
        rating_service: RatingService = Depends(get_rating_service)
):
    return ok(rating_service.get(current_user.id, viewing_id), "Calificación obtenida")


@router.delete("/{viewing_id}", response_model=ApiResponse[bool])
async def delete_rating(
        viewing_id: int,
        current_user: User = Depends(get_current_active_user),
        rating_service: RatingService = Depends(get_rating_service)
):
    return ok(rating_service.delete(current_user.id, viewing_id), "Calificación eliminada exitosamente")
