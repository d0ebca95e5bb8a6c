from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.auth.dependencies import get_current_active_user
from app.api.auth.models import User
from app.api.reviews.schemas import PublicReview, ReviewInfo, ReviewRequest
from app.api.reviews.service import ReviewService
from app.core.responses import ApiResponse, ok
from app.database.database import get_db

router = APIRouter(prefix="/api/v1/reviews", tags=["reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


@router.post("", response_model=ApiResponse[ReviewInfo])
async def upsert_review(
        data: ReviewRequest,
        current_user: User = Depends(get_current_active_user),
        review_service: ReviewService = Depends(get_review_service)
):
    return ok(review_service.upsert(current_user.id, data), "Reseña guardada exitosamente")


@router.get("/recent", response_model=ApiResponse[List[PublicReview]])
async def recent_reviews(
        cantidad: int = Query(10, ge=1, le=100),
        ocultar_spoilers: bool = Query(True, alias="ocultarSpoilers"),
        review_service: ReviewService = Depends(get_review_service)
):
    return ok(review_service.recent(cantidad, ocultar_spoilers), "Reseñas recientes obtenidas")


@router.get("/content/{content_id}", response_model=ApiResponse[List[PublicReview]])
async def content_reviews(
        content_id: int,
        ocultar_spoilers: bool = Query(True, alias="ocultarSpoilers"),
        review_service: ReviewService = Depends(get_review_service)
):
    reviews = review_service.public_by_content(content_id, ocultar_spoilers)
    return ok(reviews, f"{len(reviews)} reseñas encontradas")


@router.get("/{viewing_id}", response_model=ApiResponse[ReviewInfo])
async def get_review(
        viewing_id: int,
        current_user: User = Depends(get_current_active_user),
        review_service: ReviewService = Depends(get_review_service)
):
    return ok(review_service.get(current_user.id, viewing_id), "Reseña obtenida")


@router.delete("/{viewing_id}", response_model=ApiResponse[bool])
async def delete_review(
        viewing_id: int,
        current_user: User = Depends(get_current_active_user),
        review_service: ReviewService = Depends(get_review_service)
):
    return ok(review_service.delete(current_user.id, viewing_id), "Reseña eliminada exitosamente")
