from typing import List

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.api.reviews.models import Review
from app.api.reviews.schemas import PublicReview, ReviewInfo, ReviewRequest, SPOILER_PLACEHOLDER
from app.api.viewings.models import Viewing
from app.api.viewings.service import get_owned_viewing
from app.core.exceptions import NotFound, ValidationError


def mask_spoilers(review: Review, hide_spoilers: bool) -> str:
    if hide_spoilers and review.has_spoilers:
        return SPOILER_PLACEHOLDER
    return review.text or ""


def to_public_review(review: Review, hide_spoilers: bool) -> PublicReview:
    viewing = review.viewing
    return PublicReview(
        resena_id=review.id,
        nombre_usuario=viewing.user.username,
        contenido_id=viewing.content_id,
        titulo_contenido=viewing.title,
        tipo_contenido=viewing.type_name,
        texto=mask_spoilers(review, hide_spoilers),
        contiene_spoilers=review.has_spoilers,
        puntuacion=viewing.rating.score if viewing.rating else None,
        fecha_resena=review.created_at
    )


class ReviewService:
    def __init__(self, db: Session):
        self.db = db

    def upsert(self, user_id: int, data: ReviewRequest) -> ReviewInfo:
        if not data.texto or not data.texto.strip():
            raise ValidationError("El texto de la reseña es requerido")
        viewing = get_owned_viewing(self.db, user_id, data.visualizacion_id, joinedload(Viewing.review))

        review = viewing.review
        if review:
            self._apply(review, data)
        else:
            review = Review(viewing_id=viewing.id, text=data.texto, has_spoilers=data.contiene_spoilers)
            self.db.add(review)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            review = self.db.query(Review).filter(Review.viewing_id == viewing.id).one()
            self._apply(review, data)
            self.db.commit()
        self.db.refresh(review)
        return ReviewInfo.from_model(review)

    def get(self, user_id: int, viewing_id: int) -> ReviewInfo:
        viewing = get_owned_viewing(self.db, user_id, viewing_id, joinedload(Viewing.review))
        if viewing.review is None:
            raise NotFound("No hay reseña para esta visualización")
        return ReviewInfo.from_model(viewing.review)

    def delete(self, user_id: int, viewing_id: int) -> bool:
        review = (
            self.db.query(Review)
            .join(Viewing, Review.viewing_id == Viewing.id)
            .filter(Viewing.id == viewing_id, Viewing.user_id == user_id)
            .first()
        )
        if review is None:
            raise NotFound("Reseña no encontrada")
        self.db.delete(review)
        self.db.commit()
        return True

    def public_by_content(self, content_id: int, hide_spoilers: bool = True) -> List[PublicReview]:
        reviews = (
            self._public_query()
            .filter(Viewing.content_id == content_id)
            .order_by(desc(Review.created_at), desc(Review.id))
            .all()
        )
        return [to_public_review(r, hide_spoilers) for r in reviews]

    def recent(self, count: int = 10, hide_spoilers: bool = True) -> List[PublicReview]:
        reviews = (
            self._public_query()
            .order_by(desc(Review.created_at), desc(Review.id))
            .limit(count)
            .all()
        )
        return [to_public_review(r, hide_spoilers) for r in reviews]

    def _public_query(self):
        return (
            self.db.query(Review)
            .join(Viewing, Review.viewing_id == Viewing.id)
            .options(
                joinedload(Review.viewing).joinedload(Viewing.user),
                joinedload(Review.viewing).joinedload(Viewing.content),
                joinedload(Review.viewing).joinedload(Viewing.content_type),
                joinedload(Review.viewing).joinedload(Viewing.rating),
            )
        )

    @staticmethod
    def _apply(review: Review, data: ReviewRequest) -> None:
        review.text = data.texto
        review.has_spoilers = data.contiene_spoilers
        review.updated_at = func.now()
