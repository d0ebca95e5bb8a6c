from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.api.ratings.models import Rating
from app.api.ratings.schemas import ContentAverage, RatingInfo
from app.api.viewings.models import Viewing
from app.api.viewings.service import get_owned_viewing
from app.core.exceptions import NotFound


class RatingService:
    def __init__(self, db: Session):
        self.db = db

    def upsert(self, user_id: int, viewing_id: int, score: float) -> RatingInfo:
        viewing = get_owned_viewing(self.db, user_id, viewing_id, joinedload(Viewing.rating))

        rating = viewing.rating
        if rating:
            rating.score = score
            rating.updated_at = func.now()
        else:
            rating = Rating(viewing_id=viewing.id, score=score)
            self.db.add(rating)
        try:
            self.db.commit()
        except IntegrityError:
            # otra petición creó la calificación primero: se actualiza esa
            self.db.rollback()
            rating = self.db.query(Rating).filter(Rating.viewing_id == viewing_id).one()
            rating.score = score
            rating.updated_at = func.now()
            self.db.commit()
        self.db.refresh(rating)
        return RatingInfo.from_model(rating)

    def get(self, user_id: int, viewing_id: int) -> RatingInfo:
        viewing = get_owned_viewing(self.db, user_id, viewing_id, joinedload(Viewing.rating))
        if viewing.rating is None:
            raise NotFound("No hay calificación para esta visualización")
        return RatingInfo.from_model(viewing.rating)

    def delete(self, user_id: int, viewing_id: int) -> bool:
        rating = (
            self.db.query(Rating)
            .join(Viewing, Rating.viewing_id == Viewing.id)
            .filter(Viewing.id == viewing_id, Viewing.user_id == user_id)
            .first()
        )
        if rating is None:
            raise NotFound("Calificación no encontrada")
        self.db.delete(rating)
        self.db.commit()
        return True

    def average_for_content(self, content_id: int) -> ContentAverage:
        avg_score, total = (
            self.db.query(func.avg(Rating.score), func.count(Rating.id))
            .join(Viewing, Rating.viewing_id == Viewing.id)
            .filter(Viewing.content_id == content_id)
            .one()
        )
        if not total:
            return ContentAverage(contenido_id=content_id, promedio=None, total_calificaciones=0)
        return ContentAverage(
            contenido_id=content_id,
            promedio=round(float(avg_score), 1),
            total_calificaciones=int(total)
        )
