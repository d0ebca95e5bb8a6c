import math
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import asc, desc, func
from sqlalchemy.orm import Session, joinedload

from app.api.episodes.models import EpisodeWatched
from app.api.ratings.models import Rating
from app.api.reviews.models import Review
from app.api.stats.runtime import TmdbRuntimeEstimator
from app.api.stats.schemas import (
    BasicStats,
    DetailedStats,
    MonthlyActivity,
    RatingBucket,
    RecentViewing,
    TopRatedViewing,
)
from app.api.viewings.models import Viewing, MOVIE_TYPE_ID, SERIES_TYPE_ID

MONTHS_OF_ACTIVITY = 12


def rating_bucket(score: float) -> int:
    """Puntuación redondeada al entero (0.5 hacia arriba), entre 1 y 10"""
    return min(10, max(1, int(math.floor(score + 0.5))))


def utc_month(value: datetime) -> Tuple[int, int]:
    """(año, mes) en UTC; las fechas sin zona horaria ya están en UTC"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.year, value.month


def last_months(now: datetime, count: int = MONTHS_OF_ACTIVITY) -> List[Tuple[int, int]]:
    """(año, mes) de los últimos ``count`` meses naturales, del más antiguo al actual"""
    months = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year -= 1
            month = 12
    months.reverse()
    return months


class StatsService:
    """
    Estadísticas de un usuario calculadas sobre sus visualizaciones.
    No guarda nada: todo se consulta en cada llamada.
    """

    def __init__(self, db: Session, estimator: Optional[TmdbRuntimeEstimator] = None):
        self.db = db
        self.estimator = estimator

    def basic_stats(self, user_id: int) -> BasicStats:
        return BasicStats(**self._basic_counts(user_id))

    def detailed_stats(self, user_id: int, recent_n: int = 5, top_n: int = 5,
                       now: Optional[datetime] = None) -> DetailedStats:
        if now is None:
            now = datetime.now(timezone.utc).replace(tzinfo=None)

        scores = self._scores(user_id)
        minutes = self._estimated_minutes(user_id)
        hours = minutes // 60

        return DetailedStats(
            **self._basic_counts(user_id),
            total_calificaciones=len(scores),
            minutos_totales_estimados=minutes,
            horas_totales_estimadas=hours,
            dias_totales_estimados=hours // 24,
            distribucion_calificaciones=self._distribution(scores),
            actividad_mensual=self._monthly_activity(user_id, now),
            contenidos_recientes=self._recent(user_id, recent_n),
            mejores_calificados=self._top_rated(user_id, top_n)
        )

    def _basic_counts(self, user_id: int) -> dict:
        by_type = dict(
            self.db.query(Viewing.type_id, func.count(Viewing.id))
            .filter(Viewing.user_id == user_id)
            .group_by(Viewing.type_id)
            .all()
        )
        avg_score, ratings_count = (
            self.db.query(func.avg(Rating.score), func.count(Rating.id))
            .join(Viewing, Rating.viewing_id == Viewing.id)
            .filter(Viewing.user_id == user_id)
            .one()
        )
        reviews_count = (
            self.db.query(func.count(Review.id))
            .join(Viewing, Review.viewing_id == Viewing.id)
            .filter(Viewing.user_id == user_id)
            .scalar()
        )
        episodes_count = (
            self.db.query(func.count(EpisodeWatched.id))
            .join(Viewing, EpisodeWatched.viewing_id == Viewing.id)
            .filter(Viewing.user_id == user_id)
            .scalar()
        )
        return {
            "total_contenidos_vistos": sum(by_type.values()),
            "total_peliculas": by_type.get(MOVIE_TYPE_ID, 0),
            "total_series": by_type.get(SERIES_TYPE_ID, 0),
            "promedio_calificacion": float(avg_score) if ratings_count else None,
            "total_resenas": reviews_count or 0,
            "total_episodios_vistos": episodes_count or 0,
        }

    def _scores(self, user_id: int) -> List[float]:
        rows = (
            self.db.query(Rating.score)
            .join(Viewing, Rating.viewing_id == Viewing.id)
            .filter(Viewing.user_id == user_id)
            .all()
        )
        return [float(score) for (score,) in rows]

    @staticmethod
    def _distribution(scores: List[float]) -> List[RatingBucket]:
        counts = {bucket: 0 for bucket in range(1, 11)}
        for score in scores:
            counts[rating_bucket(score)] += 1
        return [RatingBucket(puntuacion=bucket, cantidad=count) for bucket, count in counts.items()]

    def _monthly_activity(self, user_id: int, now: datetime) -> List[MonthlyActivity]:
        months = last_months(now)
        first_year, first_month = months[0]
        since = datetime(first_year, first_month, 1, tzinfo=timezone.utc)

        # el mes se calcula en UTC aquí, no con la zona horaria de la sesión de BD
        rows = (
            self.db.query(Viewing.viewed_at, Viewing.type_id)
            .filter(Viewing.user_id == user_id, Viewing.viewed_at >= since)
            .all()
        )

        activity = {key: MonthlyActivity(mes=f"{key[0]:04d}-{key[1]:02d}") for key in months}
        for viewed_at, type_id in rows:
            item = activity.get(utc_month(viewed_at))
            if item is None:
                continue
            if type_id == MOVIE_TYPE_ID:
                item.peliculas += 1
            elif type_id == SERIES_TYPE_ID:
                item.series += 1
        return [activity[key] for key in months]

    def _recent(self, user_id: int, limit: int) -> List[RecentViewing]:
        viewings = (
            self.db.query(Viewing)
            .options(
                joinedload(Viewing.content),
                joinedload(Viewing.content_type),
                joinedload(Viewing.rating)
            )
            .filter(Viewing.user_id == user_id)
            .order_by(desc(Viewing.viewed_at), desc(Viewing.id))
            .limit(limit)
            .all()
        )
        return [
            RecentViewing(
                contenido_id=v.content_id,
                titulo=v.title,
                tipo_contenido=v.type_name,
                fecha_visualizacion=v.viewed_at,
                puntuacion=v.rating.score if v.rating else None
            )
            for v in viewings
        ]

    def _top_rated(self, user_id: int, limit: int) -> List[TopRatedViewing]:
        viewings = (
            self.db.query(Viewing)
            .join(Rating, Rating.viewing_id == Viewing.id)
            .options(
                joinedload(Viewing.rating),
                joinedload(Viewing.content),
                joinedload(Viewing.content_type)
            )
            .filter(Viewing.user_id == user_id)
            .order_by(desc(Rating.score), asc(Viewing.id))
            .limit(limit)
            .all()
        )
        return [
            TopRatedViewing(
                contenido_id=v.content_id,
                titulo=v.title,
                tipo_contenido=v.type_name,
                puntuacion=v.rating.score
            )
            for v in viewings
        ]

    def _estimated_minutes(self, user_id: int) -> int:
        if self.estimator is None:
            return 0
        rows = (
            self.db.query(Viewing.content_id, Viewing.type_id, func.count(EpisodeWatched.id))
            .outerjoin(EpisodeWatched, EpisodeWatched.viewing_id == Viewing.id)
            .filter(Viewing.user_id == user_id)
            .group_by(Viewing.id, Viewing.content_id, Viewing.type_id)
            .all()
        )
        return sum(
            self.estimator.minutes(content_id, type_id, episodes)
            for content_id, type_id, episodes in rows
        )
