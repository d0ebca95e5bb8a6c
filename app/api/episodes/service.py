import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.episodes.models import EpisodeWatched
from app.api.episodes.schemas import EpisodeInfo, EpisodeRequest
from app.api.viewings.models import Viewing, SERIES_TYPE_ID
from app.api.viewings.service import get_owned_viewing
from app.core.exceptions import AlreadyMarked, DomainError, NotFound, WrongContentType

logger = logging.getLogger(__name__)

EPISODE_NOT_FOUND = "Episodio no encontrado"


class EpisodeService:
    def __init__(self, db: Session):
        self.db = db

    def mark_watched(self, user_id: int, data: EpisodeRequest) -> EpisodeInfo:
        viewing = get_owned_viewing(self.db, user_id, data.visualizacion_id)
        if viewing.type_id != SERIES_TYPE_ID:
            raise WrongContentType()
        if self._find(viewing.id, data.temporada_id, data.episodio_id):
            raise AlreadyMarked()

        episode = EpisodeWatched(
            viewing_id=viewing.id,
            season_id=data.temporada_id,
            episode_id=data.episodio_id
        )
        self.db.add(episode)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyMarked()
        self.db.refresh(episode)
        return EpisodeInfo.from_model(episode)

    def mark_watched_bulk(self, user_id: int, requests: List[EpisodeRequest]) -> List[EpisodeInfo]:
        """
        Marca varios episodios. Cada petición es independiente: las que fallan
        (visualización ajena, no es serie, ya marcado) se omiten sin cortar el lote.
        """
        created = []
        for data in requests:
            try:
                created.append(self.mark_watched(user_id, data))
            except DomainError as e:
                logger.info(
                    "Episodio omitido en lote: viewing=%s season=%s episode=%s (%s)",
                    data.visualizacion_id, data.temporada_id, data.episodio_id, e.message
                )
        return created

    def list_watched(self, user_id: int, viewing_id: int) -> List[EpisodeInfo]:
        viewing = get_owned_viewing(self.db, user_id, viewing_id)
        episodes = (
            self.db.query(EpisodeWatched)
            .filter(EpisodeWatched.viewing_id == viewing.id)
            .order_by(EpisodeWatched.season_id, EpisodeWatched.episode_id)
            .all()
        )
        return [EpisodeInfo.from_model(e) for e in episodes]

    def unmark_by_id(self, user_id: int, episode_row_id: int) -> bool:
        episode = (
            self.db.query(EpisodeWatched)
            .join(Viewing, EpisodeWatched.viewing_id == Viewing.id)
            .filter(EpisodeWatched.id == episode_row_id, Viewing.user_id == user_id)
            .first()
        )
        if episode is None:
            raise NotFound(EPISODE_NOT_FOUND)
        self.db.delete(episode)
        self.db.commit()
        return True

    def unmark(self, user_id: int, viewing_id: int, season_id: int, episode_id: int) -> bool:
        viewing = get_owned_viewing(self.db, user_id, viewing_id)
        episode = self._find(viewing.id, season_id, episode_id)
        if episode is None:
            raise NotFound(EPISODE_NOT_FOUND)
        self.db.delete(episode)
        self.db.commit()
        return True

    def _find(self, viewing_id: int, season_id: int, episode_id: int):
        return self.db.query(EpisodeWatched).filter(
            EpisodeWatched.viewing_id == viewing_id,
            EpisodeWatched.season_id == season_id,
            EpisodeWatched.episode_id == episode_id
        ).first()
