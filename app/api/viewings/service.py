import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from app.api.viewings.models import CachedContent, Viewing
from app.api.viewings.schemas import RegisterViewingRequest, ViewingResponse
from app.core.exceptions import DuplicateViewing, NotFound

logger = logging.getLogger(__name__)

VIEWING_NOT_FOUND = "Visualización no encontrada"


def get_owned_viewing(db: Session, user_id: int, viewing_id: int, *options) -> Viewing:
    """
    Visualización del usuario o NotFound.
    La propiedad se comprueba en la misma consulta.
    """
    query = db.query(Viewing)
    if options:
        query = query.options(*options)
    viewing = query.filter(Viewing.id == viewing_id, Viewing.user_id == user_id).first()
    if viewing is None:
        raise NotFound(VIEWING_NOT_FOUND)
    return viewing


def full_viewing_options():
    return (
        joinedload(Viewing.content),
        joinedload(Viewing.content_type),
        joinedload(Viewing.rating),
        joinedload(Viewing.review),
        selectinload(Viewing.episodes),
    )


class ViewingService:
    def __init__(self, db: Session):
        self.db = db

    def register_viewing(self, user_id: int, data: RegisterViewingRequest) -> ViewingResponse:
        if self._find(user_id, data.contenido_id):
            raise DuplicateViewing()

        self._ensure_cached_content(data)
        viewing = Viewing(user_id=user_id, content_id=data.contenido_id, type_id=data.tipo_id)
        self.db.add(viewing)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if self._find(user_id, data.contenido_id):
                raise DuplicateViewing()
            # otra petición creó el contenido en caché al mismo tiempo
            viewing = self._retry_insert(user_id, data)

        logger.info("Visualización registrada: user=%s content=%s", user_id, data.contenido_id)
        return self.get_viewing(user_id, viewing.id)

    def list_viewings(self, user_id: int) -> List[ViewingResponse]:
        viewings = (
            self.db.query(Viewing)
            .options(*full_viewing_options())
            .filter(Viewing.user_id == user_id)
            .order_by(desc(Viewing.viewed_at), desc(Viewing.id))
            .all()
        )
        return [ViewingResponse.from_model(v) for v in viewings]

    def get_viewing(self, user_id: int, viewing_id: int) -> ViewingResponse:
        viewing = get_owned_viewing(self.db, user_id, viewing_id, *full_viewing_options())
        return ViewingResponse.from_model(viewing)

    def remove_viewing(self, user_id: int, viewing_id: int) -> bool:
        viewing = get_owned_viewing(
            self.db, user_id, viewing_id,
            joinedload(Viewing.rating), joinedload(Viewing.review), selectinload(Viewing.episodes)
        )
        # calificación, reseña y episodios se borran en cascada en el mismo commit
        self.db.delete(viewing)
        self.db.commit()
        logger.info("Visualización eliminada: user=%s viewing=%s", user_id, viewing_id)
        return True

    def _find(self, user_id: int, content_id: int) -> Optional[Viewing]:
        return self.db.query(Viewing).filter(
            Viewing.user_id == user_id,
            Viewing.content_id == content_id
        ).first()

    def _ensure_cached_content(self, data: RegisterViewingRequest) -> CachedContent:
        content = self.db.get(CachedContent, data.contenido_id)
        if content is None:
            content = CachedContent(id=data.contenido_id, type_id=data.tipo_id, title=data.titulo)
            self.db.add(content)
        return content

    def _retry_insert(self, user_id: int, data: RegisterViewingRequest) -> Viewing:
        viewing = Viewing(user_id=user_id, content_id=data.contenido_id, type_id=data.tipo_id)
        self.db.add(viewing)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateViewing()
        return viewing
