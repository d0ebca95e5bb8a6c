"""
Importa todos los modelos para que ``Base.metadata`` los conozca
(Alembic y los tests lo usan).
"""
from app.api.auth.models import User
from app.api.episodes.models import EpisodeWatched
from app.api.ratings.models import Rating
from app.api.reviews.models import Review
from app.api.viewings.models import ContentType, CachedContent, Viewing, CONTENT_TYPE_NAMES
from app.database.database import Base

__all__ = [
    "Base",
    "User",
    "ContentType",
    "CachedContent",
    "Viewing",
    "Rating",
    "Review",
    "EpisodeWatched",
    "CONTENT_TYPE_NAMES",
]


def seed_content_types(db) -> None:
    """Inserta los tipos de contenido si faltan"""
    for type_id, name in CONTENT_TYPE_NAMES.items():
        if db.get(ContentType, type_id) is None:
            db.add(ContentType(id=type_id, name=name))
    db.commit()
