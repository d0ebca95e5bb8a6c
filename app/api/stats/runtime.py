import logging
from typing import Dict, Optional

from fastapi import Depends

from app.api.catalog.service import get_tmdb_client
from app.api.viewings.models import MOVIE_TYPE_ID, SERIES_TYPE_ID
from app.core.config import Settings, settings
from app.parsers.tmdb_api import TmdbClient

logger = logging.getLogger(__name__)


class TmdbRuntimeEstimator:
    """
    Duración estimada (en minutos) de lo visto en una visualización.

    Película: runtime de TMDB. Serie: duración media de episodio por
    episodios marcados. Si TMDB no responde se usan los valores por defecto
    de la configuración. Las consultas se recuerdan durante la vida de la
    instancia, que es una petición.
    """

    def __init__(self, client: TmdbClient, config: Settings):
        self.client = client
        self.default_movie_runtime = config.DEFAULT_MOVIE_RUNTIME
        self.default_episode_runtime = config.DEFAULT_EPISODE_RUNTIME
        self._movies: Dict[int, int] = {}
        self._episodes: Dict[int, int] = {}

    def minutes(self, content_id: int, type_id: int, episodes_watched: int = 0) -> int:
        if type_id == MOVIE_TYPE_ID:
            return self.movie_runtime(content_id)
        if type_id == SERIES_TYPE_ID:
            if episodes_watched <= 0:
                return 0
            return self.episode_runtime(content_id) * episodes_watched
        return 0

    def movie_runtime(self, movie_id: int) -> int:
        if movie_id not in self._movies:
            details = self.client.movie_details(movie_id)
            runtime: Optional[int] = details.runtime if details else None
            if not runtime:
                logger.debug("Sin duración para la película %s, se usa %s", movie_id, self.default_movie_runtime)
                runtime = self.default_movie_runtime
            self._movies[movie_id] = runtime
        return self._movies[movie_id]

    def episode_runtime(self, tv_id: int) -> int:
        if tv_id not in self._episodes:
            details = self.client.tv_details(tv_id)
            run_times = [t for t in details.episode_run_time if t > 0] if details else []
            if run_times:
                runtime = round(sum(run_times) / len(run_times))
            else:
                logger.debug("Sin duración de episodio para la serie %s, se usa %s",
                             tv_id, self.default_episode_runtime)
                runtime = self.default_episode_runtime
            self._episodes[tv_id] = runtime
        return self._episodes[tv_id]


def get_runtime_estimator(client: TmdbClient = Depends(get_tmdb_client)) -> TmdbRuntimeEstimator:
    return TmdbRuntimeEstimator(client, settings)
