import logging
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from app.core.config import Settings
from app.parsers.tmdb_schemas import (
    TmdbGenreList,
    TmdbMovieDetails,
    TmdbMovieList,
    TmdbMultiList,
    TmdbSeasonDetails,
    TmdbTvList,
    TmdbTvShowDetails,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class TmdbClient:
    """
    Cliente de solo lectura para la API de TMDB.

    Una petición por llamada, sin reintentos ni caché. Cualquier fallo
    (red, estado HTTP, JSON inesperado) se registra y devuelve None.
    """

    def __init__(self, config: Settings, session: Optional[requests.Session] = None):
        self.base_url = config.TMDB_BASE_URL.rstrip("/")
        self.image_base_url = config.TMDB_IMAGE_BASE_URL
        self.language = config.TMDB_LANGUAGE
        self.timeout = config.TMDB_TIMEOUT

        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if config.TMDB_BEARER_TOKEN:
            self.session.headers.update({"Authorization": f"Bearer {config.TMDB_BEARER_TOKEN}"})

    # ----- películas -----
    def popular_movies(self, page: int = 1, language: Optional[str] = None) -> Optional[TmdbMovieList]:
        return self._get("/movie/popular", TmdbMovieList, self._params(language, page=page))

    def top_rated_movies(self, page: int = 1, language: Optional[str] = None) -> Optional[TmdbMovieList]:
        return self._get("/movie/top_rated", TmdbMovieList, self._params(language, page=page))

    def now_playing_movies(self, page: int = 1, language: Optional[str] = None) -> Optional[TmdbMovieList]:
        return self._get("/movie/now_playing", TmdbMovieList, self._params(language, page=page))

    def upcoming_movies(self, page: int = 1, language: Optional[str] = None) -> Optional[TmdbMovieList]:
        return self._get("/movie/upcoming", TmdbMovieList, self._params(language, page=page))

    def search_movies(self, query: str, page: int = 1,
                      language: Optional[str] = None) -> Optional[TmdbMovieList]:
        return self._get("/search/movie", TmdbMovieList, self._params(language, query=query, page=page))

    def movie_details(self, movie_id: int, language: Optional[str] = None) -> Optional[TmdbMovieDetails]:
        return self._get(
            f"/movie/{movie_id}", TmdbMovieDetails,
            self._params(language, append_to_response="credits,videos")
        )

    def movie_genres(self, language: Optional[str] = None) -> Optional[TmdbGenreList]:
        return self._get("/genre/movie/list", TmdbGenreList, self._params(language))

    # ----- series -----
    def popular_tv(self, page: int = 1, language: Optional[str] = None) -> Optional[TmdbTvList]:
        return self._get("/tv/popular", TmdbTvList, self._params(language, page=page))

    def top_rated_tv(self, page: int = 1, language: Optional[str] = None) -> Optional[TmdbTvList]:
        return self._get("/tv/top_rated", TmdbTvList, self._params(language, page=page))

    def on_the_air_tv(self, page: int = 1, language: Optional[str] = None) -> Optional[TmdbTvList]:
        return self._get("/tv/on_the_air", TmdbTvList, self._params(language, page=page))

    def search_tv(self, query: str, page: int = 1, language: Optional[str] = None) -> Optional[TmdbTvList]:
        return self._get("/search/tv", TmdbTvList, self._params(language, query=query, page=page))

    def tv_details(self, tv_id: int, language: Optional[str] = None) -> Optional[TmdbTvShowDetails]:
        return self._get(
            f"/tv/{tv_id}", TmdbTvShowDetails,
            self._params(language, append_to_response="credits,videos")
        )

    def season_details(self, tv_id: int, season_number: int,
                       language: Optional[str] = None) -> Optional[TmdbSeasonDetails]:
        return self._get(f"/tv/{tv_id}/season/{season_number}", TmdbSeasonDetails, self._params(language))

    def tv_genres(self, language: Optional[str] = None) -> Optional[TmdbGenreList]:
        return self._get("/genre/tv/list", TmdbGenreList, self._params(language))

    # ----- búsqueda y tendencias -----
    def multi_search(self, query: str, page: int = 1, language: Optional[str] = None) -> Optional[TmdbMultiList]:
        return self._get("/search/multi", TmdbMultiList, self._params(language, query=query, page=page))

    def trending(self, media_type: str = "all", time_window: str = "week", page: int = 1,
                 language: Optional[str] = None) -> Optional[TmdbMultiList]:
        return self._get(f"/trending/{media_type}/{time_window}", TmdbMultiList, self._params(language, page=page))

    def image_url(self, path: Optional[str]) -> str:
        if not path:
            return ""
        return f"{self.image_base_url}{path}"

    def _params(self, language: Optional[str], **params: Any) -> Dict[str, Any]:
        return {"language": language or self.language, **params}

    def _get(self, path: str, model: Type[M], params: Dict[str, Any]) -> Optional[M]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error llamando a TMDB %s: %s", path, e)
            return None

        if not response.ok:
            logger.warning("TMDB respondió %s para %s", response.status_code, path)
            return None

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Respuesta de TMDB inesperada para %s: %s", path, e)
            return None
