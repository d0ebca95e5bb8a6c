from functools import lru_cache
from typing import Optional, TypeVar

from app.core.config import settings
from app.core.exceptions import UpstreamUnavailable, ValidationError
from app.parsers.tmdb_api import TmdbClient
from app.parsers.tmdb_schemas import (
    TmdbGenreList,
    TmdbMovieDetails,
    TmdbMovieList,
    TmdbMultiList,
    TmdbSeasonDetails,
    TmdbTvList,
    TmdbTvShowDetails,
)

T = TypeVar("T")


@lru_cache()
def get_tmdb_client() -> TmdbClient:
    return TmdbClient(settings)


def _required(result: Optional[T], message: str) -> T:
    if result is None:
        raise UpstreamUnavailable(message)
    return result


def _query(query: Optional[str]) -> str:
    if not query or not query.strip():
        raise ValidationError("El parámetro de búsqueda es requerido")
    return query.strip()


class CatalogService:
    """Consultas al catálogo de TMDB; un resultado vacío del cliente es un 404"""

    def __init__(self, client: TmdbClient):
        self.client = client

    # ----- películas -----
    def popular_movies(self, page: int, language: Optional[str]) -> TmdbMovieList:
        return _required(self.client.popular_movies(page, language), "No se pudieron obtener las películas populares")

    def top_rated_movies(self, page: int, language: Optional[str]) -> TmdbMovieList:
        return _required(self.client.top_rated_movies(page, language),
                         "No se pudieron obtener las películas mejor valoradas")

    def now_playing_movies(self, page: int, language: Optional[str]) -> TmdbMovieList:
        return _required(self.client.now_playing_movies(page, language), "No se pudieron obtener las películas en cines")

    def upcoming_movies(self, page: int, language: Optional[str]) -> TmdbMovieList:
        return _required(self.client.upcoming_movies(page, language), "No se pudieron obtener los próximos estrenos")

    def search_movies(self, query: str, page: int, language: Optional[str]) -> TmdbMovieList:
        return _required(self.client.search_movies(_query(query), page, language), "No se pudo realizar la búsqueda")

    def movie_details(self, movie_id: int, language: Optional[str]) -> TmdbMovieDetails:
        return _required(self.client.movie_details(movie_id, language), "Película no encontrada")

    def movie_genres(self, language: Optional[str]) -> TmdbGenreList:
        return _required(self.client.movie_genres(language), "No se pudieron obtener los géneros")

    # ----- series -----
    def popular_tv(self, page: int, language: Optional[str]) -> TmdbTvList:
        return _required(self.client.popular_tv(page, language), "No se pudieron obtener las series populares")

    def top_rated_tv(self, page: int, language: Optional[str]) -> TmdbTvList:
        return _required(self.client.top_rated_tv(page, language), "No se pudieron obtener las series mejor valoradas")

    def on_the_air_tv(self, page: int, language: Optional[str]) -> TmdbTvList:
        return _required(self.client.on_the_air_tv(page, language), "No se pudieron obtener las series en emisión")

    def search_tv(self, query: str, page: int, language: Optional[str]) -> TmdbTvList:
        return _required(self.client.search_tv(_query(query), page, language), "No se pudo realizar la búsqueda")

    def tv_details(self, tv_id: int, language: Optional[str]) -> TmdbTvShowDetails:
        return _required(self.client.tv_details(tv_id, language), "Serie no encontrada")

    def season_details(self, tv_id: int, season_number: int, language: Optional[str]) -> TmdbSeasonDetails:
        return _required(self.client.season_details(tv_id, season_number, language), "Temporada no encontrada")

    def tv_genres(self, language: Optional[str]) -> TmdbGenreList:
        return _required(self.client.tv_genres(language), "No se pudieron obtener los géneros")

    # ----- búsqueda -----
    def multi_search(self, query: str, page: int, language: Optional[str]) -> TmdbMultiList:
        return _required(self.client.multi_search(_query(query), page, language), "No se pudo realizar la búsqueda")

    def trending(self, media_type: str, time_window: str, page: int, language: Optional[str]) -> TmdbMultiList:
        return _required(self.client.trending(media_type, time_window, page, language),
                         "No se pudieron obtener las tendencias")
