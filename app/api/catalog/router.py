from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.catalog.service import CatalogService, get_tmdb_client
from app.core.responses import ApiResponse, ok
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

movies_router = APIRouter(prefix="/api/v1/movies", tags=["movies"])
tv_router = APIRouter(prefix="/api/v1/tv", tags=["tv"])
search_router = APIRouter(prefix="/api/v1/search", tags=["search"])


def get_catalog_service(client: TmdbClient = Depends(get_tmdb_client)) -> CatalogService:
    return CatalogService(client)


# endpoints síncronos: el cliente de TMDB es bloqueante

@movies_router.get("/popular", response_model=ApiResponse[TmdbMovieList])
def popular_movies(page: int = Query(1, ge=1), language: Optional[str] = None,
                   service: CatalogService = Depends(get_catalog_service)):
    return ok(service.popular_movies(page, language), "Películas populares obtenidas")


@movies_router.get("/top-rated", response_model=ApiResponse[TmdbMovieList])
def top_rated_movies(page: int = Query(1, ge=1), language: Optional[str] = None,
                     service: CatalogService = Depends(get_catalog_service)):
    return ok(service.top_rated_movies(page, language), "Películas mejor valoradas obtenidas")


@movies_router.get("/now-playing", response_model=ApiResponse[TmdbMovieList])
def now_playing_movies(page: int = Query(1, ge=1), language: Optional[str] = None,
                       service: CatalogService = Depends(get_catalog_service)):
    return ok(service.now_playing_movies(page, language), "Películas en cines obtenidas")


@movies_router.get("/upcoming", response_model=ApiResponse[TmdbMovieList])
def upcoming_movies(page: int = Query(1, ge=1), language: Optional[str] = None,
                    service: CatalogService = Depends(get_catalog_service)):
    return ok(service.upcoming_movies(page, language), "Próximos estrenos obtenidos")


@movies_router.get("/search", response_model=ApiResponse[TmdbMovieList])
def search_movies(query: Optional[str] = None, page: int = Query(1, ge=1), language: Optional[str] = None,
                  service: CatalogService = Depends(get_catalog_service)):
    return ok(service.search_movies(query, page, language), "Búsqueda completada")


@movies_router.get("/genres", response_model=ApiResponse[TmdbGenreList])
def movie_genres(language: Optional[str] = None, service: CatalogService = Depends(get_catalog_service)):
    return ok(service.movie_genres(language), "Géneros obtenidos")


@movies_router.get("/{movie_id}", response_model=ApiResponse[TmdbMovieDetails])
def movie_details(movie_id: int, language: Optional[str] = None,
                  service: CatalogService = Depends(get_catalog_service)):
    return ok(service.movie_details(movie_id, language), "Detalles de la película obtenidos")


@tv_router.get("/popular", response_model=ApiResponse[TmdbTvList])
def popular_tv(page: int = Query(1, ge=1), language: Optional[str] = None,
               service: CatalogService = Depends(get_catalog_service)):
    return ok(service.popular_tv(page, language), "Series populares obtenidas")


@tv_router.get("/top-rated", response_model=ApiResponse[TmdbTvList])
def top_rated_tv(page: int = Query(1, ge=1), language: Optional[str] = None,
                 service: CatalogService = Depends(get_catalog_service)):
    return ok(service.top_rated_tv(page, language), "Series mejor valoradas obtenidas")


@tv_router.get("/on-the-air", response_model=ApiResponse[TmdbTvList])
def on_the_air_tv(page: int = Query(1, ge=1), language: Optional[str] = None,
                  service: CatalogService = Depends(get_catalog_service)):
    return ok(service.on_the_air_tv(page, language), "Series en emisión obtenidas")


@tv_router.get("/search", response_model=ApiResponse[TmdbTvList])
def search_tv(query: Optional[str] = None, page: int = Query(1, ge=1), language: Optional[str] = None,
              service: CatalogService = Depends(get_catalog_service)):
    return ok(service.search_tv(query, page, language), "Búsqueda completada")


@tv_router.get("/genres", response_model=ApiResponse[TmdbGenreList])
def tv_genres(language: Optional[str] = None, service: CatalogService = Depends(get_catalog_service)):
    return ok(service.tv_genres(language), "Géneros obtenidos")


@tv_router.get("/{tv_id}", response_model=ApiResponse[TmdbTvShowDetails])
def tv_details(tv_id: int, language: Optional[str] = None,
               service: CatalogService = Depends(get_catalog_service)):
    return ok(service.tv_details(tv_id, language), "Detalles de la serie obtenidos")


@tv_router.get("/{tv_id}/season/{season_number}", response_model=ApiResponse[TmdbSeasonDetails])
def season_details(tv_id: int, season_number: int, language: Optional[str] = None,
                   service: CatalogService = Depends(get_catalog_service)):
    return ok(service.season_details(tv_id, season_number, language), "Detalles de la temporada obtenidos")


@search_router.get("/multi", response_model=ApiResponse[TmdbMultiList])
def multi_search(query: Optional[str] = None, page: int = Query(1, ge=1), language: Optional[str] = None,
                 service: CatalogService = Depends(get_catalog_service)):
    return ok(service.multi_search(query, page, language), "Búsqueda completada")


@search_router.get("/trending", response_model=ApiResponse[TmdbMultiList])
def trending(
        media_type: str = Query("all", alias="mediaType", pattern="^(all|movie|tv)$"),
        time_window: str = Query("week", alias="timeWindow", pattern="^(day|week)$"),
        page: int = Query(1, ge=1),
        language: Optional[str] = None,
        service: CatalogService = Depends(get_catalog_service)
):
    return ok(service.trending(media_type, time_window, page, language), "Tendencias obtenidas")
