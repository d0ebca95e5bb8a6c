"""
Modelos de las respuestas de TMDB.

TMDB responde en snake_case; los modelos leen esos nombres y se
serializan en camelCase como el resto de la API.
"""
from typing import List, Optional

from pydantic import Field

from app.core.schemas import CamelModel


class TmdbGenre(CamelModel):
    id: int
    name: str = ""


class TmdbGenreList(CamelModel):
    genres: List[TmdbGenre] = Field(default_factory=list)


class TmdbProductionCompany(CamelModel):
    id: int
    name: str = ""
    logo_path: Optional[str] = None
    origin_country: str = ""


class TmdbNetwork(TmdbProductionCompany):
    pass


class TmdbCast(CamelModel):
    id: int
    name: str = ""
    character: str = ""
    profile_path: Optional[str] = None
    order: int = 0


class TmdbCrew(CamelModel):
    id: int
    name: str = ""
    job: str = ""
    department: str = ""
    profile_path: Optional[str] = None


class TmdbCredits(CamelModel):
    cast: List[TmdbCast] = Field(default_factory=list)
    crew: List[TmdbCrew] = Field(default_factory=list)


class TmdbVideo(CamelModel):
    id: str
    key: str = ""
    name: str = ""
    site: str = ""
    type: str = ""
    official: bool = False


class TmdbVideoResults(CamelModel):
    results: List[TmdbVideo] = Field(default_factory=list)


class TmdbMovie(CamelModel):
    id: int
    title: str = ""
    original_title: str = ""
    overview: Optional[str] = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: float = 0.0
    genre_ids: List[int] = Field(default_factory=list)
    adult: bool = False
    original_language: str = ""


class TmdbMovieDetails(TmdbMovie):
    genres: List[TmdbGenre] = Field(default_factory=list)
    runtime: Optional[int] = None
    budget: int = 0
    revenue: int = 0
    status: str = ""
    tagline: Optional[str] = None
    homepage: Optional[str] = None
    imdb_id: Optional[str] = None
    production_companies: List[TmdbProductionCompany] = Field(default_factory=list)
    credits: Optional[TmdbCredits] = None
    videos: Optional[TmdbVideoResults] = None


class TmdbMovieList(CamelModel):
    page: int = 1
    results: List[TmdbMovie] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class TmdbSeason(CamelModel):
    id: int
    name: str = ""
    overview: Optional[str] = ""
    poster_path: Optional[str] = None
    air_date: Optional[str] = None
    episode_count: int = 0
    season_number: int = 0


class TmdbEpisode(CamelModel):
    id: int
    name: str = ""
    overview: Optional[str] = ""
    still_path: Optional[str] = None
    air_date: Optional[str] = None
    episode_number: int = 0
    season_number: int = 0
    vote_average: float = 0.0
    vote_count: int = 0
    runtime: Optional[int] = None


class TmdbSeasonDetails(TmdbSeason):
    episodes: List[TmdbEpisode] = Field(default_factory=list)


class TmdbTvShow(CamelModel):
    id: int
    name: str = ""
    original_name: str = ""
    overview: Optional[str] = ""
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    first_air_date: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: float = 0.0
    genre_ids: List[int] = Field(default_factory=list)
    origin_country: List[str] = Field(default_factory=list)
    original_language: str = ""


class TmdbTvShowDetails(TmdbTvShow):
    genres: List[TmdbGenre] = Field(default_factory=list)
    episode_run_time: List[int] = Field(default_factory=list)
    number_of_episodes: int = 0
    number_of_seasons: int = 0
    seasons: List[TmdbSeason] = Field(default_factory=list)
    status: str = ""
    tagline: Optional[str] = None
    homepage: Optional[str] = None
    last_air_date: Optional[str] = None
    in_production: bool = False
    networks: List[TmdbNetwork] = Field(default_factory=list)
    production_companies: List[TmdbProductionCompany] = Field(default_factory=list)
    credits: Optional[TmdbCredits] = None
    videos: Optional[TmdbVideoResults] = None


class TmdbTvList(CamelModel):
    page: int = 1
    results: List[TmdbTvShow] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class TmdbMultiResult(CamelModel):
    """Resultado mixto: película, serie o persona"""
    id: int
    media_type: str = ""
    title: Optional[str] = None
    name: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    profile_path: Optional[str] = None
    release_date: Optional[str] = None
    first_air_date: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: float = 0.0
    genre_ids: List[int] = Field(default_factory=list)


class TmdbMultiList(CamelModel):
    page: int = 1
    results: List[TmdbMultiResult] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0
