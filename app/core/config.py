from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuración principal de la aplicación.
    Se lee de las variables de entorno (archivo .env)
    """
    APP_NAME: str = "Deberías Ver API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    DATABASE_URL: str = "sqlite:///./deberias_ver.db"

    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:4200",
    ]

    LOG_LEVEL: str = "INFO"

    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_BEARER_TOKEN: str = ""
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"
    TMDB_LANGUAGE: str = "es-ES"
    TMDB_TIMEOUT: float = 10.0

    # minutos, cuando TMDB no informa la duración
    DEFAULT_MOVIE_RUNTIME: int = 120
    DEFAULT_EPISODE_RUNTIME: int = 45

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
