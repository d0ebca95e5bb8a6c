import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.auth.router import router as auth_router
from app.api.catalog.router import movies_router, search_router, tv_router
from app.api.episodes.router import router as episodes_router
from app.api.health.router import router as health_router
from app.api.ratings.router import router as ratings_router
from app.api.reviews.router import router as reviews_router
from app.api.viewings.router import router as viewings_router
from app.core.config import settings
from app.core.exceptions import DomainError
from app.core.responses import error

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="API de Deberías Ver: visualizaciones, calificaciones, reseñas y catálogo TMDB",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(viewings_router)
app.include_router(ratings_router)
app.include_router(reviews_router)
app.include_router(episodes_router)
app.include_router(movies_router)
app.include_router(tv_router)
app.include_router(search_router)
app.include_router(health_router)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ()) if loc not in ("body", "query", "path"))
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Datos inválidos"


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=exc.status_code, content=error(exc.message), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=error(_validation_message(exc)))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        message = "Ruta no encontrada"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error(message), headers=exc.headers)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)

    return JSONResponse(status_code=500, content=error("Error interno del servidor"))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )
