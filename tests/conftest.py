import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.catalog.service import get_tmdb_client
from app.database.database import Base, get_db
from app.database.models import seed_content_types
from app.main import app
from app.parsers.tmdb_schemas import (
    TmdbGenre,
    TmdbGenreList,
    TmdbMovie,
    TmdbMovieDetails,
    TmdbMovieList,
    TmdbMultiList,
    TmdbMultiResult,
    TmdbSeasonDetails,
    TmdbEpisode,
    TmdbTvList,
    TmdbTvShow,
    TmdbTvShowDetails,
)


class FakeTmdbClient:
    """Catálogo en memoria con la misma interfaz que TmdbClient"""

    def __init__(self):
        self.available = True
        self.calls = []
        self.movies = {
            550: TmdbMovieDetails(id=550, title="Fight Club", runtime=139),
            603: TmdbMovieDetails(id=603, title="The Matrix", runtime=136),
        }
        self.shows = {
            1399: TmdbTvShowDetails(id=1399, name="Game of Thrones", episode_run_time=[60, 50], number_of_seasons=8),
        }

    def _result(self, value):
        return value if self.available else None

    def popular_movies(self, page=1, language=None):
        self.calls.append(("popular_movies", page, language))
        results = [TmdbMovie(id=m.id, title=m.title) for m in self.movies.values()]
        return self._result(TmdbMovieList(page=page, results=results, total_pages=1, total_results=len(results)))

    def search_movies(self, query, page=1, language=None):
        self.calls.append(("search_movies", query, page, language))
        results = [TmdbMovie(id=m.id, title=m.title) for m in self.movies.values() if query.lower() in m.title.lower()]
        return self._result(TmdbMovieList(page=page, results=results, total_results=len(results)))

    def movie_details(self, movie_id, language=None):
        self.calls.append(("movie_details", movie_id))
        return self._result(self.movies.get(movie_id))

    def movie_genres(self, language=None):
        return self._result(TmdbGenreList(genres=[TmdbGenre(id=18, name="Drama"), TmdbGenre(id=28, name="Acción")]))

    def popular_tv(self, page=1, language=None):
        results = [TmdbTvShow(id=s.id, name=s.name) for s in self.shows.values()]
        return self._result(TmdbTvList(page=page, results=results, total_results=len(results)))

    def tv_details(self, tv_id, language=None):
        self.calls.append(("tv_details", tv_id))
        return self._result(self.shows.get(tv_id))

    def season_details(self, tv_id, season_number, language=None):
        if tv_id not in self.shows:
            return None
        episodes = [TmdbEpisode(id=63056 + n, episode_number=n, season_number=season_number) for n in (1, 2, 3)]
        return self._result(TmdbSeasonDetails(id=3624, season_number=season_number, episodes=episodes))

    def multi_search(self, query, page=1, language=None):
        results = [TmdbMultiResult(id=550, media_type="movie", title="Fight Club")]
        return self._result(TmdbMultiList(page=page, results=results, total_results=1))

    def trending(self, media_type="all", time_window="week", page=1, language=None):
        self.calls.append(("trending", media_type, time_window))
        results = [TmdbMultiResult(id=1399, media_type="tv", name="Game of Thrones")]
        return self._result(TmdbMultiList(page=page, results=results, total_results=1))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = factory()
    seed_content_types(db)
    db.close()
    return factory


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def fake_tmdb():
    return FakeTmdbClient()


@pytest.fixture
def client(session_factory, fake_tmdb):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tmdb_client] = lambda: fake_tmdb
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Registra un usuario y devuelve las cabeceras con su token"""

    def _register(username="cinefilo", password="secreto123", age=30):
        response = client.post(
            "/api/v1/auth/register",
            json={"nombreUsuario": username, "contrasena": password, "edad": age}
        )
        assert response.status_code == 200, response.text
        token = response.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def auth_headers(register_user):
    return register_user()


@pytest.fixture
def add_viewing(client):
    def _add(headers, content_id, type_id=1, title=None):
        body = {"contenidoId": content_id, "tipoId": type_id}
        if title is not None:
            body["titulo"] = title
        response = client.post("/api/v1/viewings", json=body, headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["data"]

    return _add
