from datetime import datetime, timedelta, timezone

import pytest

from app.api.auth.models import User
from app.api.episodes.models import EpisodeWatched
from app.api.ratings.models import Rating
from app.api.reviews.models import Review
from app.api.stats.runtime import TmdbRuntimeEstimator
from app.api.stats.service import StatsService, last_months, rating_bucket, utc_month
from app.api.viewings.models import CachedContent, Viewing
from app.core.config import settings

NOW = datetime(2026, 3, 15, 12, 0)


def _user(db, username="ana"):
    user = User(username=username, hashed_password="x", age=30)
    db.add(user)
    db.commit()
    return user


def _viewing(db, user, content_id, type_id, viewed_at=NOW, score=None, title=None, episodes=0):
    if db.get(CachedContent, content_id) is None:
        db.add(CachedContent(id=content_id, type_id=type_id, title=title or f"Contenido {content_id}"))
    viewing = Viewing(user_id=user.id, content_id=content_id, type_id=type_id, viewed_at=viewed_at)
    db.add(viewing)
    db.flush()
    if score is not None:
        db.add(Rating(viewing_id=viewing.id, score=score))
    for n in range(episodes):
        db.add(EpisodeWatched(viewing_id=viewing.id, season_id=1, episode_id=n + 1))
    db.commit()
    return viewing


@pytest.fixture
def stats(db_session, fake_tmdb):
    return StatsService(db_session, TmdbRuntimeEstimator(fake_tmdb, settings))


def test_rating_bucket_rounds_half_up():
    assert rating_bucket(1.0) == 1
    assert rating_bucket(1.4) == 1
    assert rating_bucket(1.5) == 2
    assert rating_bucket(8.5) == 9
    assert rating_bucket(9.5) == 10
    assert rating_bucket(10.0) == 10


def test_last_months_crosses_year():
    months = last_months(datetime(2026, 2, 10))

    assert len(months) == 12
    assert months[0] == (2025, 3)
    assert months[-1] == (2026, 2)


def test_utc_month_converts_offsets():
    assert utc_month(datetime(2026, 3, 1, 0, 30, tzinfo=timezone(timedelta(hours=2)))) == (2026, 2)
    assert utc_month(datetime(2026, 2, 28, 23, 30, tzinfo=timezone(timedelta(hours=-3)))) == (2026, 3)
    assert utc_month(datetime(2026, 3, 1, 0, 30)) == (2026, 3)


def test_basic_stats_for_new_user(db_session, stats):
    user = _user(db_session)

    result = stats.basic_stats(user.id)

    assert result.total_contenidos_vistos == 0
    assert result.promedio_calificacion is None
    assert result.total_resenas == 0
    assert result.total_episodios_vistos == 0


def test_basic_stats_counts(db_session, stats):
    user = _user(db_session)
    other = _user(db_session, "luis")
    _viewing(db_session, user, 550, 1, score=9)
    _viewing(db_session, user, 603, 1, score=8)
    series = _viewing(db_session, user, 1399, 2, episodes=3)
    db_session.add(Review(viewing_id=series.id, text="Larga", has_spoilers=False))
    db_session.commit()
    _viewing(db_session, other, 550, 1, score=1, episodes=0)

    result = stats.basic_stats(user.id)

    assert result.total_contenidos_vistos == 3
    assert result.total_peliculas == 2
    assert result.total_series == 1
    assert result.promedio_calificacion == pytest.approx(8.5)
    assert result.total_resenas == 1
    assert result.total_episodios_vistos == 3


def test_monthly_activity_is_zero_filled(db_session, stats):
    user = _user(db_session)
    _viewing(db_session, user, 1, 1, viewed_at=datetime(2026, 3, 2, 20, 0))
    _viewing(db_session, user, 2, 2, viewed_at=datetime(2026, 3, 10, 9, 30))
    _viewing(db_session, user, 3, 1, viewed_at=datetime(2025, 12, 24, 22, 0))
    _viewing(db_session, user, 4, 1, viewed_at=datetime(2025, 4, 1, 0, 0))
    _viewing(db_session, user, 5, 1, viewed_at=datetime(2025, 3, 31, 23, 0))

    result = stats.detailed_stats(user.id, now=NOW)

    activity = {m.mes: (m.peliculas, m.series) for m in result.actividad_mensual}
    assert [m.mes for m in result.actividad_mensual][0] == "2025-04"
    assert [m.mes for m in result.actividad_mensual][-1] == "2026-03"
    assert len(result.actividad_mensual) == 12
    assert activity["2026-03"] == (1, 1)
    assert activity["2025-12"] == (1, 0)
    assert activity["2025-04"] == (1, 0)
    assert activity["2025-08"] == (0, 0)
    assert "2025-03" not in activity


def test_rating_distribution_has_ten_buckets(db_session, stats):
    user = _user(db_session)
    for content_id, score in [(1, 9.5), (2, 1.4), (3, 7.0), (4, 7.5), (5, 10.0)]:
        _viewing(db_session, user, content_id, 1, score=score)

    result = stats.detailed_stats(user.id, now=NOW)

    buckets = {b.puntuacion: b.cantidad for b in result.distribucion_calificaciones}
    assert list(buckets) == list(range(1, 11))
    assert buckets == {1: 1, 2: 0, 3: 0, 4: 0, 5: 0, 6: 0, 7: 1, 8: 1, 9: 0, 10: 2}
    assert result.total_calificaciones == 5


def test_top_rated_ties_broken_by_viewing_id(db_session, stats):
    user = _user(db_session)
    first = _viewing(db_session, user, 10, 1, score=9)
    _viewing(db_session, user, 11, 1, score=6)
    second = _viewing(db_session, user, 12, 2, score=9)
    best = _viewing(db_session, user, 13, 1, score=9.5)

    result = stats.detailed_stats(user.id, top_n=3, now=NOW)

    assert [t.contenido_id for t in result.mejores_calificados] == [
        best.content_id, first.content_id, second.content_id
    ]
    assert result.mejores_calificados[2].tipo_contenido == "Serie"


def test_recent_viewings(db_session, stats):
    user = _user(db_session)
    _viewing(db_session, user, 550, 1, viewed_at=datetime(2026, 1, 1), score=8, title="Fight Club")
    _viewing(db_session, user, 603, 1, viewed_at=datetime(2026, 3, 1), title="The Matrix")
    _viewing(db_session, user, 1399, 2, viewed_at=datetime(2026, 2, 1), title="Game of Thrones")

    result = stats.detailed_stats(user.id, recent_n=2, now=NOW)

    assert [(r.contenido_id, r.titulo) for r in result.contenidos_recientes] == [
        (603, "The Matrix"), (1399, "Game of Thrones")
    ]
    assert result.contenidos_recientes[0].puntuacion is None


def test_estimated_time(db_session, stats, fake_tmdb):
    user = _user(db_session)
    other = _user(db_session, "luis")
    _viewing(db_session, user, 550, 1)                  # 139 min en TMDB
    _viewing(db_session, user, 42, 1)                   # sin datos: 120
    _viewing(db_session, user, 1399, 2, episodes=4)     # media 55 x 4
    _viewing(db_session, user, 77, 2, episodes=2)       # sin datos: 45 x 2
    _viewing(db_session, user, 78, 2)                   # sin episodios
    _viewing(db_session, other, 603, 1)

    result = stats.detailed_stats(user.id, now=NOW)

    minutes = 139 + 120 + 55 * 4 + 45 * 2
    assert result.minutos_totales_estimados == minutes
    assert result.horas_totales_estimadas == minutes // 60
    assert result.dias_totales_estimados == 0
    assert ("movie_details", 603) not in fake_tmdb.calls


def test_runtime_lookups_are_memoised(fake_tmdb):
    estimator = TmdbRuntimeEstimator(fake_tmdb, settings)

    assert estimator.minutes(550, 1) == 139
    assert estimator.minutes(550, 1) == 139
    assert estimator.minutes(1399, 2, 2) == 110
    assert estimator.minutes(1399, 2, 1) == 55

    assert fake_tmdb.calls.count(("movie_details", 550)) == 1
    assert fake_tmdb.calls.count(("tv_details", 1399)) == 1


def test_runtime_defaults_when_catalog_is_down(fake_tmdb):
    fake_tmdb.available = False
    estimator = TmdbRuntimeEstimator(fake_tmdb, settings)

    assert estimator.minutes(550, 1) == settings.DEFAULT_MOVIE_RUNTIME
    assert estimator.minutes(1399, 2, 3) == settings.DEFAULT_EPISODE_RUNTIME * 3


def test_basic_stats_endpoint(client, auth_headers, add_viewing):
    viewing = add_viewing(auth_headers, 550, 1, "Fight Club")
    add_viewing(auth_headers, 1399, 2, "Game of Thrones")
    client.post("/api/v1/ratings", json={"visualizacionId": viewing["visualizacionId"], "puntuacion": 7.5},
                headers=auth_headers)

    response = client.get("/api/v1/viewings/estadisticas", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalContenidosVistos": 2,
        "totalPeliculas": 1,
        "totalSeries": 1,
        "promedioCalificacion": 7.5,
        "totalResenas": 0,
        "totalEpisodiosVistos": 0,
    }


def test_detailed_stats_endpoint(client, auth_headers, add_viewing):
    viewing = add_viewing(auth_headers, 550, 1, "Fight Club")
    client.post("/api/v1/ratings", json={"visualizacionId": viewing["visualizacionId"], "puntuacion": 9},
                headers=auth_headers)

    response = client.get("/api/v1/viewings/estadisticas/detalladas", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalContenidosVistos"] == 1
    assert data["minutosTotalesEstimados"] == 139
    assert data["horasTotalesEstimadas"] == 2
    assert len(data["actividadMensual"]) == 12
    assert sum(m["peliculas"] for m in data["actividadMensual"]) == 1
    assert len(data["distribucionCalificaciones"]) == 10
    assert data["mejoresCalificados"] == [
        {"contenidoId": 550, "titulo": "Fight Club", "tipoContenido": "Película", "puntuacion": 9.0}
    ]
    assert data["contenidosRecientes"][0]["contenidoId"] == 550


def test_stats_require_token(client):
    assert client.get("/api/v1/viewings/estadisticas").status_code == 401
    assert client.get("/api/v1/viewings/estadisticas/detalladas").status_code == 401
