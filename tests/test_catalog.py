def test_popular_movies(client, fake_tmdb):
    response = client.get("/api/v1/movies/popular", params={"page": 2, "language": "en-US"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["page"] == 2
    assert {m["title"] for m in body["data"]["results"]} == {"Fight Club", "The Matrix"}
    assert "posterPath" in body["data"]["results"][0]
    assert ("popular_movies", 2, "en-US") in fake_tmdb.calls


def test_movie_details(client):
    response = client.get("/api/v1/movies/550")

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Fight Club"
    assert response.json()["data"]["runtime"] == 139


def test_unknown_movie_is_not_found(client):
    response = client.get("/api/v1/movies/1")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Película no encontrada"}


def test_search_movies(client, fake_tmdb):
    response = client.get("/api/v1/movies/search", params={"query": "matrix"})

    assert response.status_code == 200
    assert [m["id"] for m in response.json()["data"]["results"]] == [603]


def test_search_requires_query(client):
    missing = client.get("/api/v1/movies/search")
    blank = client.get("/api/v1/search/multi", params={"query": "   "})

    assert missing.status_code == 400
    assert blank.status_code == 400
    assert blank.json()["message"] == "El parámetro de búsqueda es requerido"


def test_movie_genres(client):
    response = client.get("/api/v1/movies/genres")

    assert response.json()["data"]["genres"][0] == {"id": 18, "name": "Drama"}


def test_tv_details_and_season(client):
    show = client.get("/api/v1/tv/1399")
    season = client.get("/api/v1/tv/1399/season/1")

    assert show.status_code == 200
    assert show.json()["data"]["name"] == "Game of Thrones"
    assert show.json()["data"]["episodeRunTime"] == [60, 50]
    assert season.status_code == 200
    assert [e["episodeNumber"] for e in season.json()["data"]["episodes"]] == [1, 2, 3]


def test_popular_tv(client):
    response = client.get("/api/v1/tv/popular")

    assert response.json()["data"]["results"][0]["name"] == "Game of Thrones"


def test_multi_search(client):
    response = client.get("/api/v1/search/multi", params={"query": "fight"})

    assert response.json()["data"]["results"][0]["mediaType"] == "movie"


def test_trending(client, fake_tmdb):
    response = client.get("/api/v1/search/trending", params={"mediaType": "tv", "timeWindow": "day"})

    assert response.status_code == 200
    assert ("trending", "tv", "day") in fake_tmdb.calls


def test_trending_rejects_bad_parameters(client):
    assert client.get("/api/v1/search/trending", params={"mediaType": "person"}).status_code == 400
    assert client.get("/api/v1/search/trending", params={"timeWindow": "month"}).status_code == 400


def test_upstream_failure_is_not_found(client, fake_tmdb):
    fake_tmdb.available = False

    response = client.get("/api/v1/movies/popular")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "No se pudieron obtener las películas populares"}


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"


def test_unknown_route_uses_envelope(client):
    response = client.get("/api/v1/no-existe")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Ruta no encontrada"}
