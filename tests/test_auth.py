from app.api.auth.utils import create_access_token, decode_access_token, get_password_hash, verify_password


def test_register_returns_token_and_user(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"nombreUsuario": "maria", "contrasena": "secreto123", "edad": 28}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Usuario registrado exitosamente"
    assert body["data"]["token"]
    assert body["data"]["usuario"]["nombreUsuario"] == "maria"
    assert body["data"]["usuario"]["edad"] == 28


def test_register_duplicate_username(client, register_user):
    register_user(username="maria")

    response = client.post(
        "/api/v1/auth/register",
        json={"nombreUsuario": "maria", "contrasena": "otra123", "edad": 40}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "El nombre de usuario ya está en uso"}


def test_register_validation_uses_envelope(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"nombreUsuario": "ab", "contrasena": "123", "edad": 200}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"]


def test_login(client, register_user):
    register_user(username="pedro", password="clave123")

    response = client.post("/api/v1/auth/login", json={"nombreUsuario": "pedro", "contrasena": "clave123"})

    assert response.status_code == 200
    assert response.json()["data"]["usuario"]["nombreUsuario"] == "pedro"


def test_login_wrong_password(client, register_user):
    register_user(username="pedro", password="clave123")

    response = client.post("/api/v1/auth/login", json={"nombreUsuario": "pedro", "contrasena": "incorrecta"})

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_login_unknown_user(client):
    response = client.post("/api/v1/auth/login", json={"nombreUsuario": "nadie", "contrasena": "clave123"})

    assert response.status_code == 401


def test_profile_and_verify(client, register_user):
    headers = register_user(username="lucia", age=35)

    profile = client.get("/api/v1/auth/profile", headers=headers)
    verify = client.get("/api/v1/auth/verify", headers=headers)

    assert profile.status_code == 200
    assert profile.json()["data"]["nombreUsuario"] == "lucia"
    assert profile.json()["data"]["edad"] == 35
    assert verify.json() == {"success": True, "message": "Token válido", "data": True}


def test_protected_route_requires_token(client):
    response = client.get("/api/v1/viewings")

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_invalid_token_rejected(client):
    response = client.get("/api/v1/auth/profile", headers={"Authorization": "Bearer no-es-un-token"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["message"] == "Token inválido o expirado"


def test_token_for_missing_user_rejected(client):
    token = create_access_token({"sub": "999", "username": "fantasma"})

    response = client.get("/api/v1/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_token_round_trip_and_password_hash():
    token = create_access_token({"sub": "7"})
    assert decode_access_token(token)["sub"] == "7"
    assert decode_access_token("basura") is None

    hashed = get_password_hash("secreto123")
    assert hashed != "secreto123"
    assert verify_password("secreto123", hashed)
    assert not verify_password("otra", hashed)
