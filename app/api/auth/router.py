from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth.dependencies import get_current_active_user
from app.api.auth.models import User
from app.api.auth.schemas import AuthData, LoginRequest, RegisterRequest, UserInfo
from app.api.auth.service import AuthService
from app.core.responses import ApiResponse, ok
from app.database.database import get_db

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", response_model=ApiResponse[AuthData])
async def register(data: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    return ok(auth_service.register_user(data), "Usuario registrado exitosamente")


@router.post("/login", response_model=ApiResponse[AuthData])
async def login(data: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    return ok(auth_service.authenticate_user(data), "Inicio de sesión exitoso")


@router.get("/profile", response_model=ApiResponse[UserInfo])
async def profile(
        current_user: User = Depends(get_current_active_user),
        auth_service: AuthService = Depends(get_auth_service)
):
    return ok(auth_service.get_profile(current_user.id), "Perfil obtenido exitosamente")


@router.get("/verify", response_model=ApiResponse[bool])
async def verify(current_user: User = Depends(get_current_active_user)):
    return ok(True, "Token válido")
