import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.auth.models import User
from app.api.auth.schemas import AuthData, LoginRequest, RegisterRequest, UserInfo
from app.api.auth.utils import create_access_token, get_password_hash, verify_password
from app.core.config import Settings, settings
from app.core.exceptions import NotFound, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "El nombre de usuario ya está en uso"


class AuthService:
    def __init__(self, db: Session, config: Settings = settings):
        self.db = db
        self.config = config

    def register_user(self, data: RegisterRequest) -> AuthData:
        if self._get_user_by_username(data.nombre_usuario):
            raise ValidationError(USERNAME_TAKEN)

        user = User(
            username=data.nombre_usuario,
            hashed_password=get_password_hash(data.contrasena),
            age=data.edad,
            is_active=True
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError(USERNAME_TAKEN)
        self.db.refresh(user)

        logger.info("Usuario registrado: %s", user.username)
        return self._auth_data(user)

    def authenticate_user(self, data: LoginRequest) -> AuthData:
        user = self._get_user_by_username(data.nombre_usuario)
        if not user or not user.is_active:
            raise Unauthorized("Usuario no encontrado o inactivo")
        if not verify_password(data.contrasena, user.hashed_password):
            raise Unauthorized("Contraseña incorrecta")
        return self._auth_data(user)

    def get_profile(self, user_id: int) -> UserInfo:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFound("Usuario no encontrado")
        return self.user_info(user)

    def create_token(self, user: User) -> str:
        return create_access_token(
            {"sub": str(user.id), "username": user.username},
            config=self.config
        )

    @staticmethod
    def user_info(user: User) -> UserInfo:
        return UserInfo(
            id=user.id,
            nombre_usuario=user.username,
            edad=user.age,
            fecha_registro=user.created_at
        )

    def _auth_data(self, user: User) -> AuthData:
        return AuthData(token=self.create_token(user), usuario=self.user_info(user))

    def _get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()
