import re
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.core.schemas import CamelModel


class RegisterRequest(CamelModel):
    nombre_usuario: str = Field(..., min_length=3, max_length=50, description="Nombre de usuario")
    contrasena: str = Field(..., min_length=6, description="Contraseña")
    edad: int = Field(..., ge=0, le=120, description="Edad")

    @field_validator('nombre_usuario')
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r'^[\w.-]+$', v):
            raise ValueError('El nombre de usuario solo admite letras, números, _, . y -')
        return v


class LoginRequest(CamelModel):
    nombre_usuario: str = Field(..., min_length=1)
    contrasena: str = Field(..., min_length=1)


class UserInfo(CamelModel):
    id: int
    nombre_usuario: str
    edad: int
    fecha_registro: Optional[datetime] = None


class AuthData(CamelModel):
    token: str
    usuario: UserInfo
