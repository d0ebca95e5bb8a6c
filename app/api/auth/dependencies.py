from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.api.auth.models import User
from app.api.auth.utils import decode_access_token
from app.core.exceptions import Unauthorized
from app.database.database import get_db

# Token en la cabecera Authorization: Bearer <token>
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/v1/auth/login", auto_error=False)


async def get_current_user(
        token: Optional[str] = Depends(oauth2_scheme),
        db: Session = Depends(get_db)
) -> User:
    """
    Usuario actual a partir del token Bearer.
    Se usa como dependencia en los endpoints protegidos.
    """
    if not token:
        raise Unauthorized()

    payload = decode_access_token(token)
    if payload is None:
        raise Unauthorized("Token inválido o expirado")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise Unauthorized("Token inválido o expirado")

    user = db.get(User, user_id)
    if user is None:
        raise Unauthorized()
    return user


async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise Unauthorized("Usuario inactivo")
    return current_user
