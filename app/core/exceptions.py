"""
Errores de dominio lanzados por los servicios.

Cada error lleva el código HTTP al que corresponde; los handlers de
``app.main`` los convierten en la respuesta ``{success, message}``.
"""
from typing import Dict, Optional

from starlette import status


class DomainError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Solicitud inválida"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    default_message = "Datos inválidos"


class Unauthorized(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Usuario no autenticado"
    headers = {"WWW-Authenticate": "Bearer"}


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recurso no encontrado"


class DuplicateViewing(DomainError):
    default_message = "Ya has registrado este contenido"


class AlreadyMarked(DomainError):
    default_message = "Este episodio ya está marcado como visto"


class WrongContentType(DomainError):
    default_message = "Solo puedes marcar episodios de series"


class UpstreamUnavailable(NotFound):
    default_message = "El servicio de catálogo no está disponible"
