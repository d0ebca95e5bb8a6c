from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envoltorio común de todas las respuestas"""
    success: bool
    message: str
    data: Optional[T] = None


def ok(data=None, message: str = "Operación exitosa") -> dict:
    return {"success": True, "message": message, "data": data}


def error(message: str) -> dict:
    return {"success": False, "message": message}
