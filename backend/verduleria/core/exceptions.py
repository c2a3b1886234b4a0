"""
Excepciones centralizadas

Every failure the workflows can report is one of these kinds. The API layer
translates them to HTTP responses through a single exception handler
(see verduleria.main).
"""
from typing import Optional, Dict, Any


class VerduleriaError(Exception):
    """
    Base exception for the application.

    Carries the HTTP status it maps to, a stable machine-readable code and a
    human-readable detail naming the offending id or field.
    """
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    detail: str = "Error interno del servidor"

    def __init__(self, detail: Optional[str] = None, extra: Dict[str, Any] = None):
        self.detail = detail or self.__class__.detail
        self.extra = extra or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Response body / logging payload"""
        return {
            "code": self.code,
            "message": self.detail,
            **self.extra
        }


class NotFoundError(VerduleriaError):
    """Referenced record does not exist (404)."""
    status_code = 404
    code = "NOT_FOUND"
    detail = "Recurso no encontrado"


class InvalidArgumentError(VerduleriaError):
    """Input that cannot be processed, e.g. order without customer (400)."""
    status_code = 400
    code = "INVALID_ARGUMENT"
    detail = "Argumento inválido"


class ConflictError(VerduleriaError):
    """Conflict with existing data, e.g. a second delivery note (409)."""
    status_code = 409
    code = "CONFLICT"
    detail = "Conflicto con el estado actual del recurso"


class InvalidStateError(VerduleriaError):
    """Operation not allowed in the order's current status (409)."""
    status_code = 409
    code = "INVALID_STATE"
    detail = "Operación no permitida en el estado actual del pedido"


class CriteriaParseError(VerduleriaError):
    """Malformed criteria filter or unknown field (400)."""
    status_code = 400
    code = "CRITERIA_PARSE_ERROR"
    detail = "Filtro de búsqueda inválido"
