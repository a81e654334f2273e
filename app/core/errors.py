# app/core/errors.py
from __future__ import annotations
from typing import Any, Optional


class DomainError(Exception):
    """Erro de regra de negócio; o handler em main.py converte em JSON."""

    status_code = 400
    default_code = "DOMAIN_ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class NotFoundError(DomainError):
    status_code = 404
    default_code = "NOT_FOUND"


class ConflictError(DomainError):
    status_code = 409
    default_code = "CONFLICT"


class InvalidInputError(DomainError):
    status_code = 422
    default_code = "INVALID_INPUT"
