from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Mapping

from src.domain.errors import DomainError, DuplicateTagError


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(AppError):
    code = "auth_error"
    status_code = 401


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class PersistenceError(InfrastructureError):
    """A write was rejected; the local snapshot has been re-fetched."""

    code = "persistence_error"
    status_code = 503


class ServiceUnavailable(InfrastructureError):
    code = "service_unavailable"
    status_code = 503


@contextmanager
def domain_errors() -> Iterator[None]:
    """Translate lifecycle rule violations into application errors."""
    try:
        yield
    except DuplicateTagError as exc:
        raise ConflictError(exc.message, details={"tag_number": exc.tag_number}) from exc
    except DomainError as exc:
        raise ValidationError(exc.message) from exc
