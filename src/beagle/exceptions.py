"""Domain level exceptions and helpers for repository layers."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy import exc as sa_exc

__all__ = [
    "AppError",
    "RepositoryError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConstraintViolationError",
    "TransportError",
    "RollbackError",
    "MappingError",
    "ensure_identifier",
    "ensure_found",
    "translate_sqlalchemy_error",
    "handle_sqlalchemy_errors",
]


class AppError(Exception):
    """Base class for application specific errors."""


class RepositoryError(AppError):
    """Base class for persistence layer failures."""


class InvalidArgumentError(RepositoryError, ValueError):
    """Raised when caller input is rejected before the store is touched."""


class NotFoundError(RepositoryError, LookupError):
    """Raised when a record could not be located."""


class ConstraintViolationError(RepositoryError):
    """Raised when the store rejects a write because of a constraint."""


class TransportError(RepositoryError):
    """Raised when the store or the connection itself fails."""


class MappingError(RepositoryError):
    """Raised when a result row cannot be decoded into an entity."""


class RollbackError(RepositoryError):
    """Raised when rolling back after a failure fails as well.

    Both the failure that triggered the rollback and the rollback failure are
    kept; the exception is chained from ``cause``.
    """

    def __init__(self, cause: BaseException, rollback_error: BaseException) -> None:
        super().__init__(f"rollback failed ({rollback_error}) after: {cause}")
        self.cause = cause
        self.rollback_error = rollback_error


@dataclass(slots=True)
class _EntityContext:
    """Internal helper describing the entity for error messages."""

    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def ensure_identifier(value: object, *, entity: str) -> int:
    """Return ``value`` when it is a persisted identifier (a positive int)."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{entity} id must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidArgumentError(f"{entity} id must be greater than 0")
    return value


def ensure_found(record: object | None, *, entity: str, identifier: object) -> object:
    """Ensure a record exists, otherwise raise :class:`NotFoundError`."""

    if record is None:
        raise NotFoundError(f"{entity} '{identifier}' not found")
    return record


def translate_sqlalchemy_error(exc: BaseException, *, entity: str | None = None) -> BaseException:
    """Map a SQLAlchemy exception onto the repository taxonomy.

    Exceptions that are already :class:`RepositoryError` (or not SQLAlchemy
    errors at all) are returned unchanged.
    """

    context = _EntityContext(entity)
    if isinstance(exc, sa_exc.IntegrityError):
        return ConstraintViolationError(context.format(f"integrity constraint violated: {exc.orig}"))
    if isinstance(exc, sa_exc.DBAPIError):
        return TransportError(context.format(f"database operation failed: {exc.orig}"))
    if isinstance(exc, sa_exc.SQLAlchemyError):
        return TransportError(context.format(str(exc)))
    return exc


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain specific ones."""

    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        raise translate_sqlalchemy_error(exc, entity=entity) from exc
