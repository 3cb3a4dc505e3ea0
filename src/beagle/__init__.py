"""Persistence layer for beagle notification endpoints."""

from .domain.models import Endpoint, EndpointQuery
from .exceptions import (
    ConstraintViolationError,
    InvalidArgumentError,
    MappingError,
    NotFoundError,
    RepositoryError,
    RollbackError,
    TransportError,
)

__all__ = [
    "Endpoint",
    "EndpointQuery",
    "RepositoryError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConstraintViolationError",
    "TransportError",
    "RollbackError",
    "MappingError",
]
