"""SQLAlchemy-backed repository implementations."""

from .endpoint_repository import EndpointRepository
from .interfaces import EndpointStore

__all__ = ["EndpointRepository", "EndpointStore"]
