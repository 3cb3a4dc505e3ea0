"""Repository interfaces for persistence layer implementations."""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from sqlalchemy.engine import Connection

from ..domain.models import Endpoint, EndpointQuery


@runtime_checkable
class EndpointStore(Protocol):
    """Persistence operations for notification endpoints.

    Mutating methods accept an optional ``tx`` connection. When given, the
    call joins that transaction and the caller decides its fate; otherwise
    the call commits on its own.
    """

    def get(self, endpoint_id: int) -> Endpoint:
        """Return the endpoint stored under ``endpoint_id``."""

    def find(self, query: EndpointQuery | None = None) -> list[Endpoint]:
        """Return endpoints matching ``query`` ordered by identifier."""

    def count(self) -> int:
        """Return the number of stored endpoints."""

    def create(self, endpoint: Endpoint, tx: Connection | None = None) -> int:
        """Persist a new endpoint and return its identifier."""

    def update(self, endpoint: Endpoint, tx: Connection | None = None) -> None:
        """Overwrite the stored fields of ``endpoint``."""

    def delete(self, endpoint_id: int, tx: Connection | None = None) -> None:
        """Remove a single endpoint."""

    def delete_many(self, endpoint_ids: Iterable[int], tx: Connection | None = None) -> None:
        """Remove several endpoints with one statement."""
