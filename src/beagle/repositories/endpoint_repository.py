"""SQLAlchemy implementation of :class:`EndpointStore`."""

from __future__ import annotations

from typing import Iterable

import sqlalchemy as sa
import structlog
from sqlalchemy.engine import Connection

from ..db.schema import endpoints
from ..domain.models import Endpoint, EndpointQuery
from ..exceptions import InvalidArgumentError, MappingError, ensure_found, ensure_identifier
from .base import SqlRepository
from .endpoint_query import compile_count, compile_find, compile_get
from .mapping import to_endpoint, to_endpoints, to_values

logger = structlog.get_logger(__name__)


def _ensure_named(endpoint: Endpoint) -> None:
    if not isinstance(endpoint.name, str) or not endpoint.name.strip():
        raise InvalidArgumentError("endpoint name must be a non-empty string")


class EndpointRepository(SqlRepository):
    """Read and write the ``endpoints`` table.

    Reads run on a pooled connection of their own. Writes go through the
    transaction coordinator: with ``tx`` they join the caller's transaction,
    without it they commit (or roll back) before returning.
    """

    table = endpoints
    entity = "endpoint"

    def get(self, endpoint_id: int) -> Endpoint:
        ensure_identifier(endpoint_id, entity=self.entity)
        rows = self._read("get", compile_get(endpoint_id))
        row = ensure_found(rows[0] if rows else None, entity=self.entity, identifier=endpoint_id)
        return to_endpoint(row)

    def find(self, query: EndpointQuery | None = None) -> list[Endpoint]:
        rows = self._read("find", compile_find(query))
        return to_endpoints(rows, query.take if query is not None else 0)

    def count(self) -> int:
        rows = self._read("count", compile_count())
        if not rows:
            raise MappingError("count query returned no row")
        return int(rows[0][0])

    def create(self, endpoint: Endpoint, tx: Connection | None = None) -> int:
        if endpoint is None:
            raise InvalidArgumentError("endpoint missed")
        if endpoint.id != 0:
            raise InvalidArgumentError("endpoint already created")
        _ensure_named(endpoint)
        stmt = sa.insert(endpoints).values(**to_values(endpoint))

        with self._transactions.scope(tx) as conn:
            result = self._execute(conn, "create", stmt)
            key = result.inserted_primary_key
            if not key or key[0] is None:
                raise MappingError("insert did not return a generated identifier")
            endpoint_id = int(key[0])

        logger.debug("endpoint_created", endpoint_id=endpoint_id, joined=tx is not None)
        return endpoint_id

    def update(self, endpoint: Endpoint, tx: Connection | None = None) -> None:
        """Overwrite the stored fields of ``endpoint``.

        An identifier with no matching row is not an error: the statement
        simply changes nothing.
        """
        if endpoint is None:
            raise InvalidArgumentError("endpoint missed")
        if endpoint.id == 0:
            raise InvalidArgumentError("endpoint not created yet")
        ensure_identifier(endpoint.id, entity=self.entity)
        _ensure_named(endpoint)
        stmt = (
            sa.update(endpoints)
            .where(endpoints.c.id == endpoint.id)
            .values(**to_values(endpoint))
        )

        with self._transactions.scope(tx) as conn:
            matched = self._execute(conn, "update", stmt).rowcount

        if matched == 0:
            logger.debug("endpoint_update_no_match", endpoint_id=endpoint.id)

    def delete(self, endpoint_id: int, tx: Connection | None = None) -> None:
        ensure_identifier(endpoint_id, entity=self.entity)
        stmt = sa.delete(endpoints).where(endpoints.c.id == endpoint_id)

        with self._transactions.scope(tx) as conn:
            self._execute(conn, "delete", stmt)

    def delete_many(self, endpoint_ids: Iterable[int], tx: Connection | None = None) -> None:
        if endpoint_ids is None:
            raise InvalidArgumentError("passed empty list of ids")
        ids = sorted({ensure_identifier(value, entity=self.entity) for value in endpoint_ids})
        if not ids:
            raise InvalidArgumentError("passed empty list of ids")
        stmt = sa.delete(endpoints).where(endpoints.c.id.in_(ids))

        with self._transactions.scope(tx) as conn:
            self._execute(conn, "delete_many", stmt)
