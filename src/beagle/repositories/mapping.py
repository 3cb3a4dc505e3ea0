"""Conversion between ``endpoints`` rows and :class:`Endpoint` values."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from ..domain.models import Endpoint
from ..exceptions import InvalidArgumentError, MappingError

ENDPOINT_COLUMNS = ("id", "name", "url", "method", "headers")


def to_endpoint(row: Any) -> Endpoint:
    """Decode one result row, failing on missing columns or NULL values."""

    values = _as_mapping(row)
    missing = [column for column in ENDPOINT_COLUMNS if column not in values]
    if missing:
        raise MappingError(f"endpoint row is missing columns: {', '.join(missing)}")
    nulls = [column for column in ENDPOINT_COLUMNS if values[column] is None]
    if nulls:
        raise MappingError(f"endpoint row has NULL in: {', '.join(nulls)}")

    return Endpoint(
        id=int(values["id"]),
        name=str(values["name"]),
        url=str(values["url"]),
        method=str(values["method"]),
        headers=decode_headers(values["headers"]),
    )


def to_endpoints(rows: Iterable[Any], limit: int = 0) -> list[Endpoint]:
    """Decode a row set, keeping at most ``limit`` entities when ``limit > 0``."""

    result: list[Endpoint] = []
    for row in rows:
        if 0 < limit <= len(result):
            break
        result.append(to_endpoint(row))
    return result


def to_values(endpoint: Endpoint) -> dict[str, str]:
    """Column values written by insert and update statements."""

    return {
        "name": endpoint.name,
        "url": endpoint.url,
        "method": endpoint.method,
        "headers": encode_headers(endpoint.headers),
    }


def encode_headers(headers: Mapping[str, str] | None) -> str:
    try:
        return json.dumps(dict(headers or {}), sort_keys=True)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"endpoint headers are not serializable: {exc}") from exc


def decode_headers(raw: str | bytes) -> dict[str, str]:
    try:
        headers = json.loads(raw) if raw else {}
    except (json.JSONDecodeError, TypeError) as exc:
        raise MappingError(f"endpoint headers are not valid JSON: {exc}") from exc
    if not isinstance(headers, dict):
        raise MappingError(f"endpoint headers must decode to an object, got {type(headers).__name__}")
    return {str(key): str(value) for key, value in headers.items()}


def _as_mapping(row: Any) -> Mapping[str, Any]:
    if isinstance(row, Mapping):
        return row
    mapping = getattr(row, "_mapping", None)
    if mapping is None:
        raise MappingError(f"cannot decode endpoint from {type(row).__name__}")
    return mapping
