"""Compile :class:`EndpointQuery` filters into parameterized statements."""

from __future__ import annotations

import enum

import sqlalchemy as sa

from ..db.schema import endpoints
from ..domain.models import WILDCARD, EndpointQuery


class NameMatch(enum.Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    CONTAINS = "contains"


def parse_name_pattern(pattern: str) -> tuple[NameMatch, str]:
    """Split ``pattern`` into a match mode and the value to bind.

    ``*foo*`` is a substring match, ``foo*`` a prefix match, ``*foo`` a
    suffix match and ``foo`` an exact match. Once a leading or trailing
    marker is present every ``*`` is removed from the bound value.
    """

    leading = pattern.startswith(WILDCARD)
    trailing = pattern.endswith(WILDCARD)
    if not (leading or trailing):
        return NameMatch.EXACT, pattern

    value = pattern.replace(WILDCARD, "")
    if leading and trailing:
        return NameMatch.CONTAINS, value
    if trailing:
        return NameMatch.PREFIX, value
    return NameMatch.SUFFIX, value


def name_condition(pattern: str) -> sa.ColumnElement[bool]:
    mode, value = parse_name_pattern(pattern)
    column = endpoints.c.name
    if mode is NameMatch.CONTAINS:
        return column.contains(value, autoescape=True)
    if mode is NameMatch.PREFIX:
        return column.startswith(value, autoescape=True)
    if mode is NameMatch.SUFFIX:
        return column.endswith(value, autoescape=True)
    return column == value


def compile_find(query: EndpointQuery | None = None) -> sa.Select:
    """Build the SELECT used by ``find``; rows always come back ordered by id."""

    stmt = sa.select(
        endpoints.c.id,
        endpoints.c.name,
        endpoints.c.url,
        endpoints.c.method,
        endpoints.c.headers,
    )
    if query is None:
        return stmt.order_by(endpoints.c.id.asc())

    if query.name:
        stmt = stmt.where(name_condition(query.name))
    stmt = stmt.order_by(endpoints.c.id.asc())

    if query.is_paginated:
        stmt = stmt.limit(query.take).offset(max(query.skip, 0))
    return stmt


def compile_get(endpoint_id: int) -> sa.Select:
    return compile_find().where(endpoints.c.id == endpoint_id).limit(1)


def compile_count() -> sa.Select:
    return sa.select(sa.func.count(endpoints.c.id))


__all__ = [
    "NameMatch",
    "compile_count",
    "compile_find",
    "compile_get",
    "name_condition",
    "parse_name_pattern",
]
