"""Entities handled by the registry repositories."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Notification target called when a tracked peripheral changes state.

    ``id`` is ``0`` until the endpoint has been persisted; the repository
    returns the assigned identifier instead of mutating the instance.
    """

    name: str
    url: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    id: int = 0


@dataclass(frozen=True, slots=True)
class EndpointQuery:
    """Optional criteria for :meth:`EndpointRepository.find`.

    ``name`` may carry leading and/or trailing ``*`` markers selecting a
    suffix, prefix or substring match. ``take <= 0`` means unbounded, in
    which case ``skip`` is ignored.
    """

    name: str = ""
    take: int = 0
    skip: int = 0

    @property
    def is_paginated(self) -> bool:
        return self.take > 0
