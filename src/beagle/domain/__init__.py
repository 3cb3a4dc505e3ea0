"""Domain entities of the endpoint registry."""

from .models import Endpoint, EndpointQuery, WILDCARD

__all__ = ["Endpoint", "EndpointQuery", "WILDCARD"]
