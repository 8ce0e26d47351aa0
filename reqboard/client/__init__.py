"""Client data layer: cached, invalidating access to the board API."""

from reqboard.client.cache import QueryCache, QueryKey, QueryState, QueryStatus
from reqboard.client.client import BoardClient, BoardClientError

__all__ = ["BoardClient", "BoardClientError", "QueryCache", "QueryKey", "QueryState", "QueryStatus"]
