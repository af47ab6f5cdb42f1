"""Remote record store - client for the hosted data and identity service."""

from scholartrack.remote.client import ApperClient, RecordStoreClient, initialize_client
from scholartrack.remote.exceptions import (
    RecordNotFoundError,
    RemoteConfigError,
    RemoteStoreError,
)
from scholartrack.remote.models import (
    GroupOperator,
    MatchOperator,
    OrderBy,
    PagingInfo,
    Predicate,
    QueryParams,
    SortDirection,
    WhereGroup,
)

__all__ = [
    "ApperClient",
    "GroupOperator",
    "MatchOperator",
    "OrderBy",
    "PagingInfo",
    "Predicate",
    "QueryParams",
    "RecordNotFoundError",
    "RecordStoreClient",
    "RemoteConfigError",
    "RemoteStoreError",
    "SortDirection",
    "WhereGroup",
    "initialize_client",
]
