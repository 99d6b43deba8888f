from .api_client import ApiClient
from .auth import AccessToken, AuthProvider, StaticAuthProvider
from .cache import DerivedValueCache
from .config import ClientOptions
from .exceptions import (
    HttpStatusError,
    MappingError,
    NotFoundError,
    RateLimitExceededError,
    RequestTimeoutError,
    ScopeError,
    TransportError,
    TwitchanticError,
    UnauthorizedError,
)
from .pagination import PageFetcher, PaginatedResult, Paginator, create_paginated_result
from .request import HelixPagination, RequestDescriptor, make_pagination_query
from .response import Page

__all__ = [
    "ApiClient",
    "ClientOptions",
    # Auth
    "AuthProvider",
    "StaticAuthProvider",
    "AccessToken",
    # Pagination
    "RequestDescriptor",
    "HelixPagination",
    "make_pagination_query",
    "Page",
    "PageFetcher",
    "PaginatedResult",
    "Paginator",
    "create_paginated_result",
    "DerivedValueCache",
    # Exceptions
    "TwitchanticError",
    "TransportError",
    "RequestTimeoutError",
    "HttpStatusError",
    "UnauthorizedError",
    "NotFoundError",
    "RateLimitExceededError",
    "MappingError",
    "ScopeError",
]
