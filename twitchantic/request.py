"""
Request descriptors and pagination query construction.

A RequestDescriptor is created once per API call and never mutated.
The paginator derives a new descriptor for every page it fetches.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Scalar = str | int | bool
QueryValue = Scalar | list[Scalar] | None


def _render(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Immutable description of a single API call.

    Attributes:
        url: Resource path relative to the API base URL (e.g. "games/top")
        query: Base query parameters
        cursor: Cursor of the page to fetch (None for the first page)
        method: HTTP method
        scope: OAuth scope the call needs, forwarded to the auth provider
    """

    url: str
    query: Mapping[str, QueryValue] = field(default_factory=dict)
    cursor: str | None = None
    method: str = "GET"
    scope: str | None = None

    def with_cursor(self, cursor: str | None) -> "RequestDescriptor":
        """Returns a copy of this descriptor pointing at the given cursor."""
        return replace(self, cursor=cursor)

    def to_params(self) -> list[tuple[str, str]]:
        """
        Flattens the query into wire parameters.

        None values are dropped and list values expand to repeated keys.
        The cursor is sent as 'after' and wins over any 'after' in the query.
        """
        params: list[tuple[str, str]] = []
        for key, value in self.query.items():
            if value is None:
                continue
            if self.cursor is not None and key == "after":
                continue
            if isinstance(value, list):
                params.extend((key, _render(v)) for v in value)
            else:
                params.append((key, _render(value)))

        if self.cursor is not None:
            params.append(("after", self.cursor))
        return params


class HelixPagination(BaseModel):
    """
    Pagination options accepted by single-page API methods.

    Attributes:
        after: Cursor to start after (from a previous PaginatedResult.cursor)
        before: Cursor to end before
        limit: Maximum number of rows the server should return (1-100)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    after: str | None = None
    before: str | None = None
    limit: int | None = Field(default=None, ge=1, le=100)


def make_pagination_query(pagination: HelixPagination | None = None) -> dict[str, Any]:
    """
    Renders pagination options into query parameters.

    Only options that were set are included; 'limit' is sent as 'first'.
    """
    if pagination is None:
        return {}

    query: dict[str, Any] = {}
    if pagination.after is not None:
        query["after"] = pagination.after
    if pagination.before is not None:
        query["before"] = pagination.before
    if pagination.limit is not None:
        query["first"] = pagination.limit
    return query
