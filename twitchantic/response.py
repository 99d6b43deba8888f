from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

Row = dict[str, Any]


@dataclass(frozen=True)
class Page:
    """
    One raw page as returned by the API.

    Attributes:
        rows: Raw rows in server order
        cursor: Cursor of the following page (None when this is the last page)
        total: Total size of the collection, when the server reports it
        payload: The full decoded response body
    """

    rows: tuple[Row, ...]
    cursor: str | None = None
    total: int | None = None
    payload: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_last(self) -> bool:
        """Returns True if the server did not hand out a further cursor."""
        return self.cursor is None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Page":
        """
        Builds a Page from a decoded response body.

        Only 'data', 'pagination.cursor' and 'total' are inspected;
        an empty cursor string counts as no cursor.
        """
        rows = tuple(payload.get("data") or ())

        pagination = payload.get("pagination") or {}
        cursor = pagination.get("cursor") if isinstance(pagination, Mapping) else None

        total = payload.get("total")
        return cls(
            rows=rows,
            cursor=cursor or None,
            total=int(total) if total is not None else None,
            payload=payload,
        )
