"""
Pagination support for Twitchantic.

This module provides the single-page PaginatedResult and the lazy, cursor-walking
Paginator used by every paginated API method.
"""

from collections import deque
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from ._logging import logger, redact_token
from .request import RequestDescriptor
from .response import Page, Row

T = TypeVar("T")

ResultMapper = Callable[[Row], T]
DedupKey = Callable[[Row], str | None]


class PageFetcher(Protocol):
    """Anything that can fetch one raw page for a request descriptor."""

    def fetch_page(self, descriptor: RequestDescriptor) -> Page: ...


def row_id(row: Row) -> str | None:
    """Default dedup key: the row's 'id', if it has one."""
    value = row.get("id")
    return str(value) if value is not None else None


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    Represents a single page of mapped results.

    Attributes:
        items: Mapped objects for this page
        total: Size of the whole collection if the server reported it, else None
        cursor: Cursor for the next page (None if no more pages)
    """

    items: list[T]
    total: int | None = None
    cursor: str | None = None

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages available."""
        return self.cursor is not None

    @property
    def count(self) -> int:
        """Number of items in this page. Not a substitute for total."""
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def create_paginated_result(page: Page, mapper: ResultMapper[T]) -> PaginatedResult[T]:
    """
    Maps a raw page into a PaginatedResult. Pure, performs no I/O.

    Errors raised by the mapper propagate unchanged.
    """
    return PaginatedResult(
        items=[mapper(row) for row in page.rows], total=page.total, cursor=page.cursor
    )


class Paginator(Iterable[T]):
    """
    Lazily walks a cursor-paginated resource.

    Pages are fetched only when the caller asks for more items than are
    buffered. Rows repeated across adjacent pages (same dedup key) are
    yielded once. Once the server stops handing out cursors the paginator
    is finished for good; there is no restart.

    A Paginator is meant for a single owner. Its state is not locked, so
    it must not be driven from two threads at once.

    Usage:
        paginator = client.helix.games.get_top_games_paginated()
        for game in paginator:
            print(game.name)
    """

    def __init__(
        self,
        descriptor: RequestDescriptor,
        fetcher: PageFetcher,
        mapper: ResultMapper[T],
        dedup_key: DedupKey | None = row_id,
    ):
        self.descriptor = descriptor
        self.fetcher = fetcher
        self.mapper = mapper
        self.dedup_key = dedup_key

        # Internal state of the walk
        self._cursor: str | None = descriptor.cursor
        self._finished = False
        self._seen_keys: set[str] = set()
        self._buffer: deque[T] = deque()
        self._current: list[T] = []
        self._pages_fetched = 0

    # --- STATE ---

    @property
    def current_cursor(self) -> str | None:
        """
        Cursor the next fetch will use.
        Starts as the descriptor's cursor (None unless one was given) and is None once finished.
        """
        return None if self._finished else self._cursor

    @property
    def is_finished(self) -> bool:
        """True once the server returned a page without a cursor."""
        return self._finished

    @property
    def current(self) -> list[T]:
        """Items of the most recently fetched page, after deduplication."""
        return list(self._current)

    # --- CONSUMPTION ---

    def get_next(self) -> T | None:
        """
        Returns the next item, or None when the paginator is exhausted.

        Fetches further pages only if the buffer is empty. Empty pages that
        still carry a cursor are skipped over.
        """
        if not self._fill_buffer():
            return None
        return self._buffer.popleft()

    def get_next_page(self) -> list[T]:
        """
        Returns the next batch of items.

        Buffered items are returned first; otherwise pages are fetched until
        one yields new items. An empty list means the paginator is exhausted.
        """
        self._fill_buffer()

        batch = list(self._buffer)
        self._buffer.clear()
        return batch

    def get_all(self) -> list[T]:
        """
        Drains every remaining item into a list.
        A second call on a drained paginator returns an empty list.
        """
        return list(self)

    def __iter__(self) -> Iterator[T]:
        """
        Lazy iteration: pages are requested only as the loop consumes items.
        Breaking out of the loop early leaves the rest unfetched.
        """
        while self._fill_buffer():
            yield self._buffer.popleft()

    # --- FETCHING ---

    def _fill_buffer(self) -> bool:
        """Fetches pages until an item is buffered. Returns False once exhausted."""
        while not self._buffer:
            if self._finished:
                return False
            self._fetch_next_page()
        return True

    def _fetch_next_page(self) -> None:
        """
        Fetches one page and buffers its new items.

        State is only updated after both the fetch and the mapping succeed,
        so a failed call can be retried against the same cursor.
        """
        requested_cursor = self._cursor
        descriptor = self.descriptor.with_cursor(requested_cursor)

        if self._pages_fetched == 0:
            logger.info(
                "Starting pagination",
                extra={"url": descriptor.url, "has_cursor": requested_cursor is not None},
            )

        logger.debug(
            "Fetching page",
            extra={
                "url": descriptor.url,
                "page": self._pages_fetched + 1,
                "cursor_hash": redact_token(requested_cursor),
            },
        )

        page = self.fetcher.fetch_page(descriptor)
        mapped = [(row, self.mapper(row)) for row in page.rows]

        # Deduplicate against rows seen on earlier pages (and within this one)
        fresh: list[T] = []
        new_keys: set[str] = set()
        for row, item in mapped:
            key = self.dedup_key(row) if self.dedup_key else None
            if key is not None:
                if key in self._seen_keys or key in new_keys:
                    continue
                new_keys.add(key)
            fresh.append(item)

        skipped = len(mapped) - len(fresh)
        if skipped:
            logger.debug(
                "Skipped repeated rows",
                extra={"url": descriptor.url, "skipped": skipped},
            )

        # Commit
        self._pages_fetched += 1
        self._seen_keys |= new_keys
        self._buffer.extend(fresh)
        self._current = fresh

        if page.cursor is None:
            self._finished = True
        elif not fresh and page.cursor == requested_cursor:
            logger.warning(
                "Page without new rows returned the cursor it was requested with, stopping",
                extra={"url": descriptor.url, "cursor_hash": redact_token(page.cursor)},
            )
            self._finished = True
        else:
            self._cursor = page.cursor

        if self._finished:
            self._cursor = None
            logger.info(
                "Pagination finished",
                extra={
                    "url": descriptor.url,
                    "pages": self._pages_fetched,
                    "unique_rows": len(self._seen_keys),
                },
            )
