from collections.abc import Generator, Iterable
from contextlib import contextmanager
from typing import Any

import httpx


class TwitchanticError(Exception):
    """Base exception for all Twitchantic errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class TransportError(TwitchanticError):
    """Raised when a request to the API could not be completed."""

    def __init__(
        self,
        message: str = "Request failed",
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.url = url


class RequestTimeoutError(TransportError):
    """Raised when a request to the API times out."""

    def __init__(
        self,
        message: str = "Request timed out",
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, url, original_error)


class HttpStatusError(TransportError):
    """Raised when the API answers with a non-success status code."""

    def __init__(
        self,
        status_code: int,
        body: str = "",
        url: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        msg = f"API responded with status {status_code}"
        if body:
            msg += f": {body}"
        super().__init__(msg, url, original_error)
        self.status_code = status_code
        self.body = body


class UnauthorizedError(HttpStatusError):
    """Raised when the API rejects the supplied credentials (401)."""


class NotFoundError(HttpStatusError):
    """Raised when the requested resource does not exist (404)."""


class RateLimitExceededError(HttpStatusError):
    """Raised when the API throttles the client (429)."""

    def __init__(
        self,
        status_code: int = 429,
        body: str = "",
        url: str | None = None,
        reset_at: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(status_code, body, url, original_error)
        self.reset_at = reset_at


class MappingError(TwitchanticError):
    """Raised when a response row cannot be turned into a domain object."""

    def __init__(
        self,
        message: str,
        row: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.row = row


class ScopeError(TwitchanticError):
    """Raised when a token is requested for scopes it was not granted."""

    def __init__(self, requested: Iterable[str], available: Iterable[str]) -> None:
        self.requested = sorted(set(requested))
        self.available = sorted(set(available))
        self.missing = sorted(set(self.requested) - set(self.available))
        super().__init__(
            f"This token does not have the requested scopes ({', '.join(self.requested)}) "
            f"and can not be upgraded; missing: {', '.join(self.missing)}"
        )


@contextmanager
def handle_http_errors(url: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches httpx exceptions
    and raises the appropriate TransportError subclass.

    Args:
        url: Optional resource path for better error messages

    Usage:
        with handle_http_errors(url="games/top"):
            response = http.get(...)
            response.raise_for_status()
    """
    try:
        yield
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(url=url, original_error=e) from e
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        body = e.response.text

        if status_code == 401:
            raise UnauthorizedError(status_code, body, url=url, original_error=e) from e

        if status_code == 404:
            raise NotFoundError(status_code, body, url=url, original_error=e) from e

        if status_code == 429:
            reset = e.response.headers.get("Ratelimit-Reset")
            raise RateLimitExceededError(
                status_code,
                body,
                url=url,
                reset_at=int(reset) if reset and reset.isdigit() else None,
                original_error=e,
            ) from e

        raise HttpStatusError(status_code, body, url=url, original_error=e) from e
    except httpx.HTTPError as e:
        # Connection failures, protocol errors, etc.
        raise TransportError(
            message=f"Request failed ({type(e).__name__}): {e}", url=url, original_error=e
        ) from e
