"""
Authentication providers.

The API client asks its provider for a token before every request,
passing the scope the endpoint needs.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ._logging import logger, redact_token
from .exceptions import ScopeError

Scopes = str | Iterable[str]


def normalize_scopes(scopes: Scopes | None) -> list[str]:
    """
    Turns a space-separated scope string or an iterable of scopes into a list.
    Empty entries are dropped.
    """
    if scopes is None:
        return []
    if isinstance(scopes, str):
        scopes = scopes.split(" ")
    return [scope for scope in scopes if scope]


class AccessToken(BaseModel):
    """An OAuth access token together with the scopes it was granted."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(repr=False)
    refresh_token: str | None = Field(default=None, repr=False)
    scope: list[str] = Field(default_factory=list)
    expires_in: int | None = None


@runtime_checkable
class AuthProvider(Protocol):
    """Supplies credentials to an ApiClient."""

    @property
    def client_id(self) -> str: ...

    @property
    def current_scopes(self) -> list[str]: ...

    def get_access_token(self, scopes: Scopes | None = None) -> AccessToken | None: ...


class StaticAuthProvider:
    """
    An auth provider that always returns the same initially given credentials.

    The token can not be upgraded: asking for a scope it was not created
    with raises ScopeError. Supply a token covering every scope you need.

    Usage:
        provider = StaticAuthProvider("client-id", "token", scopes=["bits:read"])
        client = ApiClient(provider)
    """

    def __init__(
        self, client_id: str, access_token: str | None = None, scopes: Scopes = ()
    ) -> None:
        self._client_id = client_id or ""
        self._access_token: AccessToken | None = None
        self._scopes: list[str] = []

        if access_token:
            self._scopes = normalize_scopes(scopes)
            self._access_token = AccessToken(access_token=access_token, scope=self._scopes)

    @property
    def client_id(self) -> str:
        """The client ID."""
        return self._client_id

    @property
    def current_scopes(self) -> list[str]:
        """The scopes that are currently available using the access token."""
        return list(self._scopes)

    def get_access_token(self, scopes: Scopes | None = None) -> AccessToken | None:
        """
        Returns the stored access token.

        Args:
            scopes: Scopes the caller needs, as a list or a space-separated string

        Raises:
            ScopeError: If any requested scope is not one the token was given
        """
        requested = normalize_scopes(scopes)
        if set(requested) - set(self._scopes):
            logger.warning(
                "Requested scopes not covered by static token",
                extra={"requested": requested, "available": self._scopes},
            )
            raise ScopeError(requested, self._scopes)

        return self._access_token

    def set_access_token(self, token: AccessToken) -> None:
        """Replaces the stored token."""
        logger.debug(
            "Access token replaced", extra={"token_hash": redact_token(token.access_token)}
        )
        self._access_token = token

    def __repr__(self) -> str:
        return f"StaticAuthProvider(scopes={self._scopes!r})"
