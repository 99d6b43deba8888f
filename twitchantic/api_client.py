from types import TracebackType
from typing import TYPE_CHECKING, Any

import httpx

from ._logging import logger, redact_token
from .auth import AuthProvider
from .cache import DerivedValueCache
from .config import ClientOptions
from .exceptions import TransportError, handle_http_errors
from .request import RequestDescriptor
from .response import Page

if TYPE_CHECKING:
    from .helix import HelixApiGroup


class ApiClient:
    """
    Entry point for talking to the Helix API.

    Owns the HTTP transport and the auth provider. API groups and the
    entities they return hold a reference to the client they came from;
    there is no global default client.

    Usage:
        with ApiClient(StaticAuthProvider(client_id, token)) as client:
            game = client.helix.games.get_game_by_name("Hearthstone")
    """

    def __init__(
        self,
        auth_provider: AuthProvider,
        options: ClientOptions | None = None,
        http_client: httpx.Client | None = None,
    ):
        self.auth_provider = auth_provider
        self.options = options or ClientOptions()
        self._derived = DerivedValueCache()

        # Only close what we created; an injected client belongs to the caller
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(
            base_url=self.options.base_url,
            timeout=httpx.Timeout(self.options.timeout),
            headers=self.options.build_headers(),
        )

    @property
    def helix(self) -> "HelixApiGroup":
        """The Helix API groups (games, bits, extensions)."""
        from .helix import HelixApiGroup

        return self._derived.get("helix", lambda: HelixApiGroup(self))

    def _auth_headers(self, scope: str | None) -> dict[str, str]:
        headers = {"Client-ID": self.auth_provider.client_id}
        token = self.auth_provider.get_access_token(scope)
        if token is not None:
            headers["Authorization"] = f"Bearer {token.access_token}"
        return headers

    def call_api(self, descriptor: RequestDescriptor) -> dict[str, Any]:
        """
        Performs one request and returns the decoded JSON body.

        Raises:
            ScopeError: If the auth provider can not supply the required scope
            TransportError: If the request fails or the body is not JSON
        """
        headers = self._auth_headers(descriptor.scope)
        params = descriptor.to_params()

        logger.debug(
            "Calling API",
            extra={
                "url": descriptor.url,
                "method": descriptor.method,
                "param_count": len(params),
                "cursor_hash": redact_token(descriptor.cursor),
            },
        )

        with handle_http_errors(url=descriptor.url):
            response = self._http.request(
                descriptor.method, descriptor.url, params=params, headers=headers
            )
            response.raise_for_status()

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                message="Response body is not valid JSON", url=descriptor.url, original_error=e
            ) from e

        if not isinstance(body, dict):
            raise TransportError(
                message=f"Expected a JSON object, got {type(body).__name__}", url=descriptor.url
            )

        logger.debug(
            "API call successful",
            extra={"url": descriptor.url, "status": response.status_code},
        )
        return body

    def fetch_page(self, descriptor: RequestDescriptor) -> Page:
        """Fetches one page for the paginator."""
        return Page.from_payload(self.call_api(descriptor))

    # --- LIFECYCLE ---

    def close(self) -> None:
        """Closes the underlying HTTP client if this ApiClient created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ApiClient(base_url={self.options.base_url!r})"
