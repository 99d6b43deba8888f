from dataclasses import dataclass, field

DEFAULT_BASE_URL = "https://api.twitch.tv/helix/"


@dataclass
class ClientOptions:
    """
    Connection settings for an ApiClient.

    Only used when the client builds its own httpx.Client; an injected
    http client keeps whatever configuration it was created with.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    user_agent: str = "twitchantic"
    extra_headers: dict[str, str] = field(default_factory=dict)

    def build_headers(self) -> dict[str, str]:
        """
        Headers sent with every request, before authentication is applied.

        Returns:
            A new dict; callers may mutate it freely.
        """
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        headers.update(self.extra_headers)
        return headers
