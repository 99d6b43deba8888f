from pydantic import BaseModel, ConfigDict

from ..pagination import PaginatedResult, Paginator
from ..request import HelixPagination, RequestDescriptor, make_pagination_query
from .base import BaseApi, HelixEntity


class HelixGameData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    box_art_url: str = ""


class HelixGame(HelixEntity[HelixGameData]):
    """A game as listed on Twitch."""

    data_model = HelixGameData
    exported_fields = ("id", "name", "box_art_url")

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def name(self) -> str:
        return self._data.name

    @property
    def box_art_url(self) -> str:
        """The URL template of the box art, with '{width}' and '{height}' placeholders."""
        return self._data.box_art_url

    def get_box_art_url(self, width: int, height: int) -> str:
        """Builds the box art URL for the given dimensions."""
        return self._data.box_art_url.replace("{width}", str(width)).replace(
            "{height}", str(height)
        )


class HelixGameApi(BaseApi):
    """
    The Helix API methods that deal with games.

    Usage:
        game = client.helix.games.get_game_by_name("Hearthstone")
        for game in client.helix.games.get_top_games_paginated():
            print(game.name)
    """

    def get_games_by_ids(self, ids: list[str]) -> list[HelixGame]:
        """Retrieves the games with the given IDs."""
        return self._get_games("id", ids)

    def get_games_by_names(self, names: list[str]) -> list[HelixGame]:
        """Retrieves the games with the given names."""
        return self._get_games("name", names)

    def get_game_by_id(self, id: str) -> HelixGame | None:
        """Retrieves a game by ID. Returns None if it does not exist."""
        games = self._get_games("id", [id])
        return games[0] if games else None

    def get_game_by_name(self, name: str) -> HelixGame | None:
        """Retrieves a game by name. Returns None if it does not exist."""
        games = self._get_games("name", [name])
        return games[0] if games else None

    def get_top_games(self, pagination: HelixPagination | None = None) -> PaginatedResult[HelixGame]:
        """
        Retrieves one page of the most viewed games at the moment.

        Args:
            pagination: Cursor and page size options
        """
        descriptor = RequestDescriptor(url="games/top", query=make_pagination_query(pagination))
        return self._get_paginated_result(descriptor, HelixGame)

    def get_top_games_paginated(self) -> Paginator[HelixGame]:
        """Creates a paginator over the most viewed games at the moment."""
        return self._paginate(RequestDescriptor(url="games/top"), HelixGame)

    def _get_games(self, filter_type: str, values: list[str]) -> list[HelixGame]:
        if not values:
            return []

        descriptor = RequestDescriptor(url="games", query={filter_type: list(values)})
        page = self._client.fetch_page(descriptor)
        return [HelixGame.from_row(row, self._client) for row in page.rows]
