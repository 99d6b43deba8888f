"""
Integration tests for pagination through the real ApiClient.

The fake Helix server answers over httpx.MockTransport, so these tests cover
query rendering, cursor handling and mapping end to end.
"""

import pytest

from twitchantic import HelixPagination, PaginatedResult, Paginator, TransportError
from twitchantic.helix import HelixGame


@pytest.mark.integration
class TestSingleShotPagination:
    def test_first_page_with_total(self, api_client, fake_server):
        fake_server.add_page(
            "games/top", [{"id": "1", "name": "A"}, {"id": "2", "name": "B"}], cursor="X", total=5
        )

        result = api_client.helix.games.get_top_games()

        assert isinstance(result, PaginatedResult)
        assert [g.id for g in result.items] == ["1", "2"]
        assert result.total == 5
        assert result.cursor == "X"
        assert result.has_more is True

    def test_next_page_via_cursor(self, api_client, fake_server):
        fake_server.add_page("games/top", [{"id": "1", "name": "A"}], cursor="X")
        fake_server.add_page("games/top", [{"id": "2", "name": "B"}], after="X")

        first = api_client.helix.games.get_top_games(HelixPagination(limit=1))
        second = api_client.helix.games.get_top_games(
            HelixPagination(after=first.cursor, limit=1)
        )

        assert [g.name for g in second] == ["B"]
        assert second.has_more is False
        assert second.total is None

        request = fake_server.requests_to("games/top")[-1]
        assert request.url.params["first"] == "1"
        assert request.url.params["after"] == "X"


@pytest.mark.integration
class TestLazyPagination:
    def test_drains_with_dedup(self, api_client, fake_server):
        fake_server.add_page(
            "games/top", [{"id": "1", "name": "A"}, {"id": "2", "name": "B"}], cursor="X", total=5
        )
        fake_server.add_page(
            "games/top", [{"id": "2", "name": "B"}, {"id": "3", "name": "C"}], after="X"
        )

        paginator = api_client.helix.games.get_top_games_paginated()
        games = paginator.get_all()

        assert isinstance(paginator, Paginator)
        assert [g.id for g in games] == ["1", "2", "3"]
        assert all(isinstance(g, HelixGame) for g in games)
        assert len(fake_server.requests_to("games/top")) == 2
        assert paginator.get_all() == []

    def test_lazy_fetching(self, api_client, fake_server):
        fake_server.add_page("games/top", [{"id": "1", "name": "A"}], cursor="X")
        fake_server.add_page("games/top", [{"id": "2", "name": "B"}], after="X")

        paginator = api_client.helix.games.get_top_games_paginated()
        assert fake_server.requests == []

        assert paginator.get_next().id == "1"
        assert len(fake_server.requests) == 1

        assert paginator.get_next().id == "2"
        assert paginator.get_next() is None
        assert len(fake_server.requests) == 2

    def test_empty_intermediate_page(self, api_client, fake_server):
        fake_server.add_page("games/top", [{"id": "1", "name": "A"}], cursor="X")
        fake_server.add_page("games/top", [], cursor="Y", after="X")
        fake_server.add_page("games/top", [{"id": "2", "name": "B"}], after="Y")

        games = list(api_client.helix.games.get_top_games_paginated())

        assert [g.id for g in games] == ["1", "2"]

    def test_server_error_then_retry(self, api_client, fake_server):
        fake_server.add_page("games/top", [{"id": "1", "name": "A"}], cursor="X")
        fake_server.add_page("games/top", [{"id": "2", "name": "B"}], after="X")

        paginator = api_client.helix.games.get_top_games_paginated()
        assert paginator.get_next().id == "1"

        fake_server.fail_next(503, "unavailable")
        with pytest.raises(TransportError):
            paginator.get_next()
        assert paginator.current_cursor == "X"

        assert paginator.get_next().id == "2"
        cursors = [r.url.params.get("after") for r in fake_server.requests_to("games/top")]
        assert cursors == [None, "X", "X"]
