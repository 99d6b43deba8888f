from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..request import RequestDescriptor
from .base import BaseApi, HelixEntity

BitsLeaderboardPeriod = Literal["day", "week", "month", "year", "all"]


def _to_rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


class HelixBitsLeaderboardEntryData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: str
    user_login: str = ""
    user_name: str = ""
    rank: int
    score: int


class HelixDateRangeData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    started_at: datetime | None = None
    ended_at: datetime | None = None


class HelixBitsLeaderboardResponse(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    data: list[HelixBitsLeaderboardEntryData] = Field(default_factory=list)
    date_range: HelixDateRangeData | None = None
    total: int = 0


class HelixBitsLeaderboardEntry(HelixEntity[HelixBitsLeaderboardEntryData]):
    """A user's position on a bits leaderboard."""

    data_model = HelixBitsLeaderboardEntryData
    exported_fields = ("user_id", "user_name", "rank", "amount")

    @property
    def user_id(self) -> str:
        return self._data.user_id

    @property
    def user_name(self) -> str:
        """The display name of the user."""
        return self._data.user_name

    @property
    def rank(self) -> int:
        return self._data.rank

    @property
    def amount(self) -> int:
        """The amount of bits the user used."""
        return self._data.score


class HelixBitsLeaderboard(HelixEntity[HelixBitsLeaderboardResponse]):
    """A leaderboard where the users who used the most bits to a broadcaster are listed."""

    data_model = HelixBitsLeaderboardResponse
    exported_fields = ("entries", "total_count", "date_range")

    @property
    def entries(self) -> list[HelixBitsLeaderboardEntry]:
        """
        The entries of the leaderboard.
        Built on first access; later reads return the same list.
        """
        return self._cached(  # type: ignore[no-any-return]
            "entries",
            lambda: [HelixBitsLeaderboardEntry(entry, self._client) for entry in self._data.data],
        )

    @property
    def total_count(self) -> int:
        """The total amount of people on the requested leaderboard."""
        return self._data.total

    @property
    def date_range(self) -> HelixDateRangeData | None:
        return self._data.date_range


class HelixBitsApi(BaseApi):
    """
    The Helix API methods that deal with bits.

    Requires a token with the 'bits:read' scope.
    """

    def get_leaderboard(
        self,
        count: int | None = None,
        period: BitsLeaderboardPeriod | None = None,
        started_at: datetime | None = None,
        user_id: str | None = None,
    ) -> HelixBitsLeaderboard:
        """
        Retrieves a bits leaderboard of the authenticated broadcaster.

        Args:
            count: Number of entries to return (1-100)
            period: Time period the leaderboard covers
            started_at: Start of the period, ignored when period is "all".
                A naive datetime is taken to be in UTC.
            user_id: Restricts the leaderboard to this user
        """
        query: dict[str, Any] = {
            "count": count,
            "period": period,
            "started_at": _to_rfc3339(started_at) if started_at else None,
            "user_id": user_id,
        }
        descriptor = RequestDescriptor(url="bits/leaderboard", query=query, scope="bits:read")
        return HelixBitsLeaderboard.from_row(self._client.call_api(descriptor), self._client)
