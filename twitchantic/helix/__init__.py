from typing import TYPE_CHECKING

from .base import BaseApi, HelixEntity
from .bits import (
    HelixBitsApi,
    HelixBitsLeaderboard,
    HelixBitsLeaderboardEntry,
    HelixDateRangeData,
)
from .extensions import (
    HelixExtensionsApi,
    HelixExtensionTransaction,
    HelixExtensionTransactionsFilter,
)
from .games import HelixGame, HelixGameApi

if TYPE_CHECKING:
    from ..api_client import ApiClient


class HelixApiGroup:
    """
    Groups the Helix APIs of one client.

    Can be accessed using 'client.helix'.
    """

    def __init__(self, client: "ApiClient"):
        self.games = HelixGameApi(client)
        self.bits = HelixBitsApi(client)
        self.extensions = HelixExtensionsApi(client)


__all__ = [
    "HelixApiGroup",
    "BaseApi",
    "HelixEntity",
    # Games
    "HelixGameApi",
    "HelixGame",
    # Bits
    "HelixBitsApi",
    "HelixBitsLeaderboard",
    "HelixBitsLeaderboardEntry",
    "HelixDateRangeData",
    # Extensions
    "HelixExtensionsApi",
    "HelixExtensionTransaction",
    "HelixExtensionTransactionsFilter",
]
