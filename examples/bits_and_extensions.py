"""
Bits leaderboard and extension transactions example.

Needs a token with the 'bits:read' scope for the leaderboard.
"""

import logging
import os

from twitchantic import ApiClient, ScopeError, StaticAuthProvider
from twitchantic.helix import HelixExtensionTransactionsFilter

logging.basicConfig(level=logging.INFO)

provider = StaticAuthProvider(
    os.environ["TWITCH_CLIENT_ID"],
    os.environ["TWITCH_TOKEN"],
    scopes=os.environ.get("TWITCH_SCOPES", "bits:read"),
)

with ApiClient(provider) as client:
    try:
        board = client.helix.bits.get_leaderboard(count=10, period="week")
    except ScopeError as e:
        print(f"Token is missing scopes: {e.missing}")
    else:
        print(f"{board.total_count} people on the leaderboard")
        for entry in board.entries:
            print(f"  #{entry.rank} {entry.user_name}: {entry.amount} bits")

    extension_id = os.environ.get("TWITCH_EXTENSION_ID")
    if extension_id:
        paginator = client.helix.extensions.get_extension_transactions_paginated(
            extension_id, HelixExtensionTransactionsFilter()
        )
        total_bits = sum(t.product_cost for t in paginator)
        print(f"Extension earned {total_bits} bits")
