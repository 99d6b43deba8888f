"""
Top games example.

Lists the most viewed games, first as a single page and then lazily
across every page the API hands out.
"""

import os

from twitchantic import ApiClient, HelixPagination, StaticAuthProvider

provider = StaticAuthProvider(os.environ["TWITCH_CLIENT_ID"], os.environ.get("TWITCH_TOKEN"))

with ApiClient(provider) as client:
    # One page, with an explicit cursor for the caller to keep
    page = client.helix.games.get_top_games(HelixPagination(limit=5))
    print(f"First page ({page.count} games, more: {page.has_more})")
    for game in page:
        print(f"  - {game.name}: {game.get_box_art_url(52, 72)}")

    # Every page, fetched only as the loop needs it
    paginator = client.helix.games.get_top_games_paginated()
    for i, game in enumerate(paginator):
        if i >= 250:
            break
        print(f"{i + 1:>3}. {game.name}")

    # Lookups
    game = client.helix.games.get_game_by_name("Hearthstone")
    if game:
        print(game.to_dict())
