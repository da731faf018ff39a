from __future__ import annotations

import random
from dataclasses import replace

from .config import NEWS_REVEAL_DAYS, NEWS_TEMPLATES
from .lines import calculate_market_line
from .models import Game, Team, TeamNews


def generate_game_news(home: Team, away: Team, rng: random.Random | None = None) -> tuple[TeamNews, ...]:
    """Schedule one to three storylines for a matchup, all hidden until their reveal day."""
    rng = rng or random.Random()
    categories = list(NEWS_TEMPLATES.keys())
    items: list[TeamNews] = []
    for _ in range(rng.randint(1, 3)):
        category = rng.choice(categories)
        headline, impact = rng.choice(NEWS_TEMPLATES[category])
        is_home = rng.random() > 0.5
        team = home if is_home else away
        items.append(
            TeamNews(
                team_id=team.team_id,
                day=rng.choice(NEWS_REVEAL_DAYS),
                category=category,
                # Always expressed as movement of the home line.
                impact=impact if is_home else -impact,
                headline=headline.replace("{team}", team.city).replace("{location}", home.city),
            )
        )
    return tuple(items)


def reveal_news(game: Game, day: int) -> tuple[Game, list[TeamNews]]:
    """Flip every item due by ``day`` and reprice the market line.

    Returns the updated game and the items that broke on this call.
    """
    if game.is_complete:
        return game, []
    broke: list[TeamNews] = []
    updated: list[TeamNews] = []
    for item in game.news:
        if not item.is_revealed and item.day <= day:
            item = replace(item, is_revealed=True)
            broke.append(item)
        updated.append(item)
    if not broke:
        return game, []
    game = replace(game, news=tuple(updated))
    return replace(game, market_line=calculate_market_line(game)), broke
