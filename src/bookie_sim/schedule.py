from __future__ import annotations

import random
from typing import Iterable

from .models import Team


def _shuffled(teams: list[Team], rng: random.Random) -> list[Team]:
    # Fisher-Yates, walking down from the end.
    shuffled = list(teams)
    for idx in range(len(shuffled) - 1, 0, -1):
        swap = rng.randrange(idx + 1)
        shuffled[idx], shuffled[swap] = shuffled[swap], shuffled[idx]
    return shuffled


def generate_weekly_matchups(teams: Iterable[Team], rng: random.Random | None = None) -> list[tuple[Team, Team]]:
    """Pair every team exactly once as (home, away) for the coming week."""
    rng = rng or random.Random()
    team_list = list(teams)
    if len(team_list) < 2:
        return []
    shuffled = _shuffled(team_list, rng)
    # An odd team out sits the week.
    return [(shuffled[idx], shuffled[idx + 1]) for idx in range(0, len(shuffled) - 1, 2)]
