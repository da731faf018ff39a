"""Point-spread math.

Every line is stated as points the home team is favored by: ``+3`` means the
home side must win by more than three to cover, ``-3`` means the home side is
getting three. Display from the home perspective flips the sign (``-3`` / ``+3``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import HOME_ADVANTAGE, VALUE_THRESHOLD
from .models import BetResult, Game, Side, Team


@dataclass(frozen=True, slots=True)
class LineValue:
    side: Side
    value_points: float


def snap_line(value: float) -> float:
    # Halves round up, so 2.25 snaps to 2.5.
    return math.floor(value * 2 + 0.5) / 2


def calculate_true_line(home: Team, away: Team) -> float:
    # Roughly 2.5 power-rating points per point of spread.
    rating_diff = (home.power_rating - away.power_rating) / 2.5
    return snap_line(rating_diff + HOME_ADVANTAGE)


def calculate_market_line(game: Game) -> float:
    news_impact = sum(n.impact for n in game.news if n.is_revealed)
    return snap_line(game.true_line + news_impact)


def find_line_value(game: Game) -> LineValue | None:
    line_diff = game.your_line - game.true_line
    if abs(line_diff) <= VALUE_THRESHOLD:
        return None
    if line_diff > 0:
        # Asking home to lay too many points.
        return LineValue(side="away", value_points=line_diff)
    return LineValue(side="home", value_points=abs(line_diff))


def favorite_side(line: float) -> Side:
    return "away" if line < 0 else "home"


def does_bet_win(home_score: int, away_score: int, pick: Side, line: float) -> BetResult:
    home_margin = home_score - away_score
    cover_margin = home_margin - line if pick == "home" else line - home_margin
    if cover_margin == 0:
        return "push"
    return "win" if cover_margin > 0 else "loss"


def format_spread(line: float, perspective: Side) -> str:
    adjusted = -line if perspective == "home" else line
    if adjusted == 0:
        return "PK"
    text = f"{adjusted:g}"
    return f"+{text}" if adjusted > 0 else text
