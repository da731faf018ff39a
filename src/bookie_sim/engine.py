from __future__ import annotations

import math
import random

from .models import Final, Side, Team

BASE_SCORE = 21
SCORE_VARIANCE = 10
HOME_BOOST = 3
OVERTIME_HOME_EDGE = 0.52
OVERTIME_POINTS = 3


def _gaussian(rng: random.Random) -> float:
    # Box-Muller; both uniforms must be strictly positive for the log.
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = rng.random()
    while v == 0.0:
        v = rng.random()
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def expected_scores(home: Team, away: Team) -> tuple[float, float]:
    home_expected = BASE_SCORE + (home.offense - 75) / 10 + (75 - away.defense) / 10 + HOME_BOOST
    away_expected = BASE_SCORE + (away.offense - 75) / 10 + (75 - home.defense) / 10
    return home_expected, away_expected


def score_variance(team: Team) -> float:
    # Lower consistency, wider spread of outcomes.
    return SCORE_VARIANCE * (1.5 - team.consistency / 100)


def simulate_game(home: Team, away: Team, rng: random.Random | None = None) -> Final:
    rng = rng or random.Random()
    home_expected, away_expected = expected_scores(home, away)
    home_score = max(0, round(home_expected + _gaussian(rng) * score_variance(home)))
    away_score = max(0, round(away_expected + _gaussian(rng) * score_variance(away)))

    overtime = False
    if home_score == away_score:
        overtime = True
        if rng.random() < OVERTIME_HOME_EDGE:
            home_score += OVERTIME_POINTS
        else:
            away_score += OVERTIME_POINTS
    return Final(home_score=home_score, away_score=away_score, overtime=overtime)


def simulate_fixed_game(outcome: Side, rng: random.Random | None = None) -> Final:
    """Produce a score where ``outcome`` wins by at least ten."""
    rng = rng or random.Random()
    winner = 28 + rng.randrange(14)
    loser = winner - 10 - rng.randrange(10)
    if outcome == "home":
        return Final(home_score=winner, away_score=loser)
    return Final(home_score=loser, away_score=winner)
