from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from .config import JUICE
from .lines import does_bet_win
from .models import Bet, Final, Game, Hedge, Side


@dataclass(frozen=True, slots=True)
class Exposure:
    home_amount: int = 0
    away_amount: int = 0
    home_count: int = 0
    away_count: int = 0

    @property
    def total(self) -> int:
        return self.home_amount + self.away_amount

    @property
    def imbalance(self) -> int:
        return abs(self.home_amount - self.away_amount)

    @property
    def imbalance_pct(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.imbalance / self.total

    @property
    def heavy_side(self) -> Side:
        return "home" if self.home_amount >= self.away_amount else "away"

    @property
    def light_side(self) -> Side:
        return "away" if self.heavy_side == "home" else "home"


def game_exposure(bets: Iterable[Bet], game_id: str) -> Exposure:
    home_amount = away_amount = home_count = away_count = 0
    for bet in bets:
        if bet.game_id != game_id:
            continue
        if bet.pick == "home":
            home_amount += bet.amount
            home_count += 1
        else:
            away_amount += bet.amount
            away_count += 1
    return Exposure(home_amount=home_amount, away_amount=away_amount, home_count=home_count, away_count=away_count)


def resolve_bets(game: Game, bets: Iterable[Bet]) -> list[Bet]:
    """Grade open bets on a final game; bets already graded pass through untouched."""
    status = game.status
    if not isinstance(status, Final):
        raise ValueError(f"Cannot resolve bets for incomplete game {game.game_id}.")
    graded: list[Bet] = []
    for bet in bets:
        if bet.result is None:
            bet = replace(bet, result=does_bet_win(status.home_score, status.away_score, bet.pick, bet.line))
        graded.append(bet)
    return graded


def calculate_payout(bet: Bet, juice: float = JUICE) -> float:
    """Money owed to the customer (positive) or to the book (negative).

    At -110 a winner collects about 0.909 of the stake; a push returns nothing extra.
    """
    if bet.result == "win":
        return bet.amount / (1 + juice)
    if bet.result == "loss":
        return -bet.amount
    return 0.0


def settle_hedge(game: Game, hedge: Hedge) -> int:
    """Bookie's side of a layoff: wins when the heavy side covers, loses when it doesn't."""
    status = game.status
    if not isinstance(status, Final):
        raise ValueError(f"Cannot settle hedge for incomplete game {game.game_id}.")
    outcome = does_bet_win(status.home_score, status.away_score, hedge.side, hedge.line)
    if outcome == "win":
        return hedge.amount
    if outcome == "loss":
        return -hedge.amount
    return 0
