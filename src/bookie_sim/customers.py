from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable

from .config import BET_CHANCE, CUSTOMER_TEMPLATES, MAX_BET_MULTIPLIER, MIN_BET, STARTING_ROSTER
from .lines import favorite_side, find_line_value
from .models import Customer, Game, Side, make_id, other_side
from .names import NameGenerator, random_name

TYPE_LABELS: dict[str, str] = {
    "square": "Square",
    "sharp": "Sharp",
    "whale": "Whale",
    "deadbeat": "Deadbeat",
}


@dataclass(frozen=True, slots=True)
class BetSlip:
    game_id: str
    amount: int
    pick: Side


def _uniform(rng: random.Random, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return rng.uniform(low, high)


def _round_to_ten(amount: float) -> int:
    return math.floor(amount / 10 + 0.5) * 10


def generate_customer(customer_type: str, rng: random.Random | None = None, name: str | None = None) -> Customer:
    rng = rng or random.Random()
    template = CUSTOMER_TEMPLATES[customer_type]
    bankroll = round(_uniform(rng, template["bankroll"]))
    max_bet_pct = _uniform(rng, template["max_bet_pct"])
    return Customer(
        customer_id=make_id("customer", rng),
        name=name or random_name(rng),
        customer_type=customer_type,
        bankroll=bankroll,
        max_bet=round(bankroll * max_bet_pct),
        reliability=_uniform(rng, template["reliability"]),
        sharpness=_uniform(rng, template["sharpness"]),
        favorites_bias=_uniform(rng, template["favorites_bias"]),
    )


def generate_starting_customers(rng: random.Random | None = None) -> tuple[Customer, ...]:
    # Mostly reliable money to start; no deadbeats on the books yet.
    rng = rng or random.Random()
    name_gen = NameGenerator(rng)
    return tuple(generate_customer(kind, rng, name=name_gen.next_name()) for kind in STARTING_ROSTER)


def effective_max_bet(customer: Customer, bookie_bankroll: int) -> int:
    bookie_max = round(bookie_bankroll * MAX_BET_MULTIPLIER)
    return min(customer.max_bet, bookie_max, customer.bankroll)


def generate_customer_bets(
    customer: Customer,
    games: Iterable[Game],
    bookie_bankroll: int,
    rng: random.Random | None = None,
) -> list[BetSlip]:
    """Decide which open games a customer plays today and for how much."""
    rng = rng or random.Random()
    max_bet = effective_max_bet(customer, bookie_bankroll)
    if max_bet < MIN_BET:
        return []

    slips: list[BetSlip] = []
    bet_chance = BET_CHANCE.get(customer.customer_type, 0.7)
    for game in games:
        if game.is_complete:
            continue
        if rng.random() > bet_chance:
            continue

        value = find_line_value(game)
        if value is not None and rng.random() < customer.sharpness:
            pick = value.side
            # Bigger edge, bigger bet; edges past three points stop adding size.
            edge = min(value.value_points / 3, 1.0)
            size = MIN_BET + (max_bet - MIN_BET) * (0.5 + edge * 0.5)
        else:
            favorite = favorite_side(game.your_line)
            pick = favorite if rng.random() < customer.favorites_bias else other_side(favorite)
            size = MIN_BET + rng.random() * (max_bet - MIN_BET)

        amount = min(_round_to_ten(size), max_bet - max_bet % 10)
        if amount >= MIN_BET:
            slips.append(BetSlip(game_id=game.game_id, amount=amount, pick=pick))
    return slips
