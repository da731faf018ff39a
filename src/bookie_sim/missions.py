from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable

from .config import (
    COLLECT_MISSION_FAILURE_HEAT,
    COLLECT_MISSION_HEAT,
    COLLECT_MISSION_RISK,
    FIX_DAYS,
    FIX_ENERGY_COST,
    FIX_FAILURE_HEAT,
    FIX_HEAT,
    FIX_MIN_ACTION,
    FIX_MONEY_COST,
    FIX_RISK,
    GAME_DAY,
    HEAT_MISSIONS,
    HEDGE_DAYS,
    HEDGE_ENERGY_COST,
    HEDGE_MIN_ACTION,
    HEDGE_MIN_IMBALANCE,
    HEDGE_RISK,
    HEDGE_VIG,
    LOCATIONS,
    MAX_DEBTS,
    RECRUIT_ENERGY_COST,
    RECRUIT_FAILURE_HEAT,
    RECRUIT_LOCATIONS,
    RECRUIT_POOL,
    RECRUIT_RISK,
    RECRUIT_WHALE_MONEY_COST,
    SCHMOOZE_ENERGY_COST,
    SCHMOOZE_MONEY_COST,
    SCHMOOZE_TARGETS,
    SCOUT_ENERGY_COST,
)
from .models import Bet, Customer, Debt, Game, GameState, Mission, MissionReward, make_id
from .settlement import game_exposure

RECRUIT_PITCHES: dict[str, str] = {
    "square": "casual bettor who loves favorites",
    "sharp": "sharp player who knows value",
    "whale": "high roller with deep pockets",
    "deadbeat": "sketchy character who might not pay",
}


@dataclass(frozen=True, slots=True)
class MissionResult:
    success: bool
    message: str
    money_change: int
    heat_change: int
    energy_change: int
    debt_collected: str | None = None


def random_debt_location(rng: random.Random) -> str:
    return rng.choice(LOCATIONS)


def generate_collection_missions(
    debts: Iterable[Debt],
    customers: Iterable[Customer],
    rng: random.Random,
) -> list[Mission]:
    names = {c.customer_id: c.name for c in customers}
    missions: list[Mission] = []
    for debt in list(debts)[:MAX_DEBTS]:
        name = names.get(debt.customer_id, "Unknown")
        # Second trip means roughing them up.
        energy_cost = 2 if debt.attempts > 0 else 1
        if debt.attempts > 0:
            description = f"{name} dodged you before. Time to rough them up. (${debt.amount:,})"
        else:
            description = f"{name} owes you ${debt.amount:,}. Find them and get your money."
        missions.append(
            Mission(
                mission_id=make_id("mission", rng),
                mission_type="collect",
                title=f"Collect from {name}",
                description=description,
                location=debt.location,
                energy_cost=energy_cost,
                money_cost=0,
                risk=COLLECT_MISSION_RISK,
                reward=MissionReward(
                    money=debt.amount,
                    heat=COLLECT_MISSION_HEAT,
                    debt_collected=debt.customer_id,
                ),
                failure_heat=COLLECT_MISSION_FAILURE_HEAT,
            )
        )
    return missions


def generate_recruitment_missions(rng: random.Random) -> list[Mission]:
    missions: list[Mission] = []
    for _ in range(rng.randint(1, 2)):
        customer_type = rng.choice(RECRUIT_POOL)
        location = rng.choice(RECRUIT_LOCATIONS[customer_type])
        missions.append(
            Mission(
                mission_id=make_id("mission", rng),
                mission_type="recruit",
                title=f"Find new customer at {location}",
                description=f"Word is there's a {RECRUIT_PITCHES[customer_type]} looking for a book.",
                location=location,
                energy_cost=RECRUIT_ENERGY_COST,
                # Whales expect the drinks on you.
                money_cost=RECRUIT_WHALE_MONEY_COST if customer_type == "whale" else 0,
                risk=RECRUIT_RISK[customer_type],
                reward=MissionReward(new_customer=customer_type),
                failure_heat=RECRUIT_FAILURE_HEAT,
            )
        )
    return missions


def generate_heat_missions(heat: int, rng: random.Random) -> list[Mission]:
    missions: list[Mission] = []
    for threshold, title, description, location, energy, money, risk, heat_delta in HEAT_MISSIONS:
        if heat <= threshold:
            continue
        missions.append(
            Mission(
                mission_id=make_id("mission", rng),
                mission_type="avoid_heat",
                title=title,
                description=description,
                location=location,
                energy_cost=energy,
                money_cost=money,
                risk=risk,
                reward=MissionReward(heat=heat_delta),
            )
        )
    return missions


def generate_rest_mission(rng: random.Random) -> Mission:
    return Mission(
        mission_id=make_id("mission", rng),
        mission_type="rest",
        title="Take it easy",
        description="Rest up and recover your energy for tomorrow.",
        location="Home",
        energy_cost=0,
        money_cost=0,
        risk=0.0,
        reward=MissionReward(energy=1),
    )


def generate_schmooze_missions(customers: Iterable[Customer], rng: random.Random) -> list[Mission]:
    candidates = [c for c in customers if c.is_active and c.reliability < 1.0]
    if not candidates:
        return []
    targets = rng.sample(candidates, k=min(SCHMOOZE_TARGETS, len(candidates)))
    missions: list[Mission] = []
    for customer in targets:
        venue = customer.location or ("Country Club" if customer.customer_type == "whale" else "Sports Bar")
        missions.append(
            Mission(
                mission_id=make_id("mission", rng),
                mission_type="schmooze",
                title=f"Take {customer.name} out",
                description=f"Buy {customer.name} a steak. Good customers pay on time and bet bigger.",
                location=venue,
                energy_cost=SCHMOOZE_ENERGY_COST,
                money_cost=SCHMOOZE_MONEY_COST.get(customer.customer_type, 50),
                risk=0.0,
                reward=MissionReward(improve_customer_id=customer.customer_id),
            )
        )
    return missions


def generate_scout_mission(rng: random.Random) -> Mission:
    return Mission(
        mission_id=make_id("mission", rng),
        mission_type="scout",
        title="Check the sharp books",
        description="Spend the day with a guy who sees the Vegas numbers. Reveals market lines for this week.",
        location="Poker Room",
        energy_cost=SCOUT_ENERGY_COST,
        money_cost=0,
        risk=0.0,
        reward=MissionReward(reveal_market_lines=True),
    )


def generate_hedge_missions(
    games: Iterable[Game],
    bets: Iterable[Bet],
    hedged_game_ids: Iterable[str],
    rng: random.Random,
) -> list[Mission]:
    already = set(hedged_game_ids)
    bet_list = list(bets)
    missions: list[Mission] = []
    for game in games:
        if game.is_complete or game.game_id in already:
            continue
        exposure = game_exposure(bet_list, game.game_id)
        if exposure.total < HEDGE_MIN_ACTION or exposure.imbalance_pct < HEDGE_MIN_IMBALANCE:
            continue
        missions.append(
            Mission(
                mission_id=make_id("mission", rng),
                mission_type="hedge",
                title=f"Lay off {exposure.heavy_side} action",
                description=(
                    f"${exposure.imbalance:,} too heavy on the {exposure.heavy_side} side. "
                    "Move it to another book for a cut."
                ),
                location="Back Office",
                energy_cost=HEDGE_ENERGY_COST,
                money_cost=round(exposure.imbalance * HEDGE_VIG),
                risk=HEDGE_RISK,
                reward=MissionReward(
                    hedge_game_id=game.game_id,
                    hedge_side=exposure.heavy_side,
                    hedge_amount=exposure.imbalance,
                    hedge_line=game.your_line,
                ),
            )
        )
    return missions


def generate_fix_mission(
    games: Iterable[Game],
    bets: Iterable[Bet],
    bankroll: int,
    fixed_game_ids: Iterable[str],
    rng: random.Random,
) -> Mission | None:
    if bankroll < FIX_MONEY_COST:
        return None
    already = set(fixed_game_ids)
    bet_list = list(bets)
    best: tuple[Game, int] | None = None
    for game in games:
        if game.is_complete or game.game_id in already:
            continue
        exposure = game_exposure(bet_list, game.game_id)
        if exposure.total < FIX_MIN_ACTION:
            continue
        if best is None or exposure.total > best[1]:
            best = (game, exposure.total)
    if best is None:
        return None
    game = best[0]
    exposure = game_exposure(bet_list, game.game_id)
    return Mission(
        mission_id=make_id("mission", rng),
        mission_type="fix_game",
        title="Get to the officials",
        description=(
            f"${exposure.total:,} riding on this one. Make sure the {exposure.light_side} side "
            "comes through. If it gets out, you're done."
        ),
        location="Parking Garage",
        energy_cost=FIX_ENERGY_COST,
        money_cost=FIX_MONEY_COST,
        risk=FIX_RISK,
        reward=MissionReward(heat=FIX_HEAT, fix_game_id=game.game_id, fixed_outcome=exposure.light_side),
        failure_heat=FIX_FAILURE_HEAT,
    )


def generate_daily_missions(state: GameState, rng: random.Random | None = None) -> tuple[Mission, ...]:
    """Build the full offer list for ``state.day``."""
    rng = rng or random.Random()
    open_games = [g for g in state.current_games if not g.is_complete]
    week_bets = [b for b in state.bets if b.result is None]
    missions: list[Mission] = []

    missions.extend(generate_collection_missions(state.debts, state.customers, rng))
    if state.day < GAME_DAY:
        missions.extend(generate_recruitment_missions(rng))
    missions.extend(generate_heat_missions(state.heat, rng))
    if state.day == 1:
        missions.append(generate_rest_mission(rng))
    missions.extend(generate_schmooze_missions(state.customers, rng))
    if state.day < GAME_DAY and not state.has_scouted_this_week:
        missions.append(generate_scout_mission(rng))
    if state.day in HEDGE_DAYS:
        missions.extend(generate_hedge_missions(open_games, week_bets, state.hedged_game_ids, rng))
    if state.day in FIX_DAYS:
        fixed_ids = [f.game_id for f in state.fixed_games]
        fix = generate_fix_mission(open_games, week_bets, state.bankroll, fixed_ids, rng)
        if fix is not None:
            missions.append(fix)
    return tuple(missions)


SUCCESS_MESSAGES: dict[str, str] = {
    "collect": "Collection successful! Got the money.",
    "recruit": "Found a new customer at {location}!",
    "avoid_heat": "Managed to reduce some heat.",
    "rest": "Feeling rested and ready.",
    "hedge": "Laid off the action. Book is balanced.",
    "scout": "Got a look at the market numbers for the week.",
    "schmooze": "Good night out. They'll remember it.",
    "fix_game": "It's done. Nobody saw anything.",
}

FAILURE_MESSAGES: dict[str, str] = {
    "collect": "Things got heated. They got away and now there's more attention on you.",
    "recruit": "The contact was a bust. Wasted trip.",
    "avoid_heat": "Your contact got cold feet. Money wasted.",
    "hedge": "The other book wouldn't take it. Vig gone anyway.",
    "fix_game": "The ref got nervous and talked. Money gone and the cops are asking questions.",
}


def execute_mission(mission: Mission, rng: random.Random | None = None) -> MissionResult:
    """Roll the mission's risk once and report the deltas.

    Structural effects (new customers, cleared debts, hedges, fixes) are left to the caller.
    """
    rng = rng or random.Random()
    if rng.random() < mission.risk:
        return MissionResult(
            success=False,
            message=FAILURE_MESSAGES.get(mission.mission_type, "Something went wrong."),
            money_change=-mission.money_cost,
            heat_change=mission.failure_heat,
            energy_change=-mission.energy_cost,
        )
    reward = mission.reward
    return MissionResult(
        success=True,
        message=SUCCESS_MESSAGES.get(mission.mission_type, "Mission complete.").format(location=mission.location),
        money_change=reward.money - mission.money_cost,
        heat_change=reward.heat,
        energy_change=reward.energy - mission.energy_cost,
        debt_collected=reward.debt_collected,
    )
