import random
from dataclasses import replace

from bookie_sim.models import Bet, Debt, Mission, MissionReward
from bookie_sim.missions import (
    execute_mission,
    generate_collection_missions,
    generate_daily_missions,
    generate_fix_mission,
    generate_heat_missions,
    generate_hedge_missions,
    generate_schmooze_missions,
)
from bookie_sim.reducer import create_initial_state


def _mission(risk: float, **reward) -> Mission:
    return Mission(
        mission_id="mission-1",
        mission_type="avoid_heat",
        title="Grease some palms",
        description="",
        location="Downtown",
        energy_cost=1,
        money_cost=500,
        risk=risk,
        reward=MissionReward(**reward),
        failure_heat=7,
    )


def _bet(bet_id: str, game_id: str, pick: str, amount: int) -> Bet:
    return Bet(bet_id=bet_id, customer_id="c", game_id=game_id, amount=amount, pick=pick, line=3.0, day_placed=2)


def test_zero_risk_always_succeeds() -> None:
    for seed in range(100):
        result = execute_mission(_mission(0.0, heat=-25), random.Random(seed))
        assert result.success
        assert result.money_change == -500
        assert result.heat_change == -25
        assert result.energy_change == -1


def test_certain_failure_costs_and_adds_failure_heat() -> None:
    result = execute_mission(_mission(1.0, heat=-25), random.Random(3))
    assert not result.success
    assert result.money_change == -500
    assert result.heat_change == 7
    assert result.energy_change == -1


def test_heat_missions_unlock_above_each_threshold() -> None:
    rng = random.Random(1)
    assert generate_heat_missions(20, rng) == []
    assert [m.title for m in generate_heat_missions(21, rng)] == ["Lay low"]
    assert len(generate_heat_missions(41, rng)) == 2
    titles = [m.title for m in generate_heat_missions(61, rng)]
    assert titles == ["Lay low", "Grease some palms", "Get out of town"]


def test_repeat_collection_costs_more_energy() -> None:
    debts = [
        Debt(customer_id="c1", amount=300, week_incurred=1, attempts=0, location="Bar"),
        Debt(customer_id="c2", amount=700, week_incurred=1, attempts=2, location="Alley"),
    ]
    missions = generate_collection_missions(debts, [], random.Random(2))
    assert [m.energy_cost for m in missions] == [1, 2]
    assert missions[1].reward.money == 700
    assert missions[1].reward.debt_collected == "c2"
    assert missions[1].location == "Alley"


def test_schmooze_skips_perfect_payers_and_inactive_customers() -> None:
    state = create_initial_state(random.Random(9))
    customers = [replace(c, reliability=1.0) for c in state.customers]
    assert generate_schmooze_missions(customers, random.Random(1)) == []
    customers[0] = replace(customers[0], reliability=0.8)
    customers[1] = replace(customers[1], reliability=0.8, is_active=False)
    missions = generate_schmooze_missions(customers, random.Random(1))
    assert [m.reward.improve_customer_id for m in missions] == [customers[0].customer_id]


def test_hedge_offered_only_for_big_lopsided_books() -> None:
    state = create_initial_state(random.Random(4))
    g0, g1, g2 = state.current_games[:3]
    bets = [
        _bet("b1", g0.game_id, "home", 900),
        _bet("b2", g0.game_id, "away", 100),
        _bet("b3", g1.game_id, "home", 260),
        _bet("b4", g1.game_id, "away", 240),
        _bet("b5", g2.game_id, "away", 300),
    ]
    missions = generate_hedge_missions(state.current_games, bets, [], random.Random(1))
    assert len(missions) == 1
    hedge = missions[0]
    assert hedge.reward.hedge_game_id == g0.game_id
    assert hedge.reward.hedge_side == "home"
    assert hedge.reward.hedge_amount == 800
    assert hedge.money_cost == 80
    assert generate_hedge_missions(state.current_games, bets, [g0.game_id], random.Random(1)) == []


def test_fix_targets_the_biggest_game_and_the_light_side() -> None:
    state = create_initial_state(random.Random(4))
    g0, g1 = state.current_games[:2]
    bets = [
        _bet("b1", g0.game_id, "home", 900),
        _bet("b2", g0.game_id, "away", 300),
        _bet("b3", g1.game_id, "away", 1500),
        _bet("b4", g1.game_id, "home", 400),
    ]
    mission = generate_fix_mission(state.current_games, bets, 10_000, [], random.Random(1))
    assert mission is not None
    assert mission.reward.fix_game_id == g1.game_id
    assert mission.reward.fixed_outcome == "home"
    assert mission.money_cost == 2500
    assert generate_fix_mission(state.current_games, bets, 2000, [], random.Random(1)) is None


def test_opening_day_offers() -> None:
    state = create_initial_state(random.Random(21))
    kinds = {m.mission_type for m in state.available_missions}
    assert {"recruit", "rest", "scout"} <= kinds
    assert "hedge" not in kinds
    assert "fix_game" not in kinds
    assert "collect" not in kinds


def test_game_day_has_no_recruiting_or_scouting() -> None:
    state = replace(create_initial_state(random.Random(21)), day=7)
    kinds = {m.mission_type for m in generate_daily_missions(state, random.Random(3))}
    assert "recruit" not in kinds
    assert "scout" not in kinds
    assert "rest" not in kinds
