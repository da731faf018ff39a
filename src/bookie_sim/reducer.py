"""Weekly book-running state machine.

``reduce(state, action, rng)`` is the only entry point that moves a session
forward. It never mutates its input: every transition returns a new
:class:`~bookie_sim.models.GameState`, and an action that is not legal right
now comes back as the very same object. Randomness flows in through ``rng``
so a seeded ``random.Random`` replays a session exactly.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Callable

from .actions import (
    Action,
    AddLog,
    CollectDebt,
    DismissPopup,
    DoMission,
    EndDay,
    HandleNonPayer,
    LoadGame,
    NewGame,
    Rest,
    SetLine,
    SimulateGames,
)
from .config import (
    BANKRUPTCY_THRESHOLD,
    COLLECT_BASE_CHANCE,
    COLLECT_CHANCE_PER_ATTEMPT,
    COLLECT_ENERGY_COST,
    COLLECT_HEAT,
    COLLECT_MAX_CHANCE,
    DAILY_ENERGY_GAIN,
    DAILY_HEAT_DECAY,
    ENFORCE_ENERGY_COST,
    ENFORCE_HEAT,
    GAME_DAY,
    HEAT_THRESHOLD,
    JUICE,
    MAX_DEBTS,
    MAX_ENERGY,
    PRESSURE_ENERGY_COST,
    PRESSURE_HEAT,
    PRESSURE_PAY_CHANCE,
    REST_ENERGY_GAIN,
    SCHMOOZE_MAX_BET_MULT,
    SCHMOOZE_RELIABILITY_GAIN,
    STARTING_BANKROLL,
    STARTING_ENERGY,
    WIN_THRESHOLD,
)
from .customers import generate_customer, generate_customer_bets, generate_starting_customers
from .engine import simulate_fixed_game, simulate_game
from .lines import calculate_true_line, snap_line
from .missions import execute_mission, generate_daily_missions, random_debt_location
from .models import (
    Bet,
    Customer,
    Debt,
    FixedGame,
    Game,
    GameState,
    Hedge,
    LogEntry,
    Mission,
    NonPayerPopup,
    Severity,
    Team,
    make_id,
)
from .names import NameGenerator
from .news import generate_game_news, reveal_news
from .schedule import generate_weekly_matchups
from .settlement import calculate_payout, resolve_bets, settle_hedge
from .teams import generate_teams, update_team_records

logger = logging.getLogger(__name__)

HEAT_MAX = 100


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _entry(state: GameState, rng: random.Random, message: str, severity: Severity = "info") -> LogEntry:
    return LogEntry(
        entry_id=make_id("log", rng),
        week=state.week,
        day=state.day,
        message=message,
        severity=severity,
    )


def _append_log(state: GameState, entries: list[LogEntry]) -> GameState:
    if not entries:
        return state
    return replace(state, log=state.log + tuple(entries))


def create_week_games(teams: tuple[Team, ...], week: int, rng: random.Random) -> tuple[Game, ...]:
    games: list[Game] = []
    for idx, (home, away) in enumerate(generate_weekly_matchups(teams, rng)):
        true_line = calculate_true_line(home, away)
        games.append(
            Game(
                game_id=f"game-{week}-{idx}",
                week=week,
                home_team_id=home.team_id,
                away_team_id=away.team_id,
                true_line=true_line,
                market_line=true_line,
                your_line=true_line,
                news=generate_game_news(home, away, rng),
            )
        )
    return tuple(games)


def _reveal_daily_news(state: GameState, rng: random.Random, *, announce: bool = True) -> GameState:
    games: list[Game] = []
    entries: list[LogEntry] = []
    for game in state.games:
        if game.week == state.week:
            game, broke = reveal_news(game, state.day)
            if announce:
                entries.extend(_entry(state, rng, item.headline, "news") for item in broke)
        games.append(game)
    return _append_log(replace(state, games=tuple(games)), entries)


def _refresh_missions(state: GameState, rng: random.Random) -> GameState:
    return replace(state, available_missions=generate_daily_missions(state, rng))


def create_initial_state(rng: random.Random | None = None) -> GameState:
    rng = rng or random.Random()
    teams = generate_teams()
    state = GameState(
        week=1,
        day=1,
        bankroll=STARTING_BANKROLL,
        starting_bankroll=STARTING_BANKROLL,
        energy=STARTING_ENERGY,
        max_energy=MAX_ENERGY,
        heat=0,
        teams=teams,
        games=create_week_games(teams, 1, rng),
        customers=generate_starting_customers(rng),
    )
    state = replace(
        state,
        log=(
            _entry(
                state,
                rng,
                f"Week 1 begins. You have ${STARTING_BANKROLL:,} to start your book. Set your lines!",
            ),
        ),
    )
    # Opening-day stories are already priced in; no separate headlines.
    state = _reveal_daily_news(state, rng, announce=False)
    return _refresh_missions(state, rng)


def _check_termination(state: GameState, rng: random.Random) -> GameState:
    if state.is_game_over:
        return state
    if state.bankroll <= BANKRUPTCY_THRESHOLD:
        reason = f"You went bust! Bankroll: ${state.bankroll:,}"
        severity: Severity = "danger"
    elif state.bankroll >= WIN_THRESHOLD:
        reason = f"You made it! Bankroll: ${state.bankroll:,}!"
        severity = "win"
    elif state.heat >= HEAT_THRESHOLD:
        reason = "The heat got too high. Time to disappear."
        severity = "danger"
    else:
        return state
    logger.info("Game over in week %s day %s: %s", state.week, state.day, reason)
    state = replace(state, is_game_over=True, game_over_reason=reason)
    return _append_log(state, [_entry(state, rng, reason, severity)])


def _receive_bets(state: GameState, rng: random.Random) -> GameState:
    if state.bets_received_today or state.day == GAME_DAY:
        return state
    open_games = [g for g in state.current_games if not g.is_complete]
    lines = {g.game_id: g.your_line for g in open_games}
    new_bets: list[Bet] = []
    for customer in state.active_customers:
        for slip in generate_customer_bets(customer, open_games, state.bankroll, rng):
            new_bets.append(
                Bet(
                    bet_id=make_id("bet", rng),
                    customer_id=customer.customer_id,
                    game_id=slip.game_id,
                    amount=slip.amount,
                    pick=slip.pick,
                    line=lines[slip.game_id],
                    day_placed=state.day,
                )
            )
    entries: list[LogEntry] = []
    if new_bets:
        total = sum(b.amount for b in new_bets)
        entries.append(_entry(state, rng, f"{len(new_bets)} bets received totaling ${total:,}"))
    state = replace(state, bets=state.bets + tuple(new_bets), bets_received_today=True)
    return _append_log(state, entries)


def _new_game(state: GameState, action: NewGame, rng: random.Random) -> GameState:
    return create_initial_state(rng)


def _load_game(state: GameState, action: LoadGame, rng: random.Random) -> GameState:
    return action.state


def _set_line(state: GameState, action: SetLine, rng: random.Random) -> GameState:
    if state.day == GAME_DAY:
        return state
    game = state.game(action.game_id)
    if game is None or game.is_complete or game.week != state.week:
        return state
    line = snap_line(action.line)
    games = tuple(replace(g, your_line=line) if g.game_id == game.game_id else g for g in state.games)
    return replace(state, games=games)


def _recruit(state: GameState, mission: Mission, rng: random.Random) -> tuple[Customer, ...]:
    if mission.reward.new_customer is None:
        return state.customers
    name_gen = NameGenerator(rng)
    name_gen.reserve([c.name for c in state.customers])
    customer = generate_customer(mission.reward.new_customer, rng, name=name_gen.next_name())
    return state.customers + (replace(customer, location=mission.location),)


def _schmooze(customers: tuple[Customer, ...], customer_id: str | None) -> tuple[Customer, ...]:
    return tuple(
        replace(
            c,
            reliability=min(1.0, c.reliability + SCHMOOZE_RELIABILITY_GAIN),
            max_bet=round(c.max_bet * SCHMOOZE_MAX_BET_MULT),
        )
        if c.customer_id == customer_id
        else c
        for c in customers
    )


def _do_mission(state: GameState, action: DoMission, rng: random.Random) -> GameState:
    mission = state.mission(action.mission_id)
    if mission is None:
        return state
    if state.energy < mission.energy_cost or state.bankroll < mission.money_cost:
        logger.debug("Mission %s rejected: not enough energy or money", mission.mission_id)
        return state
    debt_id = mission.reward.debt_collected
    if mission.mission_type == "collect" and (debt_id is None or state.debt_for(debt_id) is None):
        return state

    result = execute_mission(mission, rng)
    customers = state.customers
    debts = state.debts
    hedges = state.hedges
    fixed_games = state.fixed_games
    scouted = state.has_scouted_this_week
    reward = mission.reward

    if result.success:
        if mission.mission_type == "recruit":
            customers = _recruit(state, mission, rng)
        elif mission.mission_type == "collect":
            debts = tuple(d for d in debts if d.customer_id != result.debt_collected)
        elif mission.mission_type == "hedge" and reward.hedge_game_id and reward.hedge_side:
            hedges = hedges + (
                Hedge(
                    game_id=reward.hedge_game_id,
                    side=reward.hedge_side,
                    amount=reward.hedge_amount,
                    line=reward.hedge_line,
                ),
            )
        elif mission.mission_type == "scout" and reward.reveal_market_lines:
            scouted = True
        elif mission.mission_type == "schmooze":
            customers = _schmooze(customers, reward.improve_customer_id)
        elif mission.mission_type == "fix_game" and reward.fix_game_id and reward.fixed_outcome:
            fixed_games = fixed_games + (FixedGame(game_id=reward.fix_game_id, outcome=reward.fixed_outcome),)
    elif mission.mission_type == "collect":
        debts = tuple(replace(d, attempts=d.attempts + 1) if d.customer_id == debt_id else d for d in debts)

    state = replace(
        state,
        bankroll=state.bankroll + result.money_change,
        heat=_clamp(state.heat + result.heat_change, 0, HEAT_MAX),
        energy=_clamp(state.energy + result.energy_change, 0, state.max_energy),
        customers=customers,
        debts=debts,
        hedges=hedges,
        fixed_games=fixed_games,
        has_scouted_this_week=scouted,
        actions_today=state.actions_today + 1,
        available_missions=tuple(m for m in state.available_missions if m.mission_id != mission.mission_id),
    )
    state = _append_log(state, [_entry(state, rng, result.message, "info" if result.success else "warning")])
    return state


def _rest(state: GameState, action: Rest, rng: random.Random) -> GameState:
    energy = min(state.max_energy, state.energy + REST_ENERGY_GAIN)
    gained = energy - state.energy
    state = replace(state, energy=energy, actions_today=state.actions_today + 1)
    return _append_log(state, [_entry(state, rng, f"Took it easy. Recovered {gained} energy.")])


def _collect_debt(state: GameState, action: CollectDebt, rng: random.Random) -> GameState:
    debt = state.debt_for(action.customer_id)
    customer = state.customer(action.customer_id)
    if debt is None or customer is None or state.energy < COLLECT_ENERGY_COST:
        return state

    chance = min(COLLECT_MAX_CHANCE, COLLECT_BASE_CHANCE + debt.attempts * COLLECT_CHANCE_PER_ATTEMPT)
    if rng.random() < chance:
        bankroll = state.bankroll + debt.amount
        debts = tuple(d for d in state.debts if d.customer_id != debt.customer_id)
        entry_text, severity = f"Collected ${debt.amount:,} from {customer.name}.", "win"
    else:
        bankroll = state.bankroll
        debts = tuple(replace(d, attempts=d.attempts + 1) if d is debt else d for d in state.debts)
        entry_text, severity = f"{customer.name} dodged you. Try again later.", "warning"

    state = replace(
        state,
        bankroll=bankroll,
        debts=debts,
        heat=_clamp(state.heat + COLLECT_HEAT, 0, HEAT_MAX),
        energy=state.energy - COLLECT_ENERGY_COST,
        actions_today=state.actions_today + 1,
    )
    state = _append_log(state, [_entry(state, rng, entry_text, severity)])
    return state


def _start_next_week(state: GameState, rng: random.Random) -> GameState:
    if any(not g.is_complete for g in state.current_games):
        logger.debug("Week %s cannot roll over before its games are final", state.week)
        return state
    week = state.week + 1
    state = replace(
        state,
        week=week,
        day=1,
        games=state.games + create_week_games(state.teams, week, rng),
        energy=state.max_energy,
        actions_today=0,
        bets_received_today=False,
        has_scouted_this_week=False,
        hedges=(),
        fixed_games=(),
    )
    state = _append_log(state, [_entry(state, rng, f"Week {week} begins. Bankroll: ${state.bankroll:,}")])
    state = _reveal_daily_news(state, rng)
    return _refresh_missions(state, rng)


def _end_day(state: GameState, action: EndDay, rng: random.Random) -> GameState:
    if state.day >= GAME_DAY:
        return _start_next_week(state, rng)

    day = state.day + 1
    state = replace(
        state,
        day=day,
        energy=min(state.max_energy, state.energy + DAILY_ENERGY_GAIN),
        heat=max(0, state.heat - DAILY_HEAT_DECAY),
        actions_today=0,
        bets_received_today=False,
    )
    label = f"Day {day} - Game Day!" if day == GAME_DAY else f"Day {day}"
    state = _append_log(state, [_entry(state, rng, label)])
    state = _reveal_daily_news(state, rng)
    state = _receive_bets(state, rng)
    # Offers are built last so hedges see today's action.
    return _refresh_missions(state, rng)


def _file_debt(
    debts: tuple[Debt, ...],
    customer: Customer | None,
    customer_id: str,
    amount: int,
    week: int,
    rng: random.Random,
    attempts: int = 0,
) -> tuple[Debt, ...]:
    for existing in debts:
        if existing.customer_id == customer_id:
            return tuple(replace(d, amount=d.amount + amount) if d is existing else d for d in debts)
    if len(debts) >= MAX_DEBTS:
        return debts
    location = (customer.location if customer else None) or random_debt_location(rng)
    return debts + (
        Debt(customer_id=customer_id, amount=amount, week_incurred=week, attempts=attempts, location=location),
    )


def _simulate_games(state: GameState, action: SimulateGames, rng: random.Random) -> GameState:
    if state.day != GAME_DAY:
        return state
    pending = [g for g in state.current_games if not g.is_complete]
    if not pending:
        return state

    entries: list[LogEntry] = []
    debts = state.debts
    # An unanswered popup from an earlier week becomes a regular debt.
    if state.pending_non_payer is not None:
        popup = state.pending_non_payer
        debts = _file_debt(debts, state.customer(popup.customer_id), popup.customer_id, popup.amount, state.week, rng)
        state = replace(state, pending_non_payer=None)

    teams = state.teams
    finished: dict[str, Game] = {}
    for game in pending:
        outcome = state.fixed_outcome(game.game_id)
        home = state.team(game.home_team_id)
        away = state.team(game.away_team_id)
        if home is None or away is None:
            continue
        final = simulate_fixed_game(outcome, rng) if outcome else simulate_game(home, away, rng)
        teams = update_team_records(teams, home.team_id, away.team_id, final.home_score, final.away_score)
        finished[game.game_id] = replace(game, status=final)
        overtime = " (OT)" if final.overtime else ""
        entries.append(_entry(state, rng, f"{away.city} {final.away_score} @ {home.city} {final.home_score}{overtime}"))
    games = tuple(finished.get(g.game_id, g) for g in state.games)

    total_bets = customer_wins = customer_losses = pushes = 0
    money_in = money_out = written_off = 0
    skipped: dict[str, int] = {}
    owing = {d.customer_id for d in debts}
    graded: dict[str, Bet] = {}
    for game in finished.values():
        open_bets = [b for b in state.bets if b.game_id == game.game_id and b.result is None]
        for bet in resolve_bets(game, open_bets):
            total_bets += 1
            if bet.result == "win":
                customer_wins += 1
                money_out += round(calculate_payout(bet, JUICE))
                graded[bet.bet_id] = replace(bet, is_paid=True)
            elif bet.result == "push":
                pushes += 1
                graded[bet.bet_id] = replace(bet, is_paid=True)
            else:
                customer_losses += 1
                customer = state.customer(bet.customer_id)
                if customer is not None and rng.random() > customer.reliability:
                    # Debtors who stiff again merge into their existing debt and take no new slot.
                    new_slots = sum(1 for cid in skipped if cid not in owing)
                    has_slot = len(debts) + new_slots < MAX_DEBTS
                    if bet.customer_id in skipped or bet.customer_id in owing or has_slot:
                        skipped[bet.customer_id] = skipped.get(bet.customer_id, 0) + bet.amount
                    else:
                        written_off += bet.amount
                    graded[bet.bet_id] = replace(bet, is_paid=False)
                else:
                    money_in += bet.amount
                    graded[bet.bet_id] = replace(bet, is_paid=True)
    bets = tuple(graded.get(b.bet_id, b) for b in state.bets)

    hedge_net = 0
    for hedge in state.hedges:
        game = finished.get(hedge.game_id)
        if game is not None:
            hedge_net += settle_hedge(game, hedge)

    popup: NonPayerPopup | None = None
    for customer_id, amount in skipped.items():
        customer = state.customer(customer_id)
        name = customer.name if customer else "Unknown"
        if popup is None and customer_id not in owing:
            popup = NonPayerPopup(customer_id=customer_id, customer_name=name, amount=amount)
            continue
        debts = _file_debt(debts, customer, customer_id, amount, state.week, rng)
        entries.append(_entry(state, rng, f"{name} won't pay the ${amount:,} they owe!", "danger"))

    unpaid = sum(skipped.values())
    net = money_in - money_out + hedge_net
    entries.append(_entry(state, rng, f"--- WEEK {state.week} SUMMARY ---"))
    entries.append(
        _entry(state, rng, f"Bets: {total_bets} total ({customer_wins} wins, {customer_losses} losses, {pushes} pushes)")
    )
    entries.append(_entry(state, rng, f"Money IN: +${money_in:,} (from {customer_losses} losing bets)", "win"))
    entries.append(_entry(state, rng, f"Money OUT: -${money_out:,} (paid to {customer_wins} winners)", "loss"))
    if hedge_net:
        sign = "+" if hedge_net > 0 else "-"
        entries.append(_entry(state, rng, f"Layoffs: {sign}${abs(hedge_net):,}", "win" if hedge_net > 0 else "loss"))
    if unpaid > 0:
        entries.append(_entry(state, rng, f"Unpaid: ${unpaid:,} ({len(skipped)} deadbeats)", "danger"))
    if written_off > 0:
        logger.debug("Wrote off $%s of skipped bets past the debt cap", written_off)
    sign = "+" if net >= 0 else "-"
    entries.append(_entry(state, rng, f"NET P&L: {sign}${abs(net):,}", "win" if net >= 0 else "loss"))

    state = replace(
        state,
        teams=teams,
        games=games,
        bets=bets,
        debts=debts,
        bankroll=state.bankroll + net,
        pending_non_payer=popup,
    )
    state = _append_log(state, entries)
    return state


def _handle_non_payer(state: GameState, action: HandleNonPayer, rng: random.Random) -> GameState:
    popup = state.pending_non_payer
    if popup is None or popup.customer_id != action.customer_id:
        return state
    customer = state.customer(action.customer_id)
    if customer is None:
        return replace(state, pending_non_payer=None)

    bankroll = state.bankroll
    energy = state.energy
    heat = state.heat
    debts = state.debts
    customers = state.customers
    amount = popup.amount

    if action.action == "let_slide":
        bankroll += amount
        entry_text, severity = f"Talked to {customer.name}. They paid up the ${amount:,}.", "win"
    elif action.action == "pressure":
        energy = max(0, energy - PRESSURE_ENERGY_COST)
        heat = min(HEAT_MAX, heat + PRESSURE_HEAT)
        if rng.random() < PRESSURE_PAY_CHANCE:
            bankroll += amount
            entry_text, severity = f"Put pressure on {customer.name}. They paid the ${amount:,}.", "win"
        else:
            debts = _file_debt(debts, customer, customer.customer_id, amount, state.week, rng, attempts=1)
            entry_text, severity = f"{customer.name} still won't pay. They owe ${amount:,}.", "danger"
    elif action.action == "enforce":
        energy = max(0, energy - ENFORCE_ENERGY_COST)
        heat = min(HEAT_MAX, heat + ENFORCE_HEAT)
        bankroll += amount
        entry_text, severity = f"Roughed up {customer.name}. Got the ${amount:,}. Word gets around.", "warning"
    elif action.action == "cut_off":
        customers = tuple(replace(c, is_active=False) if c.customer_id == customer.customer_id else c for c in customers)
        debts = tuple(d for d in debts if d.customer_id != customer.customer_id)
        entry_text, severity = f"Cut off {customer.name}. Lost ${amount:,} but won't deal with them again.", "loss"
    else:
        return state

    state = replace(
        state,
        bankroll=bankroll,
        energy=energy,
        heat=heat,
        debts=debts,
        customers=customers,
        pending_non_payer=None,
    )
    state = _append_log(state, [_entry(state, rng, entry_text, severity)])
    return state


def _dismiss_popup(state: GameState, action: DismissPopup, rng: random.Random) -> GameState:
    if state.pending_non_payer is None:
        return state
    return replace(state, pending_non_payer=None)


def _add_log(state: GameState, action: AddLog, rng: random.Random) -> GameState:
    return _append_log(state, [_entry(state, rng, action.message, action.severity)])


_HANDLERS: dict[type, Callable[[GameState, Action, random.Random], GameState]] = {
    NewGame: _new_game,
    LoadGame: _load_game,
    SetLine: _set_line,
    DoMission: _do_mission,
    Rest: _rest,
    EndDay: _end_day,
    SimulateGames: _simulate_games,
    CollectDebt: _collect_debt,
    HandleNonPayer: _handle_non_payer,
    DismissPopup: _dismiss_popup,
    AddLog: _add_log,
}

# Still accepted after the game ends.
_TERMINAL_SAFE = (NewGame, LoadGame, DismissPopup, AddLog)


def reduce(state: GameState, action: Action, rng: random.Random | None = None) -> GameState:
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug("Ignoring unknown action %r", action)
        return state
    if state.is_game_over and not isinstance(action, _TERMINAL_SAFE):
        logger.debug("Ignoring %s after game over", type(action).__name__)
        return state
    rng = rng or random.Random()
    new_state = handler(state, action, rng)
    if new_state is state:
        return state
    return _check_termination(new_state, rng)


def visible_market_line(state: GameState, game: Game) -> float | None:
    """The sharp-book number, but only for a week the bookie has scouted."""
    if not state.has_scouted_this_week or game.week != state.week:
        return None
    return game.market_line
