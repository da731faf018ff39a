from __future__ import annotations

from typing import Iterable

from .config import GAME_DAY
from .customers import TYPE_LABELS
from .lines import format_spread
from .models import Customer, GameState, LogEntry, Mission
from .reducer import visible_market_line
from .settlement import game_exposure
from .teams import format_team_line


def format_status(state: GameState) -> str:
    day = "Game Day" if state.day == GAME_DAY else f"Day {state.day}"
    line = (
        f"Week {state.week} {day}  Bankroll ${state.bankroll:,}  "
        f"Energy {state.energy}/{state.max_energy}  Heat {state.heat}"
    )
    if state.is_game_over:
        line += f"\nGAME OVER: {state.game_over_reason}"
    return line


def format_board(state: GameState) -> str:
    lines = ["Away                Home                Line   Market  Action H/A        Score"]
    for game in state.current_games:
        home = state.team(game.home_team_id)
        away = state.team(game.away_team_id)
        if home is None or away is None:
            continue
        market = visible_market_line(state, game)
        market_text = format_spread(market, "home") if market is not None else "?"
        exposure = game_exposure(state.bets, game.game_id)
        action = f"${exposure.home_amount:,}/${exposure.away_amount:,}"
        score = f"{game.away_score}-{game.home_score}" if game.is_complete else ""
        lines.append(
            f"{away.full_name:<19} {home.full_name:<19} {format_spread(game.your_line, 'home'):>5}"
            f"  {market_text:>6}  {action:<16} {score:>6}"
        )
        for item in game.revealed_news:
            lines.append(f"    * {item.headline}")
    return "\n".join(lines)


def format_customers(customers: Iterable[Customer]) -> str:
    lines = ["Name        Type      Max Bet  Reliab  Status"]
    for customer in customers:
        status = "active" if customer.is_active else "cut off"
        lines.append(
            f"{customer.name:<11} {TYPE_LABELS[customer.customer_type]:<9} {customer.max_bet:>7,}"
            f"  {customer.reliability:>6.0%}  {status}"
        )
    return "\n".join(lines)


def format_missions(missions: Iterable[Mission]) -> str:
    lines = ["Mission                           Location          Energy   Cost  Risk"]
    for mission in missions:
        lines.append(
            f"{mission.title:<33} {mission.location:<17} {mission.energy_cost:>6} {mission.money_cost:>6,}"
            f"  {mission.risk:>4.0%}"
        )
    return "\n".join(lines)


def format_log(entries: Iterable[LogEntry], limit: int = 20) -> str:
    recent = list(entries)[-limit:]
    return "\n".join(f"W{e.week} D{e.day} [{e.severity}] {e.message}" for e in recent)


def format_standings(state: GameState) -> str:
    ranked = sorted(state.teams, key=lambda t: (-t.record.wins, t.record.losses, t.full_name))
    lines = ["Pos Team                       W-L      Home      Away"]
    for idx, team in enumerate(ranked, start=1):
        lines.append(f"{idx:>3} {format_team_line(team)}")
    return "\n".join(lines)
