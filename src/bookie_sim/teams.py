from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from .config import TEAM_TABLE
from .models import Team


def generate_teams() -> tuple[Team, ...]:
    return tuple(
        Team(
            team_id=f"team-{idx}",
            city=city,
            name=name,
            abbreviation=abbreviation,
            offense=offense,
            defense=defense,
            consistency=consistency,
        )
        for idx, (city, name, abbreviation, offense, defense, consistency) in enumerate(TEAM_TABLE)
    )


def _register_result(team: Team, won: bool, is_home: bool) -> Team:
    streak = max(1, team.streak + 1) if won else min(-1, team.streak - 1)
    return replace(
        team,
        record=team.record.add(won),
        home_record=team.home_record.add(won) if is_home else team.home_record,
        away_record=team.away_record if is_home else team.away_record.add(won),
        streak=streak,
    )


def update_team_records(
    teams: Iterable[Team],
    home_team_id: str,
    away_team_id: str,
    home_score: int,
    away_score: int,
) -> tuple[Team, ...]:
    updated: list[Team] = []
    for team in teams:
        if team.team_id == home_team_id:
            team = _register_result(team, home_score > away_score, is_home=True)
        elif team.team_id == away_team_id:
            team = _register_result(team, away_score > home_score, is_home=False)
        updated.append(team)
    return tuple(updated)


def format_team_line(team: Team) -> str:
    streak = f" {team.streak_text}" if team.streak_text else ""
    return (
        f"{team.abbreviation:<4}{team.full_name:<18} {str(team.record):>5}"
        f"  H {str(team.home_record):>5}  A {str(team.away_record):>5}{streak}"
    )
