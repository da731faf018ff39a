import random

from bookie_sim.schedule import generate_weekly_matchups
from bookie_sim.teams import generate_teams, update_team_records


def test_weekly_matchups_pair_every_team_once() -> None:
    teams = generate_teams()
    pairs = generate_weekly_matchups(teams, random.Random(4))
    assert len(pairs) == 4
    seen = [team.team_id for pair in pairs for team in pair]
    assert sorted(seen) == sorted(team.team_id for team in teams)


def test_weekly_matchups_follow_seed() -> None:
    teams = generate_teams()
    first = generate_weekly_matchups(teams, random.Random(12))
    second = generate_weekly_matchups(teams, random.Random(12))
    assert [(h.team_id, a.team_id) for h, a in first] == [(h.team_id, a.team_id) for h, a in second]


def test_default_league_has_eight_distinct_teams() -> None:
    teams = generate_teams()
    assert len(teams) == 8
    assert len({team.abbreviation for team in teams}) == 8
    assert all(team.record.wins == 0 and team.record.losses == 0 for team in teams)


def test_records_and_streaks_update_from_final_score() -> None:
    teams = generate_teams()
    home, away = teams[0], teams[1]
    teams = update_team_records(teams, home.team_id, away.team_id, 27, 20)
    teams = update_team_records(teams, home.team_id, away.team_id, 31, 10)
    winner = teams[0]
    loser = teams[1]
    assert str(winner.record) == "2-0"
    assert str(winner.home_record) == "2-0"
    assert str(winner.away_record) == "0-0"
    assert winner.streak == 2
    assert winner.streak_text == "W2"
    assert str(loser.away_record) == "0-2"
    assert loser.streak_text == "L2"

    teams = update_team_records(teams, away.team_id, home.team_id, 24, 17)
    assert teams[0].streak == -1
    assert teams[1].streak == 1
