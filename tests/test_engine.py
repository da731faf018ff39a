import random

from bookie_sim.engine import expected_scores, simulate_fixed_game, simulate_game
from bookie_sim.teams import generate_teams


def test_simulated_games_never_end_tied() -> None:
    teams = generate_teams()
    for seed in range(300):
        rng = random.Random(seed)
        home, away = rng.sample(list(teams), 2)
        final = simulate_game(home, away, rng)
        assert final.home_score != final.away_score
        assert final.home_score >= 0
        assert final.away_score >= 0


def test_overtime_decides_a_tie_by_a_field_goal() -> None:
    teams = generate_teams()
    overtime_games = 0
    for seed in range(400):
        final = simulate_game(teams[4], teams[4], random.Random(seed))
        if final.overtime:
            overtime_games += 1
            assert abs(final.home_score - final.away_score) == 3
    assert overtime_games > 0


def test_home_side_expects_more_points_between_equals() -> None:
    team = generate_teams()[4]
    home_expected, away_expected = expected_scores(team, team)
    assert home_expected - away_expected == 3


def test_fixed_game_winner_wins_by_double_digits() -> None:
    for seed in range(50):
        home_win = simulate_fixed_game("home", random.Random(seed))
        assert home_win.home_score - home_win.away_score >= 10
        assert home_win.winner == "home"
        away_win = simulate_fixed_game("away", random.Random(seed))
        assert away_win.away_score - away_win.home_score >= 10
        assert away_win.winner == "away"
