from bookie_sim.lines import (
    calculate_market_line,
    calculate_true_line,
    does_bet_win,
    favorite_side,
    find_line_value,
    format_spread,
    snap_line,
)
from bookie_sim.models import Game, Team, TeamNews
from bookie_sim.teams import generate_teams


def _game(true_line: float = 3.0, your_line: float = 3.0, news: tuple[TeamNews, ...] = ()) -> Game:
    return Game(
        game_id="game-1-0",
        week=1,
        home_team_id="team-0",
        away_team_id="team-1",
        true_line=true_line,
        market_line=true_line,
        your_line=your_line,
        news=news,
    )


def test_snap_line_rounds_to_half_points() -> None:
    assert snap_line(2.3) == 2.5
    assert snap_line(2.2) == 2.0
    assert snap_line(-1.3) == -1.5
    assert snap_line(7.0) == 7.0


def test_snap_line_rounds_halves_up() -> None:
    assert snap_line(2.25) == 2.5
    assert snap_line(0.75) == 1.0
    assert snap_line(-2.25) == -2.0


def test_even_teams_get_home_field_only() -> None:
    home = Team(team_id="a", city="A", name="A", abbreviation="A", offense=75, defense=75, consistency=75)
    away = Team(team_id="b", city="B", name="B", abbreviation="B", offense=75, defense=75, consistency=75)
    assert calculate_true_line(home, away) == 3.0


def test_true_lines_sit_on_half_point_grid() -> None:
    teams = generate_teams()
    for home in teams:
        for away in teams:
            if home is away:
                continue
            line = calculate_true_line(home, away)
            assert line * 2 == int(line * 2)


def test_stronger_home_team_is_favored_more() -> None:
    teams = {t.abbreviation: t for t in generate_teams()}
    strong, weak = teams["MET"], teams["LAK"]
    assert calculate_true_line(strong, weak) > calculate_true_line(weak, strong)


def test_home_cover_win_loss_and_push() -> None:
    assert does_bet_win(24, 20, "home", 3.0) == "win"
    assert does_bet_win(24, 20, "away", 3.0) == "loss"
    assert does_bet_win(24, 20, "home", 4.0) == "push"
    assert does_bet_win(24, 20, "away", 4.0) == "push"
    assert does_bet_win(24, 20, "home", 4.5) == "loss"
    assert does_bet_win(24, 20, "away", 4.5) == "win"


def test_home_underdog_covers_inside_the_number() -> None:
    # Home getting three, loses by two.
    assert does_bet_win(22, 24, "home", -3.0) == "win"
    assert does_bet_win(22, 24, "away", -3.0) == "loss"


def test_both_sides_never_win_together() -> None:
    for home_score in range(0, 40, 3):
        for away_score in range(0, 40, 4):
            for line in (-7.5, -3.0, 0.0, 2.5, 6.0):
                home = does_bet_win(home_score, away_score, "home", line)
                away = does_bet_win(home_score, away_score, "away", line)
                assert (home, away) in {("win", "loss"), ("loss", "win"), ("push", "push")}


def test_format_spread_from_each_perspective() -> None:
    assert format_spread(3.0, "home") == "-3"
    assert format_spread(3.0, "away") == "+3"
    assert format_spread(-2.5, "home") == "+2.5"
    assert format_spread(0.0, "home") == "PK"


def test_favorite_follows_line_sign() -> None:
    assert favorite_side(3.0) == "home"
    assert favorite_side(0.0) == "home"
    assert favorite_side(-0.5) == "away"


def test_line_value_points_to_the_mispriced_side() -> None:
    assert find_line_value(_game(true_line=3.0, your_line=4.0)) is None
    assert find_line_value(_game(true_line=3.0, your_line=4.5)) is None

    shaded_home = find_line_value(_game(true_line=3.0, your_line=5.0))
    assert shaded_home is not None
    assert shaded_home.side == "away"
    assert shaded_home.value_points == 2.0

    shaded_away = find_line_value(_game(true_line=3.0, your_line=1.0))
    assert shaded_away is not None
    assert shaded_away.side == "home"
    assert shaded_away.value_points == 2.0


def test_market_line_only_moves_on_revealed_news() -> None:
    hidden = TeamNews(team_id="team-0", day=3, category="injury", impact=-3.0, headline="QB hurt")
    shown = TeamNews(team_id="team-1", day=1, category="rest", impact=1.5, headline="Rested", is_revealed=True)
    game = _game(true_line=3.0, news=(hidden, shown))
    assert calculate_market_line(game) == 4.5
