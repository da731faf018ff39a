import pytest
from fastapi import HTTPException

from bookie_sim.api import BookieService, health


def _service(tmp_path) -> BookieService:
    return BookieService(data_root=tmp_path, seed=17)


def test_health() -> None:
    assert health() == {"status": "ok"}


def test_service_starts_a_book_and_saves_it(tmp_path) -> None:
    service = _service(tmp_path)
    board = service.board()
    assert board["week"] == 1
    assert board["bankroll"] == 10_000
    assert len(board["games"]) == 4
    assert all(g["market_line"] is None for g in board["games"])
    assert (tmp_path / "bookie-game-save.json").exists()


def test_seeded_services_deal_the_same_week(tmp_path) -> None:
    first = _service(tmp_path / "a").board()["games"]
    second = _service(tmp_path / "b").board()["games"]
    assert [(g["home"], g["away"]) for g in first] == [(g["home"], g["away"]) for g in second]


def test_set_line_reports_the_change(tmp_path) -> None:
    service = _service(tmp_path)
    game_id = service.board()["games"][0]["game_id"]
    result = service.set_line(game_id, 6.3)
    assert result["ok"] is True
    assert service.state.game(game_id).your_line == 6.5
    assert service.board()["games"][0]["spread"] == "-6.5"


def test_unknown_ids_are_not_found(tmp_path) -> None:
    service = _service(tmp_path)
    with pytest.raises(HTTPException) as exc:
        service.set_line("game-99-0", 1.0)
    assert exc.value.status_code == 404
    with pytest.raises(HTTPException):
        service.do_mission("mission-missing")
    with pytest.raises(HTTPException):
        service.collect("customer-missing")


def test_bad_choices_are_rejected(tmp_path) -> None:
    service = _service(tmp_path)
    with pytest.raises(HTTPException) as exc:
        service.handle_non_payer("customer-1", "break_legs")
    assert exc.value.status_code == 400
    with pytest.raises(HTTPException) as exc:
        service.add_log("hello", "shouting")
    assert exc.value.status_code == 400


def test_illegal_move_is_reported_without_changes(tmp_path) -> None:
    service = _service(tmp_path)
    result = service.handle_non_payer(service.state.customers[0].customer_id, "let_slide")
    assert result["ok"] is False
    assert result["state"]["bankroll"] == 10_000


def test_log_message_is_recorded(tmp_path) -> None:
    service = _service(tmp_path)
    result = service.add_log("Note to self", "WARNING")
    assert result["ok"] is True
    assert service.state.log[-1].message == "Note to self"
    assert service.state.log[-1].severity == "warning"
