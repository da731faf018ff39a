from __future__ import annotations

import os
import random
from pathlib import Path
from threading import Lock
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .actions import (
    Action,
    AddLog,
    CollectDebt,
    DismissPopup,
    DoMission,
    EndDay,
    HandleNonPayer,
    NewGame,
    Rest,
    SetLine,
    SimulateGames,
)
from .lines import format_spread
from .models import COLLECTION_ACTIONS, SEVERITIES, Game, GameState
from .reducer import visible_market_line
from .session import GameSession
from .settlement import game_exposure
from .storage import JsonFileStore, state_to_dict


class LineSelection(BaseModel):
    game_id: str
    line: float


class MissionSelection(BaseModel):
    mission_id: str


class CollectSelection(BaseModel):
    customer_id: str


class NonPayerSelection(BaseModel):
    customer_id: str
    action: str


class LogMessage(BaseModel):
    message: str
    severity: str = "info"


def _env_seed() -> int | None:
    raw = os.environ.get("BOOKIE_SIM_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class BookieService:
    def __init__(self, data_root: str | Path | None = None, seed: int | None = None) -> None:
        env_root = os.environ.get("BOOKIE_SIM_DATA_DIR")
        self.data_root = Path(data_root or env_root or Path(__file__).resolve().parents[2])
        if seed is None:
            seed = _env_seed()
        self.session = GameSession(JsonFileStore(self.data_root), random.Random(seed))
        self._lock = Lock()

    @property
    def state(self) -> GameState:
        return self.session.state

    def _game_to_dict(self, game: Game) -> dict[str, Any]:
        state = self.state
        home = state.team(game.home_team_id)
        away = state.team(game.away_team_id)
        exposure = game_exposure(state.bets, game.game_id)
        return {
            "game_id": game.game_id,
            "home": home.full_name if home else game.home_team_id,
            "away": away.full_name if away else game.away_team_id,
            "home_record": str(home.record) if home else "",
            "away_record": str(away.record) if away else "",
            "your_line": game.your_line,
            "spread": format_spread(game.your_line, "home"),
            "market_line": visible_market_line(state, game),
            "news": [n.headline for n in game.revealed_news],
            "is_complete": game.is_complete,
            "home_score": game.home_score,
            "away_score": game.away_score,
            "action": {
                "home": exposure.home_amount,
                "away": exposure.away_amount,
                "home_count": exposure.home_count,
                "away_count": exposure.away_count,
            },
        }

    def snapshot(self) -> dict[str, Any]:
        return {
            "state": state_to_dict(self.state),
            "last_load_error": self.session.last_load_error,
        }

    def board(self) -> dict[str, Any]:
        state = self.state
        return {
            "week": state.week,
            "day": state.day,
            "bankroll": state.bankroll,
            "energy": state.energy,
            "heat": state.heat,
            "games": [self._game_to_dict(g) for g in state.current_games],
            "pending_non_payer": (
                {
                    "customer_id": state.pending_non_payer.customer_id,
                    "customer_name": state.pending_non_payer.customer_name,
                    "amount": state.pending_non_payer.amount,
                }
                if state.pending_non_payer
                else None
            ),
            "is_game_over": state.is_game_over,
            "game_over_reason": state.game_over_reason,
        }

    def apply(self, action: Action) -> dict[str, Any]:
        before = self.state
        after = self.session.dispatch(action)
        return {"ok": after is not before, **self.snapshot()}

    def set_line(self, game_id: str, line: float) -> dict[str, Any]:
        if self.state.game(game_id) is None:
            raise HTTPException(status_code=404, detail="Game not found")
        return self.apply(SetLine(game_id=game_id, line=line))

    def do_mission(self, mission_id: str) -> dict[str, Any]:
        if self.state.mission(mission_id) is None:
            raise HTTPException(status_code=404, detail="Mission not found")
        return self.apply(DoMission(mission_id=mission_id))

    def collect(self, customer_id: str) -> dict[str, Any]:
        if self.state.debt_for(customer_id) is None:
            raise HTTPException(status_code=404, detail="No debt for that customer")
        return self.apply(CollectDebt(customer_id=customer_id))

    def handle_non_payer(self, customer_id: str, action: str) -> dict[str, Any]:
        choice = action.lower().strip()
        if choice not in COLLECTION_ACTIONS:
            raise HTTPException(status_code=400, detail=f"Unknown collection action '{action}'")
        return self.apply(HandleNonPayer(customer_id=customer_id, action=choice))

    def add_log(self, message: str, severity: str) -> dict[str, Any]:
        level = severity.lower().strip()
        if level not in SEVERITIES:
            raise HTTPException(status_code=400, detail=f"Unknown severity '{severity}'")
        return self.apply(AddLog(message=message, severity=level))


service = BookieService()
app = FastAPI(title="Bookie Sim API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/state")
def state() -> dict[str, Any]:
    with service._lock:
        return service.snapshot()


@app.get("/api/board")
def board() -> dict[str, Any]:
    with service._lock:
        return service.board()


@app.post("/api/new-game")
def new_game() -> dict[str, Any]:
    with service._lock:
        return service.apply(NewGame())


@app.post("/api/line")
def set_line(payload: LineSelection) -> dict[str, Any]:
    with service._lock:
        return service.set_line(payload.game_id, payload.line)


@app.post("/api/mission")
def do_mission(payload: MissionSelection) -> dict[str, Any]:
    with service._lock:
        return service.do_mission(payload.mission_id)


@app.post("/api/rest")
def rest() -> dict[str, Any]:
    with service._lock:
        return service.apply(Rest())


@app.post("/api/end-day")
def end_day() -> dict[str, Any]:
    with service._lock:
        return service.apply(EndDay())


@app.post("/api/simulate")
def simulate() -> dict[str, Any]:
    with service._lock:
        return service.apply(SimulateGames())


@app.post("/api/collect")
def collect(payload: CollectSelection) -> dict[str, Any]:
    with service._lock:
        return service.collect(payload.customer_id)


@app.post("/api/nonpayer")
def handle_non_payer(payload: NonPayerSelection) -> dict[str, Any]:
    with service._lock:
        return service.handle_non_payer(payload.customer_id, payload.action)


@app.post("/api/dismiss")
def dismiss() -> dict[str, Any]:
    with service._lock:
        return service.apply(DismissPopup())


@app.post("/api/log")
def add_log(payload: LogMessage) -> dict[str, Any]:
    with service._lock:
        return service.add_log(payload.message, payload.severity)
