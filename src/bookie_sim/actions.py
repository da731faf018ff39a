"""Discrete inputs accepted by :func:`bookie_sim.reducer.reduce`."""

from __future__ import annotations

from dataclasses import dataclass

from .models import CollectionAction, GameState, Severity


@dataclass(frozen=True, slots=True)
class NewGame:
    pass


@dataclass(frozen=True, slots=True)
class LoadGame:
    state: GameState


@dataclass(frozen=True, slots=True)
class SetLine:
    game_id: str
    line: float


@dataclass(frozen=True, slots=True)
class DoMission:
    mission_id: str


@dataclass(frozen=True, slots=True)
class Rest:
    pass


@dataclass(frozen=True, slots=True)
class EndDay:
    pass


@dataclass(frozen=True, slots=True)
class SimulateGames:
    pass


@dataclass(frozen=True, slots=True)
class CollectDebt:
    customer_id: str


@dataclass(frozen=True, slots=True)
class HandleNonPayer:
    customer_id: str
    action: CollectionAction


@dataclass(frozen=True, slots=True)
class DismissPopup:
    pass


@dataclass(frozen=True, slots=True)
class AddLog:
    message: str
    severity: Severity = "info"


Action = (
    NewGame
    | LoadGame
    | SetLine
    | DoMission
    | Rest
    | EndDay
    | SimulateGames
    | CollectDebt
    | HandleNonPayer
    | DismissPopup
    | AddLog
)
