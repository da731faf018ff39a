from __future__ import annotations

import logging
import random

from .actions import Action, LoadGame, NewGame
from .models import GameState
from .reducer import create_initial_state, reduce
from .storage import KeyValueStore, SaveSlot

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the live ``GameState`` and keeps the save slot in step with it."""

    def __init__(self, store: KeyValueStore, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self.slot = SaveSlot(store)
        saved = self.slot.load()
        if saved is None:
            if self.slot.last_load_error:
                logger.warning("Starting a fresh book: %s", self.slot.last_load_error)
            self.state = create_initial_state(self.rng)
            self.save()
        else:
            self.state = saved

    @property
    def last_load_error(self) -> str:
        return self.slot.last_load_error

    def dispatch(self, action: Action) -> GameState:
        new_state = reduce(self.state, action, self.rng)
        if new_state is self.state:
            return self.state
        self.state = new_state
        # Finished books stay on disk as they were; a new game overwrites them.
        if not new_state.is_game_over or isinstance(action, (NewGame, LoadGame)):
            self.save()
        return self.state

    def save(self) -> None:
        self.slot.save(self.state)
