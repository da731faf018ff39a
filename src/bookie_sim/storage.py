from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError

from .models import GameState

logger = logging.getLogger(__name__)

STORAGE_KEY = "bookie-game-save"

_STATE_ADAPTER = TypeAdapter(GameState)


def state_to_dict(state: GameState) -> dict[str, Any]:
    return _STATE_ADAPTER.dump_python(state, mode="json")


def state_from_dict(raw: Any) -> GameState:
    return _STATE_ADAPTER.validate_python(raw)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """In-process stand-in for a browser's local storage."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def delete(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStore:
    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.exists():
            backup = path.with_suffix(path.suffix + ".bak")
            try:
                shutil.copy2(path, backup)
            except OSError:
                logger.warning("Could not back up %s before overwriting", path)
        path.write_text(value, encoding="utf-8")

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class SaveSlot:
    SAVE_VERSION = 1

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self.store = store
        self.key = key
        self.last_load_error: str = ""

    def save(self, state: GameState) -> None:
        payload = {
            "save_version": self.SAVE_VERSION,
            "game_state": state_to_dict(state),
        }
        self.store.set(self.key, json.dumps(payload, indent=2))

    def load(self) -> GameState | None:
        """Return the saved game, or ``None`` if there is none or it cannot be read."""
        self.last_load_error = ""
        try:
            text = self.store.get(self.key)
            if text is None:
                return None
            raw = json.loads(text)
            if not isinstance(raw, dict):
                self.last_load_error = "Saved game has invalid format; starting fresh."
                return None
            version = int(raw.get("save_version", 1) or 1)
            if version > self.SAVE_VERSION:
                self.last_load_error = (
                    f"Unsupported save version {version}; app supports up to {self.SAVE_VERSION}."
                )
                return None
            # Unwrapped payloads predate the version envelope.
            payload = raw.get("game_state", raw)
            return state_from_dict(payload)
        except (json.JSONDecodeError, OSError, TypeError, ValueError, ValidationError) as exc:
            self.last_load_error = f"Failed to load saved game ({exc}); starting fresh."
            return None
        finally:
            if self.last_load_error:
                logger.warning(self.last_load_error)

    def clear(self) -> None:
        self.store.delete(self.key)
