"""Persistence-aware owner of the board bound to each chat."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..errors import InvalidArgumentError
from ..services.generator import BoardGenerator
from .intents import CellClicked, ColorChanged, Intent, NewBoard
from .models import BoardState
from .persistence import STORAGE_KEY, BoardPersistence
from .storage import DEFAULT_STATE_PATH, JsonFileStorage, KeyValueStorage

BoardKey = Tuple[int, int]


class BoardStateManager:
    """Load, mutate and persist bingo boards keyed by chat and thread."""

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        generator: Optional[BoardGenerator] = None,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        self._storage: KeyValueStorage = storage or JsonFileStorage(DEFAULT_STATE_PATH)
        self._generator = generator or BoardGenerator()
        self._boards: Dict[BoardKey, BoardState] = {}

    @property
    def generator(self) -> BoardGenerator:
        return self._generator

    # Lookup helpers ---------------------------------------------------
    @staticmethod
    def storage_key(chat_id: int, thread_id: Optional[int] = None) -> str:
        """Return the storage slot used for the chat/thread combination."""

        return f"{STORAGE_KEY}:{chat_id}:{thread_id or 0}"

    def get(self, chat_id: int, thread_id: Optional[int] = None) -> Optional[BoardState]:
        """Return the cached or persisted board without generating one."""

        key = (chat_id, thread_id or 0)
        state = self._boards.get(key)
        if state is None:
            state = self._persistence(chat_id, thread_id).load()
            if state is not None:
                self._boards[key] = state
        return state

    def get_or_create(self, chat_id: int, thread_id: Optional[int] = None) -> BoardState:
        """Return the chat's board, generating and saving a fresh one if needed."""

        state = self.get(chat_id, thread_id)
        if state is not None:
            return state
        state = BoardState(cells=self._generator.generate_board())
        self._boards[(chat_id, thread_id or 0)] = state
        self._logger.info("Generated new bingo board for chat %s/%s", chat_id, thread_id or 0)
        self._persist(chat_id, thread_id, state)
        return state

    # Mutation helpers -------------------------------------------------
    def apply(self, chat_id: int, thread_id: Optional[int], intent: Intent) -> BoardState:
        """Apply a user intent to the chat's board and persist the result."""

        state = self.get_or_create(chat_id, thread_id)
        if isinstance(intent, CellClicked):
            state.toggle_cell(intent.index)
        elif isinstance(intent, NewBoard):
            state.regenerate(self._generator)
        elif isinstance(intent, ColorChanged):
            state.set_active_color(intent.color)
        else:
            raise InvalidArgumentError(f"Unsupported intent {intent!r}")
        self._logger.debug("Applied %r to bingo board %s/%s", intent, chat_id, thread_id or 0)
        self._persist(chat_id, thread_id, state)
        return state

    def toggle_cell(self, chat_id: int, index: int, thread_id: Optional[int] = None) -> BoardState:
        return self.apply(chat_id, thread_id, CellClicked(index))

    def regenerate(self, chat_id: int, thread_id: Optional[int] = None) -> BoardState:
        return self.apply(chat_id, thread_id, NewBoard())

    def set_active_color(self, chat_id: int, color: str, thread_id: Optional[int] = None) -> BoardState:
        return self.apply(chat_id, thread_id, ColorChanged(color))

    def drop(self, chat_id: int, thread_id: Optional[int] = None) -> None:
        """Forget the chat's board and delete its snapshot."""

        self._boards.pop((chat_id, thread_id or 0), None)
        try:
            self._persistence(chat_id, thread_id).clear()
        except Exception as exc:  # pragma: no cover - defensive logging
            self._logger.exception("Failed to drop bingo snapshot: %s", exc)

    def drop_chat(self, chat_id: int) -> None:
        """Forget every board of the chat, across threads, cached or persisted."""

        for key in [key for key in self._boards if key[0] == chat_id]:
            self._boards.pop(key, None)
        prefix = f"{STORAGE_KEY}:{chat_id}:"
        try:
            for storage_key in [key for key in self._storage.keys() if key.startswith(prefix)]:
                self._storage.remove_item(storage_key)
        except Exception as exc:  # pragma: no cover - defensive logging
            self._logger.exception("Failed to drop bingo snapshots of chat %s: %s", chat_id, exc)

    def reset(self) -> None:
        """Clear all stored data (used in tests)."""

        self._boards.clear()
        self._storage.clear()

    # Internal helpers -------------------------------------------------
    def _persistence(self, chat_id: int, thread_id: Optional[int]) -> BoardPersistence:
        return BoardPersistence(self._storage, self.storage_key(chat_id, thread_id))

    def _persist(self, chat_id: int, thread_id: Optional[int], state: BoardState) -> None:
        """Write the board snapshot, logging any failures."""

        try:
            self._persistence(chat_id, thread_id).save(state)
        except Exception as exc:  # pragma: no cover - defensive logging
            self._logger.exception("Failed to persist bingo board: %s", exc)


STATE_MANAGER = BoardStateManager()
