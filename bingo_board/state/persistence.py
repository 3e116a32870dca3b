"""Snapshot serialization between ``BoardState`` and a storage slot."""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

from ..errors import DeserializationError, InvalidArgumentError
from .models import BOARD_CELLS, DEFAULT_COLOR, BoardState, Cell, Highlight
from .storage import KeyValueStorage

LOGGER = logging.getLogger(__name__)
STORAGE_KEY = "bingo_board_state"


def _serialize_cell(cell: Cell) -> Dict[str, object]:
    return {"number": cell.number, "color": cell.color}


def serialize_state(state: BoardState) -> str:
    """Encode the board as compact JSON text."""

    payload = {
        "cells": [_serialize_cell(cell) for cell in state.cells],
        "active_color": state.active_color,
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def _deserialize_cell(payload: object, position: int) -> Cell:
    if not isinstance(payload, dict):
        raise DeserializationError(f"Cell #{position} is not an object")
    number = payload.get("number")
    if isinstance(number, bool) or not isinstance(number, int):
        raise DeserializationError(f"Cell #{position} has a non-integer number {number!r}")
    color = payload.get("color")
    if color is None:
        return Cell(number=number)
    if not isinstance(color, str):
        raise DeserializationError(f"Cell #{position} has a non-string color {color!r}")
    try:
        return Cell(number=number, highlight=Highlight(color))
    except InvalidArgumentError as exc:
        raise DeserializationError(f"Cell #{position}: {exc}") from exc


def deserialize_state(text: str) -> BoardState:
    """Decode snapshot text, raising ``DeserializationError`` on any mismatch."""

    try:
        payload = json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise DeserializationError(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DeserializationError("Snapshot must be a JSON object")
    cells_payload = payload.get("cells")
    if not isinstance(cells_payload, list):
        raise DeserializationError("Snapshot has no cell list")
    if len(cells_payload) != BOARD_CELLS:
        raise DeserializationError(f"Snapshot has {len(cells_payload)} cells, expected {BOARD_CELLS}")
    cells: List[Cell] = [_deserialize_cell(entry, idx) for idx, entry in enumerate(cells_payload)]
    # Older snapshots only carry the cells.
    active_color = payload.get("active_color", DEFAULT_COLOR)
    try:
        return BoardState(cells=cells, active_color=active_color)
    except InvalidArgumentError as exc:
        raise DeserializationError(str(exc)) from exc


class BoardPersistence:
    """Save and restore one board under a single storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self.key = key

    def save(self, state: BoardState) -> None:
        self._storage.set_item(self.key, serialize_state(state))

    def load(self) -> Optional[BoardState]:
        """Return the stored board, or ``None`` if it is missing or unusable."""

        try:
            text = self._storage.get_item(self.key)
        except OSError as exc:
            LOGGER.error("Failed to read bingo snapshot %s: %s", self.key, exc)
            return None
        if text is None:
            return None
        try:
            return deserialize_state(text)
        except DeserializationError as exc:
            LOGGER.warning("Discarding bingo snapshot %s: %s", self.key, exc)
            return None

    def clear(self) -> None:
        self._storage.remove_item(self.key)


__all__ = ["STORAGE_KEY", "BoardPersistence", "deserialize_state", "serialize_state"]
