"""State management primitives for the bingo board."""

from .intents import CellClicked, ColorChanged, Intent, NewBoard
from .models import BoardState, Cell, Highlight
from .persistence import STORAGE_KEY, BoardPersistence
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "BoardPersistence",
    "BoardState",
    "Cell",
    "CellClicked",
    "ColorChanged",
    "Highlight",
    "Intent",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "NewBoard",
    "STORAGE_KEY",
]
