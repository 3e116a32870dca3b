"""User intents emitted by the chat interface and consumed by the board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class CellClicked:
    index: int


@dataclass(frozen=True, slots=True)
class NewBoard:
    pass


@dataclass(frozen=True, slots=True)
class ColorChanged:
    color: str


Intent = Union[CellClicked, NewBoard, ColorChanged]

__all__ = ["CellClicked", "ColorChanged", "Intent", "NewBoard"]
