"""Dataclasses describing a bingo board and its highlighted cells."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..errors import IndexOutOfRangeError, InvalidArgumentError

if TYPE_CHECKING:  # pragma: no cover
    from ..services.generator import BoardGenerator

GRID_SIZE = 5
BOARD_CELLS = GRID_SIZE * GRID_SIZE
NUMBER_RANGE = 75
DEFAULT_COLOR = "#ffd700"


def normalize_color(color: object) -> str:
    """Return ``color`` stripped of whitespace, rejecting empty values."""

    if not isinstance(color, str) or not color.strip():
        raise InvalidArgumentError(f"Color must be a non-empty string, got {color!r}")
    return color.strip()


@dataclass(frozen=True, slots=True)
class Highlight:
    """Color marker applied to a cell. ``None`` on a cell means no marker."""

    color: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", normalize_color(self.color))


@dataclass(slots=True)
class Cell:
    """One board position: a number and an optional highlight."""

    number: int
    highlight: Optional[Highlight] = None

    @property
    def is_highlighted(self) -> bool:
        return self.highlight is not None

    @property
    def color(self) -> Optional[str]:
        return self.highlight.color if self.highlight else None


def validate_cells(cells: Iterable[Cell]) -> List[Cell]:
    """Check the 25 distinct numbers in ``1..75`` invariant and return fresh copies.

    The board never shares mutable cells with the caller.
    """

    result = [Cell(number=cell.number, highlight=cell.highlight) for cell in cells]
    if len(result) != BOARD_CELLS:
        raise InvalidArgumentError(f"A board needs exactly {BOARD_CELLS} cells, got {len(result)}")
    seen: set[int] = set()
    for cell in result:
        number = cell.number
        if isinstance(number, bool) or not isinstance(number, int) or not 1 <= number <= NUMBER_RANGE:
            raise InvalidArgumentError(f"Cell number {number!r} is outside 1..{NUMBER_RANGE}")
        if number in seen:
            raise InvalidArgumentError(f"Cell number {number} appears more than once")
        seen.add(number)
    return result


@dataclass(slots=True)
class BoardState:
    """The 25 cells of a board plus the color the next toggle applies."""

    cells: List[Cell]
    active_color: str = DEFAULT_COLOR

    def __post_init__(self) -> None:
        self.cells = validate_cells(self.cells)
        self.active_color = normalize_color(self.active_color)

    @property
    def numbers(self) -> List[int]:
        return [cell.number for cell in self.cells]

    def highlighted_indices(self) -> List[int]:
        """Return the positions of every highlighted cell in board order."""

        return [index for index, cell in enumerate(self.cells) if cell.highlight is not None]

    def toggle_cell(self, index: int) -> Cell:
        """Flip the highlight of the cell at ``index`` and return the cell.

        A highlighted cell is cleared; an unhighlighted cell takes the
        current ``active_color``.
        """

        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self.cells):
            raise IndexOutOfRangeError(f"Cell index {index!r} is outside 0..{len(self.cells) - 1}")
        cell = self.cells[index]
        cell.highlight = None if cell.highlight else Highlight(self.active_color)
        return cell

    def replace_cells(self, cells: Iterable[Cell]) -> None:
        """Install a new set of cells after checking the board invariants."""

        self.cells = validate_cells(cells)

    def regenerate(self, generator: "BoardGenerator") -> None:
        """Swap in a freshly generated, unhighlighted board."""

        self.replace_cells(generator.generate_board())

    def set_active_color(self, color: str) -> None:
        self.active_color = normalize_color(color)


__all__ = [
    "BOARD_CELLS",
    "DEFAULT_COLOR",
    "GRID_SIZE",
    "NUMBER_RANGE",
    "BoardState",
    "Cell",
    "Highlight",
    "normalize_color",
    "validate_cells",
]
