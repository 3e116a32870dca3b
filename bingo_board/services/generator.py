"""Fresh board generation."""

from __future__ import annotations

from typing import List, Optional

from ..state.models import BOARD_CELLS, NUMBER_RANGE, Cell
from .sampler import RandomSampler


class BoardGenerator:
    """Build unhighlighted 25-cell boards from numbers ``1..75``."""

    def __init__(self, sampler: Optional[RandomSampler] = None) -> None:
        self.sampler = sampler or RandomSampler()

    def generate_board(self) -> List[Cell]:
        numbers = self.sampler.sample(NUMBER_RANGE, BOARD_CELLS)
        return [Cell(number=number) for number in numbers]
