"""Descriptive sentences displayed next to the board numbers."""

from __future__ import annotations

from typing import Iterator, Tuple

from ..errors import IndexOutOfRangeError
from ..state.models import NUMBER_RANGE

SENTENCE_TEMPLATE = "This is sentence number {number}."


class SentenceCatalog:
    """Immutable lookup of one sentence per bingo number."""

    def __init__(self, size: int = NUMBER_RANGE, template: str = SENTENCE_TEMPLATE) -> None:
        self._sentences: Tuple[str, ...] = tuple(
            template.format(number=number) for number in range(1, size + 1)
        )

    def sentence_for(self, number: int) -> str:
        """Return the sentence attached to ``number`` (1-based)."""

        if isinstance(number, bool) or not isinstance(number, int) or not 1 <= number <= len(self._sentences):
            raise IndexOutOfRangeError(f"No sentence for number {number!r}")
        return self._sentences[number - 1]

    def __getitem__(self, index: int) -> str:
        return self._sentences[index]

    def __len__(self) -> int:
        return len(self._sentences)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sentences)


CATALOG = SentenceCatalog()
