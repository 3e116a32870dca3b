"""Random sampling without replacement over a bounded integer range."""

from __future__ import annotations

import random
from typing import List, Optional

from ..errors import InvalidArgumentError


class RandomSampler:
    """Draw ordered, distinct values from ``[1, domain_size]``.

    The sampler owns its own ``random.Random`` instance so tests can pass a
    seed (or a prepared generator) instead of patching the module-level
    random source.
    """

    def __init__(self, rng: Optional[random.Random] = None, *, seed: Optional[int] = None) -> None:
        if rng is not None and seed is not None:
            raise InvalidArgumentError("Pass either rng or seed, not both")
        self._rng = rng if rng is not None else random.Random(seed)

    def sample(self, domain_size: int, count: int) -> List[int]:
        """Return ``count`` distinct integers from ``1..domain_size``.

        The full range is shuffled with Fisher-Yates and the head is taken,
        so every ordering of every subset is equally likely.
        """

        if domain_size < 0 or count < 0:
            raise InvalidArgumentError(
                f"domain_size and count must be non-negative (got {domain_size}, {count})"
            )
        if count > domain_size:
            raise InvalidArgumentError(f"Cannot draw {count} unique values from a domain of {domain_size}")
        values = list(range(1, domain_size + 1))
        for idx in range(len(values) - 1, 0, -1):
            swap = self._rng.randrange(idx + 1)
            values[idx], values[swap] = values[swap], values[idx]
        return values[:count]
