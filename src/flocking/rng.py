from __future__ import annotations

import random
from typing import Optional


class DeterministicRng:
    """Seedable random stream owned by a single simulation session.

    A ``None`` seed draws from OS entropy, so every session differs unless a
    seed is injected.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_int(self, low: int, high: int) -> int:
        return self._random.randrange(low, high)
