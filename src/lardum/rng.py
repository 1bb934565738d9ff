from __future__ import annotations

import bisect
import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


@dataclass
class RandomSource:
    """
    Single source of randomness for level generation.

    Pass a ``seed`` to make every level (rooms, tunnels, item rolls) repeatable,
    e.g. from the ``--seed`` CLI flag or in tests.
    """

    seed: int | None = None
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)
        logger.debug("RandomSource ready (seed=%s)", "system" if self.seed is None else self.seed)

    def randint(self, a: int, b: int) -> int:
        """Inclusive on both ends."""
        return self._rng.randint(a, b)

    def randrange(self, start: int, stop: int) -> int:
        """Half-open: ``stop`` is never returned."""
        return self._rng.randrange(start, stop)

    def coin_flip(self) -> bool:
        return self._rng.random() < 0.5

    def weighted_choice(self, weights: Mapping[Any, float]) -> Any:
        """Pick a key with probability proportional to its weight.

        Zero weights are never picked. Raises ValueError for an empty mapping,
        a negative weight or an all-zero table.
        """
        if not weights:
            raise ValueError("weighted_choice needs at least one entry")
        negative = [k for k, w in weights.items() if w < 0]
        if negative:
            raise ValueError(f"Negative weight for {negative[0]!r}")
        live = [(k, w) for k, w in weights.items() if w > 0]
        if not live:
            raise ValueError("Every weight is zero")

        bounds = list(itertools.accumulate(w for _, w in live))
        roll = self._rng.random() * bounds[-1]
        index = bisect.bisect_right(bounds, roll)
        return live[min(index, len(live) - 1)][0]


def weights_snapshot(weights: Mapping[Any, float]) -> Dict[Any, float]:
    """Copy of the non-zero entries, for logging."""
    return {k: w for k, w in weights.items() if w}


__all__ = ["RandomSource", "weights_snapshot"]
