"""Adaptive weighted character selection."""

import logging
import random
from bisect import bisect_right
from collections import deque
from itertools import accumulate

from .config import (
    DEFAULT_WEIGHT, CORRECT_FACTOR, WRONG_FACTOR,
    MIN_WEIGHT, MAX_WEIGHT, RECENCY_SIZE
)

logger = logging.getLogger(__name__)


class InvalidPoolError(ValueError):
    """Raised when a character is requested from an empty candidate pool."""


class AdaptiveSelector:
    """Picks the next character to drill, favouring the ones the learner misses.

    Each character key carries a weight proportional to its chance of being
    picked. Correct answers shrink the weight, wrong answers grow it, and both
    are clamped to [min_weight, max_weight]. One selector is shared by every
    drill a learner runs, so a kanji missed in one JLPT drill also shows up
    more often in any other drill containing it.
    """

    def __init__(self, correct_factor: float = CORRECT_FACTOR,
                 wrong_factor: float = WRONG_FACTOR,
                 min_weight: float = MIN_WEIGHT,
                 max_weight: float = MAX_WEIGHT,
                 recency_size: int = RECENCY_SIZE,
                 rng: random.Random = None):
        if not 0 < correct_factor < 1:
            raise ValueError(f"correct_factor must be in (0, 1), got {correct_factor}")
        if wrong_factor <= 1:
            raise ValueError(f"wrong_factor must be > 1, got {wrong_factor}")
        if min_weight <= 0:
            raise ValueError(f"min_weight must be > 0, got {min_weight}")
        if max_weight < min_weight:
            raise ValueError(f"max_weight ({max_weight}) is below min_weight ({min_weight})")
        if recency_size < 1:
            raise ValueError(f"recency_size must be >= 1, got {recency_size}")

        self.correct_factor = correct_factor
        self.wrong_factor = wrong_factor
        self.min_weight = min_weight
        self.max_weight = max_weight
        self.rng = rng or random.Random()
        self._weights = {}
        self._recent = deque(maxlen=recency_size)

    def __contains__(self, key: str) -> bool:
        return key in self._weights

    def __len__(self) -> int:
        return len(self._weights)

    @property
    def default_weight(self) -> float:
        return min(max(DEFAULT_WEIGHT, self.min_weight), self.max_weight)

    @property
    def weights(self) -> dict[str, float]:
        """Copy of the weight table."""
        return dict(self._weights)

    @property
    def recent(self) -> list[str]:
        """Recently shown characters, oldest first."""
        return list(self._recent)

    @property
    def last_selected(self) -> str | None:
        return self._recent[-1] if self._recent else None

    def get_weight(self, key: str) -> float:
        """Current weight of a key, the default for keys never seen."""
        return self._weights.get(key, self.default_weight)

    def select_weighted_character(self, pool: list[str], exclude: str = None) -> str:
        """Pick a key from pool with probability proportional to its weight.

        The excluded key counts as weight 0 for this draw only, unless the pool
        offers no alternative to it.
        """
        if not pool:
            raise InvalidPoolError("Cannot select a character from an empty pool")
        if len(pool) == 1:
            return pool[0]

        skip = exclude is not None and any(key != exclude for key in pool)
        weights = [
            0.0 if skip and key == exclude else self.get_weight(key)
            for key in pool
        ]
        cumulative = list(accumulate(weights))
        total = cumulative[-1]
        if total <= 0:
            # Unreachable while every table weight stays positive
            return pool[0]

        point = self.rng.random() * total
        index = bisect_right(cumulative, point)
        if index >= len(pool):
            # Float rounding put the point on the total; take the last key
            # that can actually be drawn
            index = max(i for i, w in enumerate(weights) if w > 0)
        return pool[index]

    def mark_character_seen(self, key: str) -> None:
        """Make sure key has a weight and remember it as recently shown."""
        self._weights.setdefault(key, self.default_weight)
        self._recent.append(key)

    def update_character_weight(self, key: str, was_correct: bool) -> None:
        """Adjust a key's weight after the learner answered it."""
        weight = self._weights.setdefault(key, self.default_weight)
        if was_correct:
            new_weight = max(weight * self.correct_factor, self.min_weight)
        else:
            new_weight = min(weight * self.wrong_factor, self.max_weight)
        self._weights[key] = new_weight
        logger.debug(f"Weight for {key!r}: {weight:.3f} -> {new_weight:.3f} "
                     f"({'correct' if was_correct else 'wrong'})")

    def reset(self) -> None:
        """Forget every weight and the recency memory."""
        self._weights.clear()
        self._recent.clear()

    def to_dict(self) -> dict:
        return {
            'weights': dict(self._weights),
            'recent': list(self._recent)
        }

    @classmethod
    def from_dict(cls, data: dict, **kwargs) -> 'AdaptiveSelector':
        selector = cls(**kwargs)
        for key, weight in (data.get('weights') or {}).items():
            if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight <= 0:
                logger.warning(f"Dropping invalid weight for {key!r}: {weight!r}")
                continue
            selector._weights[key] = min(max(float(weight), selector.min_weight), selector.max_weight)
        for key in data.get('recent') or []:
            selector._recent.append(key)
        return selector
