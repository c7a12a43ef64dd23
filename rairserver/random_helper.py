"""Random number helpers used by the game logic."""

from __future__ import annotations

import random

_UINT64_BITS = 64
_INT64_OFFSET = 1 << 63


class RandomHelper:
    """A seedable source of random integers, floats and chances."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def generate_single_fast(self, end: int) -> int:
        """Return an integer in ``[0, end)``."""
        if end <= 0:
            raise ValueError("end must be positive")
        return self._rng.randrange(end)

    def generate_single(self, start: float, end: float) -> float:
        """Return a value between ``start`` and ``end``.

        Integers are drawn from the closed range, floats from ``[start, end)``.
        """
        if start > end:
            raise ValueError("start must not exceed end")
        if _is_int(start) and _is_int(end):
            return self._rng.randint(int(start), int(end))
        if start == end:
            return float(start)
        return start + (end - start) * self._rng.random()

    def generate_single_uint64(self) -> int:
        """Return an integer uniformly spread over the unsigned 64-bit range."""
        return self._rng.getrandbits(_UINT64_BITS)

    def generate_single_int64(self) -> int:
        """Return an integer uniformly spread over the signed 64-bit range."""
        return self._rng.getrandbits(_UINT64_BITS) - _INT64_OFFSET

    def one_in_x(self, x: int) -> bool:
        """Return True when a draw from ``[0, x]`` comes out as 0."""
        if x < 0:
            raise ValueError("x must not be negative")
        return self._rng.randint(0, x) == 0


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)