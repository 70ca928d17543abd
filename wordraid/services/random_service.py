"""
Random Service

Seeded Xorshift32 generator so a whole game can be replayed from its number.
"""

from datetime import date, datetime, timezone
from typing import Optional

_MASK = 0xFFFFFFFF
_INT32_MIN = -0x80000000


def _to_int32(value: int) -> int:
    """Wraps an integer into the signed 32-bit range."""
    value &= _MASK
    return value - 0x100000000 if value & 0x80000000 else value


class Random:
    """
    A seeded random number generator using Xorshift32 with a period of 2^32 - 1.

    The same seed always yields the same sequence of draws. The seed is coerced
    into a signed 32-bit integer; a seed of 0 is replaced by -2^31 because
    Xorshift cannot leave the all-zero state.
    """

    def __init__(self, seed: int = 0):
        if not isinstance(seed, int) or isinstance(seed, bool):
            raise TypeError("seed must be an integer")
        self.state = _to_int32(seed) or _INT32_MIN

    def _next_int_non_zero(self) -> int:
        """Advances the state and returns it as a signed 32-bit integer, never 0."""
        x = self.state & _MASK
        x ^= (x << 13) & _MASK
        x ^= x >> 17
        x ^= (x << 5) & _MASK
        self.state = _to_int32(x)
        return self.state

    def next_float(self) -> float:
        """Returns a number in [0, 1)."""
        n = self._next_int_non_zero()
        if n < 0:
            return (n + 2147483648) / 4294967295
        return (n + 2147483647) / 4294967295

    def next_int(self, start: int, end: int) -> int:
        """
        Returns an integer in [start, end).

        Raises:
            ValueError: If the bounds are not integers or start >= end
        """
        if not isinstance(start, int) or not isinstance(end, int):
            raise ValueError("bounds must be integers")
        if start >= end:
            raise ValueError(f"empty range [{start}, {end})")
        value = start + int(self.next_float() * (end - start))
        return min(max(value, start), end - 1)


def game_number_for(day: Optional[date] = None) -> int:
    """Returns the number of days since 1970-01-01, used as the daily game seed."""
    if day is None:
        day = datetime.now(timezone.utc).date()
    return (day - date(1970, 1, 1)).days
