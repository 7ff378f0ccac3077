"""Domain port for random draws. ``random.Random`` satisfies it."""

from __future__ import annotations

from typing import Protocol


class IRandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that ``a <= N <= b``."""
        ...
