"""Domain port for name resolution."""

from __future__ import annotations

from typing import List, Protocol


class IResolver(Protocol):
    """Resolves host names to addresses."""

    async def resolve(self, host: str) -> List[str]:
        """Return the addresses ``host`` resolves to.

        Raises:
            ObservationError: If the lookup fails.
        """
        ...
