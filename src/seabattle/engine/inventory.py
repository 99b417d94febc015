"""Bookkeeping of the opponent ships that are still afloat."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .errors import InvalidMatchError, InvalidTransitionError


class ShipInventory:
    """Multiset of alive ship lengths plus the count of ship cells not yet hit."""

    def __init__(self, ship_lengths: Iterable[int]) -> None:
        lengths = list(ship_lengths)
        if not lengths:
            raise InvalidMatchError("A match needs at least one ship.")
        if any(length < 1 for length in lengths):
            raise InvalidMatchError(f"Ship lengths must be >= 1, got {lengths}.")
        self._counts: Counter[int] = Counter(lengths)
        self.remaining_cells = sum(lengths)

    def __repr__(self) -> str:
        return f"ShipInventory({dict(sorted(self._counts.items()))}, remaining_cells={self.remaining_cells})"

    def __contains__(self, length: int) -> bool:
        return self._counts.get(length, 0) > 0

    def count(self, length: int) -> int:
        return self._counts.get(length, 0)

    @property
    def multiplicity(self) -> dict[int, int]:
        """Alive ship count per length."""
        return {length: count for length, count in self._counts.items() if count > 0}

    def alive_lengths(self) -> list[int]:
        """Distinct alive lengths greater than one, longest first."""
        return sorted((length for length in self.multiplicity if length > 1), reverse=True)

    def has_long_ships(self) -> bool:
        return bool(self.alive_lengths())

    def mark_cell_hit(self) -> None:
        if self.remaining_cells <= 0:
            raise InvalidTransitionError("No ship cells are left to hit.")
        self.remaining_cells -= 1

    def remove(self, length: int) -> None:
        """Drop one ship of ``length``; it must still be alive."""
        if length not in self:
            raise InvalidTransitionError(
                f"No alive ship of length {length}; alive: {self.multiplicity}."
            )
        self._counts[length] -= 1
        if self._counts[length] == 0:
            del self._counts[length]
