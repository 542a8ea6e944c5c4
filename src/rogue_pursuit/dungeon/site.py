from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, order=True)
class Site:
    """A (row, col) position in the dungeon.

    Row 0 is the top of the board and column 0 its left edge. Sites compare
    and hash by coordinates only, and sort in row-major order.
    """

    row: int
    col: int

    def manhattan_to(self, other: "Site") -> int:
        return abs(self.row - other.row) + abs(self.col - other.col)

    def chebyshev_to(self, other: "Site") -> int:
        return max(abs(self.row - other.row), abs(self.col - other.col))

    def surrounding(self) -> Iterator["Site"]:
        """Yield the 3x3 block centred on this site (itself included), row-major.

        No bounds checking is done; callers filter with the topology.
        """
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                yield Site(self.row + dr, self.col + dc)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"
