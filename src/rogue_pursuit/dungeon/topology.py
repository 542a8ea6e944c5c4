from __future__ import annotations

import logging
from enum import IntEnum
from typing import Iterator, List, Sequence

from ..exceptions import DungeonFormatError
from .site import Site

logger = logging.getLogger(__name__)

ROOM_CHAR = "."
CORRIDOR_CHAR = "+"


class Cell(IntEnum):
    WALL = 0
    ROOM = 1
    CORRIDOR = 2


class Topology:
    """
    Fixed size x size classification of dungeon cells.

    - '.' cells are rooms, '+' cells are corridors, anything else is wall.
    - Any site outside [0, size) x [0, size) is a wall for every query.

    Movement between two sites is legal when both are open, they are at most one
    step apart in any direction (staying put included), and the step is either
    room-to-room or orthogonal. Corridors therefore never allow diagonal steps.
    """

    def __init__(self, board: Sequence[Sequence[str]]) -> None:
        size = len(board)
        if size == 0:
            raise DungeonFormatError("board must not be empty")
        for i, row in enumerate(board):
            if len(row) != size:
                raise DungeonFormatError(f"row {i} has {len(row)} cells, expected {size}")
        self._size = size
        self._cells: List[List[Cell]] = [[_classify_char(ch) for ch in row] for row in board]
        logger.debug(
            "Topology created: %dx%d, %d room and %d corridor cells",
            size,
            size,
            self.count(Cell.ROOM),
            self.count(Cell.CORRIDOR),
        )

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Topology":
        """Build a topology from compact rows, one character per cell."""
        return cls([list(r) for r in rows])

    @property
    def size(self) -> int:
        return self._size

    def in_bounds(self, site: Site) -> bool:
        return 0 <= site.row < self._size and 0 <= site.col < self._size

    def classify(self, site: Site) -> Cell:
        if not self.in_bounds(site):
            return Cell.WALL
        return self._cells[site.row][site.col]

    def is_room(self, site: Site) -> bool:
        return self.classify(site) == Cell.ROOM

    def is_corridor(self, site: Site) -> bool:
        return self.classify(site) == Cell.CORRIDOR

    def is_wall(self, site: Site) -> bool:
        return self.classify(site) == Cell.WALL

    def is_legal_move(self, v: Site, w: Site) -> bool:
        if self.is_wall(v) or self.is_wall(w):
            return False
        if v.chebyshev_to(w) > 1:
            return False
        if self.is_room(v) and self.is_room(w):
            return True
        return v.row == w.row or v.col == w.col

    def sites(self) -> Iterator[Site]:
        """Yield every in-bounds site in row-major order."""
        for r in range(self._size):
            for c in range(self._size):
                yield Site(r, c)

    def open_sites(self) -> Iterator[Site]:
        for site in self.sites():
            if not self.is_wall(site):
                yield site

    def count(self, cell: Cell) -> int:
        return sum(row.count(cell) for row in self._cells)

    def __repr__(self) -> str:
        return f"Topology({self._size}x{self._size})"


def _classify_char(ch: str) -> Cell:
    if ch == ROOM_CHAR:
        return Cell.ROOM
    if ch == CORRIDOR_CHAR:
        return Cell.CORRIDOR
    return Cell.WALL
