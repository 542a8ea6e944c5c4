from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import DungeonFormatError
from .site import Site
from .topology import ROOM_CHAR, Topology

logger = logging.getLogger(__name__)

ROGUE_CHAR = "@"


@dataclass(frozen=True)
class DungeonLayout:
    """A parsed dungeon: the board topology plus both agents' starting sites."""

    topology: Topology
    monster: Site
    rogue: Site
    monster_glyph: str = "M"


def parse_dungeon(text: str) -> DungeonLayout:
    """Parse dungeon text.

    The first line holds the board size N. The next N lines hold the rows, with
    cell j of a row at character 2*j (cells are separated by one space). Short
    rows are padded with wall. The monster is any capital letter and the rogue is
    '@'; both stand on room cells.
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise DungeonFormatError("missing board size on first line")
    try:
        size = int(lines[0].strip())
    except ValueError:
        raise DungeonFormatError(f"invalid board size: {lines[0].strip()!r}") from None
    if size <= 0:
        raise DungeonFormatError(f"board size must be > 0, got {size}")
    rows = lines[1:1 + size]
    if len(rows) < size:
        raise DungeonFormatError(f"expected {size} rows, found {len(rows)}")

    board: List[List[str]] = []
    monster: Optional[Site] = None
    rogue: Optional[Site] = None
    glyph = "M"
    for i, line in enumerate(rows):
        cells = []
        for j in range(size):
            ch = line[2 * j] if 2 * j < len(line) else " "
            if "A" <= ch <= "Z":
                if monster is not None:
                    raise DungeonFormatError(f"second monster {ch!r} at {Site(i, j)}")
                monster, glyph, ch = Site(i, j), ch, ROOM_CHAR
            elif ch == ROGUE_CHAR:
                if rogue is not None:
                    raise DungeonFormatError(f"second rogue at {Site(i, j)}")
                rogue, ch = Site(i, j), ROOM_CHAR
            cells.append(ch)
        board.append(cells)

    if monster is None:
        raise DungeonFormatError("no monster (A-Z) on the board")
    if rogue is None:
        raise DungeonFormatError(f"no rogue ({ROGUE_CHAR}) on the board")

    topology = Topology(board)
    logger.info("Parsed %dx%d dungeon: monster %s at %s, rogue at %s", size, size, glyph, monster, rogue)
    return DungeonLayout(topology=topology, monster=monster, rogue=rogue, monster_glyph=glyph)


def load_dungeon(path: Union[str, Path]) -> DungeonLayout:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dungeon file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        text = f.read()
    logger.debug("Loaded dungeon file %s", path)
    return parse_dungeon(text)
