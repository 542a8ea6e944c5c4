from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .agents.corridors import CorridorAnalyzer
from .agents.evader import EvaderSearch
from .agents.pursuer import PursuerSearch, find_corners
from .config import Settings
from .dungeon.graph import AdjacencyGraph
from .dungeon.loader import ROGUE_CHAR, DungeonLayout
from .dungeon.site import Site
from .dungeon.topology import CORRIDOR_CHAR, ROOM_CHAR
from .exceptions import DisconnectedDungeonError, IllegalMoveError

logger = logging.getLogger(__name__)

CAPTURE_CHAR = "*"

MONSTER = "Monster"
ROGUE = "Rogue"


@dataclass
class GameResult:
    turns: int
    captured: bool
    monster: Site
    rogue: Site


class Game:
    """Turn loop around the two searches.

    The game owns both agents' current sites. Each agent gets its own graph over
    the shared topology, every move an agent returns is checked against the
    topology before it is committed, and an illegal move is fatal.
    """

    def __init__(self, layout: DungeonLayout, settings: Optional[Settings] = None) -> None:
        self.layout = layout
        self.settings = settings or Settings()
        self.topology = layout.topology
        self.monster_glyph = layout.monster_glyph
        self._monster_site = layout.monster
        self._rogue_site = layout.rogue

        monster_graph = AdjacencyGraph.from_topology(self.topology)
        if not monster_graph.path_exists(self._monster_site, self._rogue_site):
            logger.error("Dungeon rejected: rogue at %s unreachable from monster at %s", self._rogue_site, self._monster_site)
            raise DisconnectedDungeonError(
                f"no path from monster at {self._monster_site} to rogue at {self._rogue_site}"
            )
        self.monster = PursuerSearch.from_settings(monster_graph, self.settings.search)
        self.corners: List[Site] = find_corners(monster_graph, self.topology)
        logger.debug("Monster graph has %d room corners", len(self.corners))

        rogue_graph = AdjacencyGraph.from_topology(self.topology)
        self.analysis = CorridorAnalyzer(rogue_graph, self.topology).analyze()
        self.rogue = EvaderSearch.from_settings(rogue_graph, self.topology, self.settings.search, self.analysis)
        self.turns = 0

    @property
    def monster_site(self) -> Site:
        return self._monster_site

    @property
    def rogue_site(self) -> Site:
        return self._rogue_site

    @property
    def captured(self) -> bool:
        return self._monster_site == self._rogue_site

    def move_monster(self) -> Site:
        nxt = self.monster.move(self._monster_site, self._rogue_site)
        if nxt is None:
            raise DisconnectedDungeonError(
                f"monster at {self._monster_site} has no path to rogue at {self._rogue_site}"
            )
        self._monster_site = self._commit(MONSTER, self._monster_site, nxt)
        return self._monster_site

    def move_rogue(self) -> Site:
        nxt = self.rogue.move(self._rogue_site, self._monster_site)
        self._rogue_site = self._commit(ROGUE, self._rogue_site, nxt)
        return self._rogue_site

    def _commit(self, agent: str, current: Site, proposed: Site) -> Site:
        if not self.topology.is_legal_move(current, proposed):
            raise IllegalMoveError(agent, current, proposed)
        logger.debug("%s %s -> %s", agent, current, proposed)
        return proposed

    def play(
        self,
        max_turns: Optional[int] = None,
        on_move: Optional[Callable[["Game", str], None]] = None,
    ) -> GameResult:
        """Run turns until capture or ``max_turns``.

        ``on_move(game, agent)`` is called after every half-turn.
        """
        if max_turns is None:
            max_turns = self.settings.game.max_turns
        order = [(MONSTER, self.move_monster), (ROGUE, self.move_rogue)]
        if not self.settings.game.monster_first:
            order.reverse()

        while not self.captured and (max_turns is None or self.turns < max_turns):
            self.turns += 1
            for agent, step in order:
                step()
                if on_move is not None:
                    on_move(self, agent)
                if self.captured:
                    break

        result = GameResult(self.turns, self.captured, self._monster_site, self._rogue_site)
        if result.captured:
            logger.info("Rogue caught at %s after %d turns", result.rogue, result.turns)
        else:
            logger.info("Rogue still free after %d turns", result.turns)
        return result

    def render(self) -> str:
        out = []
        for site in self.topology.sites():
            if site.col == 0 and site.row > 0:
                out.append("\n")
            if self.captured and site == self._rogue_site:
                ch = CAPTURE_CHAR
            elif site == self._rogue_site:
                ch = ROGUE_CHAR
            elif site == self._monster_site:
                ch = self.monster_glyph
            elif self.topology.is_room(site):
                ch = ROOM_CHAR
            elif self.topology.is_corridor(site):
                ch = CORRIDOR_CHAR
            else:
                ch = " "
            out.append(ch + " ")
        out.append("\n")
        return "".join(out)

    def __str__(self) -> str:
        return self.render()
