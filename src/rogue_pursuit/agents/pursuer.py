from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple

from ..config import SearchSettings
from ..dungeon.graph import AdjacencyGraph
from ..dungeon.site import Site
from ..dungeon.topology import Topology

logger = logging.getLogger(__name__)

DEFAULT_HORIZON = 5


class PursuerSearch:
    """
    Move selection for the monster.

    A move is chosen in three stages:

    1. take the rogue outright when it stands next to the monster;
    2. iterative deepening over a rogue-adversarial AND/OR tree: the shallowest
       depth at which some first step forces a capture wins, first step in
       neighbour order;
    3. otherwise step along a breadth-first shortest path towards the rogue.

    The search holds no per-turn state; both positions are passed to ``move``.
    """

    def __init__(self, graph: AdjacencyGraph, horizon: int = DEFAULT_HORIZON) -> None:
        if horizon < 0:
            raise ValueError("horizon must be >= 0")
        self.graph = graph
        self.horizon = horizon

    @classmethod
    def from_settings(cls, graph: AdjacencyGraph, settings: SearchSettings) -> "PursuerSearch":
        return cls(graph, horizon=settings.pursuer_horizon)

    def move(self, monster: Site, rogue: Site) -> Optional[Site]:
        """Return the monster's next site, or None when the rogue is unreachable."""
        if rogue in self.graph.neighbors(monster):
            logger.debug("Monster at %s takes rogue at %s", monster, rogue)
            return rogue

        forced = self.forced_capture_move(monster, rogue)
        if forced is not None:
            return forced

        step = self.shortest_path_step(monster, rogue)
        if step is None:
            logger.error("No path from monster at %s to rogue at %s", monster, rogue)
        else:
            logger.debug("Monster follows shortest path %s -> %s", monster, step)
        return step

    def forced_capture_move(self, monster: Site, rogue: Site) -> Optional[Site]:
        """First step of the shallowest capture the rogue cannot escape, if any."""
        memo: Dict[Tuple[Site, Site, int], bool] = {}
        for depth in range(self.horizon):
            for step in self.graph.neighbors(monster):
                if self.can_force_capture(step, rogue, depth, memo):
                    logger.debug("Monster forces capture via %s within depth %d", step, depth)
                    return step
        return None

    def can_force_capture(
        self,
        monster: Site,
        rogue: Site,
        depth: int,
        memo: Optional[Dict[Tuple[Site, Site, int], bool]] = None,
    ) -> bool:
        """True if the monster at ``monster`` catches the rogue within ``depth`` more rounds.

        Depth 0 asks whether the rogue is boxed in: every site it can reach is one
        the monster can reach next. Deeper levels look for a monster step after
        which every rogue reply is a win one level down.
        """
        if depth < 0:
            return False
        if memo is None:
            memo = {}
        key = (monster, rogue, depth)
        cached = memo.get(key)
        if cached is not None:
            return cached

        rogue_moves = self.graph.neighbors(rogue)
        result = all(self.graph.is_adjacent(monster, r) for r in rogue_moves)
        if not result and depth > 0:
            result = any(
                all(self.can_force_capture(m, r, depth - 1, memo) for r in rogue_moves)
                for m in self.graph.neighbors(monster)
            )
        memo[key] = result
        return result

    def shortest_path_step(self, monster: Site, rogue: Site) -> Optional[Site]:
        path = self.shortest_path(monster, rogue)
        if path is None:
            return None
        if len(path) == 1:
            return monster
        return path[1]

    def shortest_path(self, start: Site, goal: Site) -> Optional[List[Site]]:
        """Breadth-first shortest path from ``start`` to ``goal`` (both included)."""
        marks = self.graph.marks()
        marks.mark(start)
        came_from: Dict[Site, Site] = {}
        frontier = deque([start])
        while frontier:
            site = frontier.popleft()
            if site == goal:
                path = [site]
                while site != start:
                    site = came_from[site]
                    path.append(site)
                path.reverse()
                return path
            for nxt in self.graph.neighbors(site):
                if not marks.is_marked(nxt):
                    marks.mark(nxt)
                    came_from[nxt] = site
                    frontier.append(nxt)
        return None


def find_corners(graph: AdjacencyGraph, topology: Topology) -> List[Site]:
    """Room sites with at most three other neighbours, all of them rooms.

    These are pockets where a rogue has the fewest ways out.
    """
    corners = []
    for site in graph:
        if not topology.is_room(site):
            continue
        others = [n for n in graph.neighbors(site) if n != site]
        if len(others) <= 3 and all(topology.is_room(n) for n in others):
            corners.append(site)
    return corners
