from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from ..config import SearchSettings
from ..dungeon.graph import AdjacencyGraph
from ..dungeon.site import Site
from ..dungeon.topology import Topology
from .corridors import CorridorAnalysis, CorridorAnalyzer

logger = logging.getLogger(__name__)

# Value of a position where the rogue is caught or trapped. The heuristic is
# always finite, so this never collides with a real score.
LOSS = -math.inf
WIN = math.inf

DEFAULT_ROOM_DEPTH = 6
DEFAULT_CORRIDOR_DEPTH = 8

LOOP_WEIGHT = 1000
SAFE_START_WEIGHT = 500
VIABLE_WEIGHT = 250
ROOM_WEIGHT = 1


class EvaderSearch:
    """
    Move selection for the rogue: minimax with alpha-beta pruning.

    The rogue maximises on even remaining depth and the monster minimises on odd.
    Every node first checks the two losing conditions (standing next to the
    monster, or inside a dead-end corridor); leaves are scored by
    :meth:`score`, which rewards distance and prefers corridor loops over
    through-corridors over open rooms.

    Rooms have more neighbours than corridors, so rooms are searched shallower.
    """

    def __init__(
        self,
        graph: AdjacencyGraph,
        topology: Topology,
        analysis: Optional[CorridorAnalysis] = None,
        room_depth: int = DEFAULT_ROOM_DEPTH,
        corridor_depth: int = DEFAULT_CORRIDOR_DEPTH,
    ) -> None:
        if room_depth < 0 or corridor_depth < 0:
            raise ValueError("search depths must be >= 0")
        self.graph = graph
        self.topology = topology
        self.analysis = analysis if analysis is not None else CorridorAnalyzer(graph, topology).analyze()
        self.room_depth = room_depth
        self.corridor_depth = corridor_depth

    @classmethod
    def from_settings(
        cls,
        graph: AdjacencyGraph,
        topology: Topology,
        settings: SearchSettings,
        analysis: Optional[CorridorAnalysis] = None,
    ) -> "EvaderSearch":
        return cls(
            graph,
            topology,
            analysis,
            room_depth=settings.evader_room_depth,
            corridor_depth=settings.evader_corridor_depth,
        )

    def candidates(self, site: Site) -> List[Site]:
        """Sites reachable in one move from ``site``, staying put included."""
        moves = list(self.graph.neighbors(site))
        if site not in moves:
            moves.append(site)
        return moves

    def depth_for(self, rogue: Site) -> int:
        return self.room_depth if self.topology.is_room(rogue) else self.corridor_depth

    def move(self, rogue: Site, monster: Site) -> Site:
        depth = self.depth_for(rogue)
        best_site, best_value = self.best_candidate(rogue, monster, depth)
        if best_value == LOSS:
            retreat = self.retreat(rogue, monster)
            logger.debug("Rogue at %s sees no escape within depth %d; retreating to %s", rogue, depth, retreat)
            return retreat
        logger.debug("Rogue moves %s -> %s (value %s, depth %d)", rogue, best_site, best_value, depth)
        return best_site

    def best_candidate(self, rogue: Site, monster: Site, depth: int) -> Tuple[Site, float]:
        best_site = rogue
        best_value = LOSS
        found = False
        for candidate in self.candidates(rogue):
            value = self.evaluate(candidate, monster, depth)
            if not found or value > best_value:
                best_site, best_value, found = candidate, value, True
        return best_site, best_value

    def evaluate(self, candidate: Site, monster: Site, depth: Optional[int] = None) -> float:
        """Minimax value of the rogue moving to ``candidate`` with the monster at ``monster``."""
        if depth is None:
            depth = self.depth_for(candidate)
        return self._minimax(candidate, monster, LOSS, WIN, depth)

    def retreat(self, rogue: Site, monster: Site) -> Site:
        """Greedy escape: the neighbour farthest from the monster by Manhattan distance.

        Ties go to a site the monster cannot reach next, then to neighbour order.
        """
        best = rogue
        best_key: Optional[Tuple[int, bool]] = None
        for site in self.graph.neighbors(rogue):
            key = (site.manhattan_to(monster), not self.graph.is_adjacent(monster, site))
            if best_key is None or key > best_key:
                best, best_key = site, key
        return best

    def _minimax(self, rogue: Site, monster: Site, alpha: float, beta: float, depth: int) -> float:
        if self.graph.is_adjacent(monster, rogue):
            return LOSS
        if self.topology.is_corridor(rogue) and not self.analysis.is_viable(rogue):
            return LOSS
        if depth <= 0:
            return self.score(rogue, monster)

        if depth % 2 == 0:
            for nxt in self.candidates(rogue):
                alpha = max(alpha, self._minimax(nxt, monster, alpha, beta, depth - 1))
                if beta <= alpha:
                    return alpha
            return alpha

        for nxt in self.candidates(monster):
            beta = min(beta, self._minimax(rogue, nxt, alpha, beta, depth - 1))
            if beta <= alpha:
                return beta
        return beta

    def score(self, rogue: Site, monster: Site) -> float:
        """Static value of the rogue standing on ``rogue`` with the monster on ``monster``."""
        distance = monster.manhattan_to(rogue)
        if rogue in self.analysis.in_loop:
            return LOOP_WEIGHT * (distance - 1)
        if rogue in self.analysis.safe_corridor_starts:
            return SAFE_START_WEIGHT * (distance - 1)
        if rogue in self.analysis.viable_corridors:
            return VIABLE_WEIGHT * distance
        if self.topology.is_room(rogue):
            return ROOM_WEIGHT * (distance - 1)
        return 0
