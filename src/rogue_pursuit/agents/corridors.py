from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from ..dungeon.graph import AdjacencyGraph
from ..dungeon.site import Site
from ..dungeon.topology import Topology

logger = logging.getLogger(__name__)

Path = List[Site]


@dataclass(frozen=True)
class CorridorAnalysis:
    """Structural categories of corridor sites, all subsets of the corridor cells.

    - corridor_starts: corridor sites with at least one room neighbour.
    - viable_corridors: corridor sites proven not to be dead ends.
    - safe_corridor_starts: corridor starts that open onto a viable corridor.
    - in_loop: corridor sites lying on a cycle of corridor cells.
    """

    corridor_starts: Tuple[Site, ...] = ()
    viable_corridors: FrozenSet[Site] = field(default_factory=frozenset)
    safe_corridor_starts: FrozenSet[Site] = field(default_factory=frozenset)
    in_loop: FrozenSet[Site] = field(default_factory=frozenset)

    def is_viable(self, site: Site) -> bool:
        return site in self.viable_corridors

    def summary(self) -> Dict[str, int]:
        return {
            "corridor_starts": len(self.corridor_starts),
            "viable_corridors": len(self.viable_corridors),
            "safe_corridor_starts": len(self.safe_corridor_starts),
            "in_loop": len(self.in_loop),
        }


class CorridorAnalyzer:
    """
    One-off structural survey of the corridor network, run once per game.

    Three passes are made from every corridor start:

    1. loops: walk every simple corridor path; stepping back onto the current path
       more than two sites behind closes a cycle;
    2. connections: a path that reaches another corridor start (three sites or
       more) leads somewhere rather than to a dead end;
    3. single passages: a start touching two rooms is itself a passage.

    The walks enumerate simple paths and are exponential in corridor branching.
    """

    def __init__(self, graph: AdjacencyGraph, topology: Topology) -> None:
        self.graph = graph
        self.topology = topology

    def analyze(self) -> CorridorAnalysis:
        starts = self.find_corridor_starts()
        viable: Set[Site] = set()
        safe: Set[Site] = set()
        in_loop: Set[Site] = set()

        def record_loop(path: Path, index: int) -> None:
            if len(path) - index > 2:
                safe.add(path[0])
                viable.update(path)
                in_loop.update(path[index:])

        start_set = frozenset(starts)

        def record_connection(path: Path) -> bool:
            current = path[-1]
            if current != path[0] and current in start_set and len(path) > 2:
                safe.add(path[0])
                viable.update(path)
                return True
            return False

        for start in starts:
            self._walk(start, on_revisit=record_loop)
        loops_found = len(in_loop)
        for start in starts:
            self._walk(start, on_arrive=record_connection)
        for start in starts:
            rooms = sum(1 for n in self.graph.neighbors(start) if self.topology.is_room(n))
            if rooms > 1:
                viable.add(start)
                safe.add(start)

        analysis = CorridorAnalysis(
            corridor_starts=tuple(starts),
            viable_corridors=frozenset(viable),
            safe_corridor_starts=frozenset(safe),
            in_loop=frozenset(in_loop),
        )
        logger.info("Corridor analysis: %s (%d loop sites)", analysis.summary(), loops_found)
        return analysis

    def find_corridor_starts(self) -> List[Site]:
        starts = []
        for site in self.graph:
            if not self.topology.is_corridor(site):
                continue
            if any(self.topology.is_room(n) for n in self.graph.neighbors(site)):
                starts.append(site)
        return starts

    def _corridor_neighbors(self, site: Site) -> Iterator[Site]:
        for n in self.graph.neighbors(site):
            if self.topology.is_corridor(n):
                yield n

    def _walk(
        self,
        start: Site,
        on_revisit: Optional[Callable[[Path, int], None]] = None,
        on_arrive: Optional[Callable[[Path], bool]] = None,
    ) -> None:
        """Depth-first enumeration of every simple corridor path from ``start``.

        ``on_revisit(path, index)`` fires when the walk steps onto ``path[index]``,
        a site already on the current path; the walk does not go through it.
        ``on_arrive(path)`` fires after a new site is pushed; returning True stops
        the walk from extending that path.
        """
        path: Path = [start]
        position: Dict[Site, int] = {start: 0}
        branches = [self._corridor_neighbors(start)]
        while branches:
            nxt = next(branches[-1], None)
            if nxt is None:
                branches.pop()
                del position[path.pop()]
                continue
            index = position.get(nxt)
            if index is not None:
                if on_revisit is not None:
                    on_revisit(path, index)
                continue
            path.append(nxt)
            position[nxt] = len(path) - 1
            if on_arrive is not None and on_arrive(path):
                del position[path.pop()]
                continue
            branches.append(self._corridor_neighbors(nxt))
