from __future__ import annotations

import logging
from collections import deque
from typing import Dict, Iterator, List, Set, Tuple

from ..exceptions import GraphFullError, VertexNotFoundError
from .site import Site
from .topology import Topology

logger = logging.getLogger(__name__)


class SiteMarks:
    """Visited set for a single traversal of an :class:`AdjacencyGraph`.

    Obtained from :meth:`AdjacencyGraph.marks`; the caller owns it for the length
    of one search, so two searches never see each other's marks.
    """

    def __init__(self, graph: "AdjacencyGraph") -> None:
        self._graph = graph
        self._marked: Set[Site] = set()

    def mark(self, site: Site) -> None:
        if not self._graph.has_vertex(site):
            raise VertexNotFoundError(f"cannot mark {site}: not a vertex")
        self._marked.add(site)

    def is_marked(self, site: Site) -> bool:
        return site in self._marked

    def clear(self) -> None:
        self._marked.clear()

    def __len__(self) -> int:
        return len(self._marked)


class AdjacencyGraph:
    """
    Undirected graph over dungeon sites.

    Vertices are indexed in insertion order and each vertex keeps a row of edge
    counts keyed by neighbour index, i.e. the non-zero part of a site-indexed
    adjacency matrix. Edges are recorded in both directions. ``neighbors``
    returns sites in vertex index order, so a graph built row-major enumerates
    neighbours row-major too.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._capacity = capacity
        self._sites: List[Site] = []
        self._index: Dict[Site, int] = {}
        self._edges: List[Dict[int, int]] = []
        self._neighbor_cache: Dict[int, Tuple[Site, ...]] = {}

    @classmethod
    def from_topology(cls, topology: Topology) -> "AdjacencyGraph":
        """Build the legal-move graph for every open site of ``topology``."""
        graph = cls(topology.size * topology.size)
        for site in topology.open_sites():
            graph.add_vertex(site)
        for site in graph:
            for other in site.surrounding():
                # each unordered pair once; add_edge records both directions
                if other >= site and topology.is_legal_move(site, other):
                    graph.add_edge(site, other)
        logger.debug("Graph built: %d vertices, %d edges", len(graph), graph.edge_count())
        return graph

    @property
    def capacity(self) -> int:
        return self._capacity

    def is_empty(self) -> bool:
        return not self._sites

    def is_full(self) -> bool:
        return len(self._sites) == self._capacity

    def has_vertex(self, site: Site) -> bool:
        return site in self._index

    def add_vertex(self, site: Site) -> None:
        if site in self._index:
            return
        if self.is_full():
            raise GraphFullError(f"graph capacity {self._capacity} reached; cannot add {site}")
        self._index[site] = len(self._sites)
        self._sites.append(site)
        self._edges.append({})

    def add_edge(self, a: Site, b: Site) -> None:
        i = self._vertex_index(a)
        j = self._vertex_index(b)
        self._edges[i][j] = self._edges[i].get(j, 0) + 1
        if i != j:
            self._edges[j][i] = self._edges[j].get(i, 0) + 1
        self._neighbor_cache.pop(i, None)
        self._neighbor_cache.pop(j, None)

    def neighbors(self, site: Site) -> Tuple[Site, ...]:
        i = self._vertex_index(site)
        cached = self._neighbor_cache.get(i)
        if cached is None:
            cached = tuple(self._sites[j] for j in sorted(self._edges[i]))
            self._neighbor_cache[i] = cached
        return cached

    def is_adjacent(self, a: Site, b: Site) -> bool:
        i = self._index.get(a)
        j = self._index.get(b)
        if i is None or j is None:
            return False
        return j in self._edges[i]

    def marks(self) -> SiteMarks:
        """Return a fresh, empty visited set for one traversal."""
        return SiteMarks(self)

    def edge_count(self) -> int:
        """Number of distinct undirected edges, self edges included."""
        total = 0
        for i, row in enumerate(self._edges):
            total += sum(1 for j in row if j >= i)
        return total

    def path_exists(self, start: Site, goal: Site) -> bool:
        """Breadth-first reachability between two vertices."""
        self._vertex_index(start)
        self._vertex_index(goal)
        seen = self.marks()
        seen.mark(start)
        queue = deque([start])
        while queue:
            site = queue.popleft()
            if site == goal:
                return True
            for nxt in self.neighbors(site):
                if not seen.is_marked(nxt):
                    seen.mark(nxt)
                    queue.append(nxt)
        return False

    def _vertex_index(self, site: Site) -> int:
        try:
            return self._index[site]
        except KeyError:
            raise VertexNotFoundError(f"{site} is not a vertex of this graph") from None

    def __contains__(self, site: object) -> bool:
        return site in self._index

    def __iter__(self) -> Iterator[Site]:
        return iter(list(self._sites))

    def __len__(self) -> int:
        return len(self._sites)

    def __repr__(self) -> str:
        return f"AdjacencyGraph({len(self._sites)}/{self._capacity} vertices)"

