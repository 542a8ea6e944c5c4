from .site import Site
from .topology import Cell, Topology
from .graph import AdjacencyGraph, SiteMarks
from .loader import DungeonLayout, load_dungeon, parse_dungeon

__all__ = [
    "Site",
    "Cell",
    "Topology",
    "AdjacencyGraph",
    "SiteMarks",
    "DungeonLayout",
    "load_dungeon",
    "parse_dungeon",
]
