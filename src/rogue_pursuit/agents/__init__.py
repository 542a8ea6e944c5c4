from .corridors import CorridorAnalysis, CorridorAnalyzer
from .evader import LOSS, EvaderSearch
from .pursuer import PursuerSearch, find_corners

__all__ = [
    "CorridorAnalysis",
    "CorridorAnalyzer",
    "EvaderSearch",
    "LOSS",
    "PursuerSearch",
    "find_corners",
]
