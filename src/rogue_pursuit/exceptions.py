from __future__ import annotations


class RoguePursuitError(Exception):
    """Base exception for the rogue-pursuit project."""


class DungeonFormatError(RoguePursuitError, ValueError):
    """Raised when dungeon text cannot be turned into a square board."""


class GraphFullError(RoguePursuitError):
    """Raised when adding a vertex to a graph that reached its capacity."""


class VertexNotFoundError(RoguePursuitError, KeyError):
    """Raised when a site is not a vertex of the graph being queried."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class DisconnectedDungeonError(RoguePursuitError):
    """Raised when the monster has no path to the rogue."""


class IllegalMoveError(RoguePursuitError):
    """Raised when an agent returns a move its current site does not allow."""

    def __init__(self, agent: str, current, proposed) -> None:
        super().__init__(f"{agent} caught cheating: {current} -> {proposed}")
        self.agent = agent
        self.current = current
        self.proposed = proposed


class ConfigError(RoguePursuitError):
    """Raised when settings fail validation."""
