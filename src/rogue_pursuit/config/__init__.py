from .settings import GameSettings, SearchSettings, Settings

__all__ = ["GameSettings", "SearchSettings", "Settings"]
