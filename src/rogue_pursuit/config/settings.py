from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)


class SearchSettings(BaseModel):
    pursuer_horizon: int = Field(5, ge=0, description="Deepest guaranteed-capture probe for the monster")
    evader_room_depth: int = Field(6, ge=0, description="Rogue minimax depth when standing in a room")
    evader_corridor_depth: int = Field(8, ge=0, description="Rogue minimax depth when standing in a corridor")

    @field_validator("evader_room_depth", "evader_corridor_depth")
    @classmethod
    def warn_odd_depth(cls, v: int) -> int:
        if v % 2:
            logger.warning("Odd minimax depth %d: the monster will get the last reply", v)
        return v


class GameSettings(BaseModel):
    max_turns: Optional[int] = Field(None, ge=1, description="Stop after this many turns; None plays until capture")
    monster_first: bool = Field(True, description="Monster moves before the rogue in each turn")


class Settings(BaseModel):
    search: SearchSettings = Field(default_factory=SearchSettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults.
        """
        try:
            with resources.files("rogue_pursuit.config").joinpath("defaults.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to model defaults.")
            default_data = cls().model_dump()

        user_data = {}
        if user_path is not None:
            user_path = Path(user_path)
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls.from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
