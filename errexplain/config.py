"""Runtime configuration helpers for errexplain."""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONFIG_ENV_VAR = "ERREXPLAIN_CONFIG"


def default_config_files() -> List[Path]:
    return [
        Path.cwd() / ".errx.toml",
        Path.home() / ".config" / "errexplain" / "config.toml",
    ]


def _default_state_file() -> Path:
    return Path.home() / ".local" / "share" / "errexplain" / "state.json"


class ErrexplainSettings(BaseModel):
    model_config = ConfigDict(json_encoders={Path: str})
    state_file: Path = Field(default_factory=_default_state_file, description="Checklist/history/input state file")
    history_limit: int = Field(default=20, ge=1, description="Maximum number of history records kept")
    excerpt_length: int = Field(default=150, ge=1, description="Characters of the raw error kept in history")
    suggest_delay: float = Field(default=0.9, gt=0, description="Quiet period (seconds) before a live tip is shown")
    suggest_min_length: int = Field(default=10, ge=0, description="Input must be longer than this to get a live tip")
    use_color: bool = Field(default=False, description="Use Rich colours and styles")
    log_level: str = Field(default="WARNING", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def _normalize_paths(self) -> "ErrexplainSettings":
        self.state_file = self.state_file.expanduser()
        return self

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["state_file"] = str(self.state_file)
        return data


@dataclass
class ConfigLoadResult:
    settings: ErrexplainSettings
    source: Optional[Path]
    searched: List[Path]


def _load_toml(path: Path) -> Dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def load_config(explicit_path: Optional[Path] = None) -> ConfigLoadResult:
    """Load configuration from the first available location."""
    candidates: List[Path] = []
    if explicit_path is not None:
        candidates.append(explicit_path.expanduser())
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.extend(default_config_files())

    config_data: Dict[str, Any] = {}
    loaded_from: Optional[Path] = None
    for candidate in candidates:
        if candidate.is_file():
            config_data = _load_toml(candidate)
            loaded_from = candidate
            break

    return ConfigLoadResult(settings=ErrexplainSettings(**config_data), source=loaded_from, searched=candidates)
