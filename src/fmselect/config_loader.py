"""Persist and load selector configuration."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from fmselect.errors import ErrorBuilder, ErrorCode


logger = logging.getLogger(__name__)

DEFAULT_TEAM_SIZE = 11

_TEAM_SIZE_ENV = "FMSELECT_TEAM_SIZE"
_ROLE_FILE_ENV = "FMSELECT_ROLE_FILE"
_PLAYER_FILE_ENV = "FMSELECT_PLAYER_FILE"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


class SelectorConfig(BaseModel):
    role_file: Optional[Path] = None
    player_file: Optional[Path] = None
    team_size: int = Field(default=DEFAULT_TEAM_SIZE, ge=0)
    output_format: Literal["text", "csv"] = "text"

    @property
    def expected_role_count(self) -> Optional[int]:
        """Role count a role file must match, or ``None`` when unchecked."""

        return self.team_size or None

    @classmethod
    def load(cls, path: Path) -> "SelectorConfig":
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ErrorBuilder(ErrorCode.E100).with_context(f"'{path}'").build() from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ErrorBuilder(ErrorCode.E104).with_context(f"'{path}': {exc}").build() from exc

        try:
            data = json.loads(text)
            return cls.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as exc:
            raise ErrorBuilder(ErrorCode.E101).with_context(f"'{path}': {exc}").build() from exc

    def save(self, path: Path) -> None:
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")

    def with_env_overrides(self) -> "SelectorConfig":
        update: dict[str, object] = {
            "team_size": _env_int(_TEAM_SIZE_ENV, self.team_size, min_value=0),
        }
        role_file = os.getenv(_ROLE_FILE_ENV)
        if role_file:
            update["role_file"] = Path(role_file)
        player_file = os.getenv(_PLAYER_FILE_ENV)
        if player_file:
            update["player_file"] = Path(player_file)
        return self.model_copy(update=update)


def load_config(path: Optional[Path] = None) -> SelectorConfig:
    """Load a config file (defaults when ``path`` is None) and apply environment overrides."""

    config = SelectorConfig.load(path) if path is not None else SelectorConfig()
    return config.with_env_overrides()


__all__ = ["DEFAULT_TEAM_SIZE", "SelectorConfig", "load_config"]
