"""Settings — load and validate taskresult.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from taskresult.adapters.oslookup import LOOKUP_MODES
from taskresult.io.fileops import read_text_safe

CONFIG_FILENAME = "taskresult.yaml"
OUTPUT_FORMATS = ("json", "toon")


class SettingsError(ValueError):
    """Raised when a settings file cannot be loaded or validated."""


class Settings(BaseModel):
    """Runtime options; CLI flags override values loaded from a file."""

    lookup: str = "auto"
    workers: int = Field(default=1, ge=1, le=64)
    events: bool = False
    format: str = "json"
    os_messages: dict[int, str] = Field(default_factory=dict)

    @field_validator("lookup")
    @classmethod
    def validate_lookup(cls, v: str) -> str:
        if v not in LOOKUP_MODES:
            raise ValueError(f"Unknown lookup mode: '{v}'. Supported: {', '.join(LOOKUP_MODES)}")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: '{v}'. Supported: {', '.join(OUTPUT_FORMATS)}")
        return v

    @field_validator("os_messages", mode="before")
    @classmethod
    def coerce_message_keys(cls, v: Any) -> Any:
        # YAML keys like 0x10E0 arrive as ints; quoted keys arrive as strings.
        if isinstance(v, dict):
            return {int(k, 0) if isinstance(k, str) else k: msg for k, msg in v.items()}
        return v

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        try:
            data = yaml.safe_load(read_text_safe(path)) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Cannot parse settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError("Settings YAML must be a mapping/object.")

        unknown_keys = sorted(set(data) - set(cls.model_fields))
        if unknown_keys:
            raise SettingsError(f"Unknown settings keys: {', '.join(unknown_keys)}")
        try:
            return cls(**data)
        except ValueError as e:
            raise SettingsError(f"Invalid settings in {path}: {e}") from e

    @classmethod
    def load_from_dir(cls, directory: str | Path) -> "Settings | None":
        """Try to load taskresult.yaml from a directory. Returns None if not found."""
        path = Path(directory) / CONFIG_FILENAME
        if path.exists():
            return cls.load(path)
        return None

    def merged(self, **overrides: Any) -> "Settings":
        """Validated copy with every non-None override applied."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return type(self)(**data)
