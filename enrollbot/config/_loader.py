"""Config file discovery and a Pydantic settings source for YAML/TOML files."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

CONFIG_ENV_VAR = "ENROLLBOT_CONFIG"
CONFIG_NAMES = ("enrollbot.yaml", "enrollbot.yml", "enrollbot.toml")


def find_config_file() -> Path | None:
    """Find the config file using search order:
    1. ENROLLBOT_CONFIG env var (explicit path; no fallback if it is missing)
    2. enrollbot.yaml / enrollbot.yml / enrollbot.toml in the CWD
    3. the same names under ~/.enrollbot/
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        p = Path(explicit)
        return p if p.is_file() else None

    for directory in (Path.cwd(), Path.home() / ".enrollbot"):
        for name in CONFIG_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML or TOML config file into a dict (TOML by suffix)."""
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)

    with open(path) as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


class ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """Load top-level settings sections from the discovered config file."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        config_path = find_config_file()
        self._file_data: dict[str, Any] = read_config_file(config_path) if config_path else {}

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        val = self._file_data.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return {name: value for name, value in self._file_data.items() if name in self.settings_cls.model_fields}
