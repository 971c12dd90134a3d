"""Load wheel config from YAML or JSON."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from .schema import WheelConfig

CONFIG_ENV_VAR = "PRIZEWHEEL_CONFIG"


class ConfigLoadError(ValueError):
    """Raised when a config file cannot be read or parsed."""


def resolve_config_path(path: str | Path | None = None) -> Path | None:
    """Return the explicit path, else the one named by PRIZEWHEEL_CONFIG, else None."""
    if path is not None:
        return Path(path)
    raw = os.getenv(CONFIG_ENV_VAR, "").strip()
    return Path(raw) if raw else None


def load_config(path: str | Path | None = None) -> WheelConfig:
    """Load a wheel config and validate it with Pydantic.

    Without any path the stock wheel is returned. Keys missing from the file
    fall back to the stock wheel as well. Reward tokens written as numbers
    (``1000`` rather than ``"1000"``) are read as strings, and a pool may be
    given as a ``{reward: weight}`` mapping instead of a list of entries.
    """
    config_path = resolve_config_path(path)
    if config_path is None:
        return WheelConfig()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    reader = _READERS.get(config_path.suffix.lower())
    if reader is None:
        raise ConfigLoadError(
            f"Unsupported config format '{config_path.suffix.lower()}'. Use .yaml/.yml or .json."
        )

    try:
        with config_path.open("r", encoding="utf-8") as file:
            data = reader(file) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigLoadError(f"Could not parse {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigLoadError("Config root must be a JSON/YAML object.")

    return WheelConfig.model_validate(_normalize_rewards(data))


def _normalize_rewards(data: dict[str, Any]) -> dict[str, Any]:
    normalized = dict(data)
    if isinstance(data.get("sectors"), list):
        normalized["sectors"] = [_token(reward) for reward in data["sectors"]]
    if "bonus_trigger" in data:
        normalized["bonus_trigger"] = _token(data["bonus_trigger"])
    if isinstance(data.get("pools"), Mapping):
        normalized["pools"] = {str(name): _pool_entries(entries) for name, entries in data["pools"].items()}
    return normalized


def _pool_entries(entries: Any) -> Any:
    if isinstance(entries, Mapping):
        return [{"reward": _token(reward), "weight": weight} for reward, weight in entries.items()]
    if isinstance(entries, list):
        return [
            {**entry, "reward": _token(entry["reward"])} if isinstance(entry, Mapping) and "reward" in entry else entry
            for entry in entries
        ]
    return entries


def _token(value: Any) -> Any:
    # bool is an int subclass; leave it for the schema to reject.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


_READERS: dict[str, Callable[[Any], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}
