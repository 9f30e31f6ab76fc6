"""engine.config

Engine configuration (balance overrides + boundary settings).

Supports YAML and JSON files:

    history_limit: 4
    balance:
      hire_cost: 7500
      horizon_years: 8
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from core.balance import DEFAULT_BALANCE, BalanceSpec, balance_from_mapping, balance_to_dict
from core.errors import ConfigError

_KNOWN_KEYS = {"balance", "history_limit"}


@dataclass(frozen=True)
class EngineConfig:
    balance: BalanceSpec = field(default_factory=lambda: DEFAULT_BALANCE)
    # Snapshots returned alongside the state after each call.
    history_limit: int = 4

    def to_dict(self) -> Dict[str, Any]:
        return {"balance": balance_to_dict(self.balance), "history_limit": int(self.history_limit)}


def _load_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text()
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    raise ConfigError(f"Unsupported config extension: {path.suffix}")


def config_from_mapping(raw: Dict[str, Any]) -> EngineConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    unknown = sorted(set(raw.keys()) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {unknown}")

    balance_raw = raw.get("balance") or {}
    if not isinstance(balance_raw, dict):
        raise ConfigError("'balance' must be a mapping")
    balance = balance_from_mapping(balance_raw)

    try:
        history_limit = int(raw.get("history_limit", 4))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"history_limit must be an integer: {exc}") from exc
    if history_limit < 1:
        raise ConfigError("history_limit must be >= 1")

    return EngineConfig(balance=balance, history_limit=history_limit)


def load_engine_config(path: str | Path) -> EngineConfig:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    return config_from_mapping(_load_raw(path))


__all__ = ["ConfigError", "EngineConfig", "config_from_mapping", "load_engine_config"]
