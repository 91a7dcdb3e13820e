# standalone_connect4/config.py
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
import os
import tomllib

from standalone_connect4.debug import debug
from standalone_connect4.errors import ConfigError

CONFIG_ENV = "C4_CONFIG_TOML"
DEPTH_ENV = "C4_SEARCH_DEPTH"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class SearchConfig:
    max_depth: int = 8
    time_budget_ms: Optional[int] = None  # None means depth-only
    table_capacity: int = 1_000_000  # entries, oldest evicted first
    persist_table: bool = False  # keep entries across searches of one session
    workers: int = 1  # >1 splits the root moves across threads

    def validate(self) -> None:
        for name in ("max_depth", "table_capacity", "workers"):
            if not _is_int(getattr(self, name)):
                raise ConfigError(f"search.{name} must be an integer, got {getattr(self, name)!r}")
        if self.max_depth < 1:
            raise ConfigError(f"search.max_depth must be >= 1, got {self.max_depth}")
        if self.time_budget_ms is not None and (
                not _is_int(self.time_budget_ms) or self.time_budget_ms <= 0):
            raise ConfigError(f"search.time_budget_ms must be positive, got {self.time_budget_ms}")
        if self.table_capacity < 1:
            raise ConfigError(f"search.table_capacity must be >= 1, got {self.table_capacity}")
        if self.workers < 1:
            raise ConfigError(f"search.workers must be >= 1, got {self.workers}")


@dataclass
class EvalWeights:
    # open three whose empty cell can be played right now
    playable_three: int = 60
    # open three whose empty cell still needs support below it
    three: int = 20
    two: int = 4
    # per token, scaled by closeness to the center column
    center: int = 3


@dataclass
class EngineConfig:
    search: SearchConfig = field(default_factory=SearchConfig)
    weights: EvalWeights = field(default_factory=EvalWeights)
    log_level: str = "WARNING"

    @staticmethod
    def load_from_toml(path: str) -> "EngineConfig":
        """
        Read ``[search]``, ``[weights]`` and top-level ``log_level``.

        A missing file yields the defaults. Unknown keys are logged and
        ignored; values of the wrong type raise ConfigError.
        """
        cfg = EngineConfig()
        if not os.path.exists(path):
            debug.debug(f"No config file at {path}, using defaults", "config")
            return cfg
        try:
            with open(path, "rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: {exc}") from exc

        _merge(cfg.search, raw.get("search", {}), "search")
        _merge(cfg.weights, raw.get("weights", {}), "weights")
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        for section in raw:
            if section not in ("search", "weights", "log_level"):
                debug.warning(f"Ignoring unknown config section '{section}'", "config")

        cfg.search.validate()
        return cfg


def _merge(target: Any, values: Dict[str, Any], section: str) -> None:
    known = {f.name: f for f in fields(target)}
    for key, value in values.items():
        if key not in known:
            debug.warning(f"Ignoring unknown key '{section}.{key}'", "config")
            continue
        default = getattr(target, key)
        # bool is an int subclass; TOML true/false must not pass for a number
        wrong_type = not isinstance(value, type(default)) or (
            isinstance(value, bool) and not isinstance(default, bool))
        if default is not None and wrong_type:
            raise ConfigError(f"{section}.{key}: expected {type(default).__name__}, "
                              f"got {type(value).__name__}")
        setattr(target, key, value)


def load_config(path: Optional[str] = None) -> EngineConfig:
    """
    Load the engine config from ``path`` or $C4_CONFIG_TOML.

    $C4_SEARCH_DEPTH overrides search.max_depth for quick experiments.
    """
    cfg = EngineConfig.load_from_toml(path or os.environ.get(CONFIG_ENV, "connect4.toml"))

    override_depth = os.environ.get(DEPTH_ENV)
    if override_depth:
        try:
            cfg.search.max_depth = int(override_depth)
        except ValueError:
            raise ConfigError(f"{DEPTH_ENV} must be an integer, got {override_depth!r}") from None
        cfg.search.validate()
        debug.info(f"Search depth overridden to {cfg.search.max_depth}", "config")

    return cfg
