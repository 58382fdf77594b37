"""
ConfigManager: hierarchical balance configuration access for FocusQuest.

Purpose
-------
- Provide dot-notation access to tunable balance values (XP rates, level
  curve, battle rewards, raid limits).
- Back configuration with YAML defaults shipped inside the package, with an
  optional directory override and programmatic overrides on top.

Responsibilities
----------------
- Load and deep-merge every YAML file in the balance directory.
- Serve reads by dot path with a caller-supplied fallback.
- Accept type-checked writes and nested override mappings from the host
  (for example a settings refresh pulled from remote storage).

Key Design Decisions
--------------------
- Instance-based: each engine receives a manager at construction. Tests
  build their own instance instead of patching a process-wide cache.
- YAML is the single source for defaults; overrides only replace leaves.
- Loading is forgiving by default: an unreadable file is logged and skipped.
  `strict=True` raises `ConfigLoadError` instead.

Dependencies
------------
- PyYAML (`yaml.safe_load`)
- `focusquest.core.config.config.Config` for the balance directory
- `focusquest.core.logging.logger.get_logger`
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional

import yaml

from focusquest.core.config.config import Config
from focusquest.core.config.errors import ConfigLoadError, ConfigValueError
from focusquest.core.logging.logger import get_logger

logger = get_logger(__name__)

_MISSING = object()


class ConfigManager:
    """
    Balance configuration with YAML defaults and in-memory overrides.

    Examples
    --------
    >>> config = ConfigManager()
    >>> config.get("progression.xp.per_minute", 1)
    1
    >>> config.set("progression.xp.per_minute", 2)
    >>> config.get("progression.xp.per_minute")
    2
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        strict: bool = False,
        load_defaults: bool = True,
    ) -> None:
        self._config_dir = Path(config_dir) if config_dir else Config.BALANCE_DIR
        self._strict = strict
        self._defaults: Dict[str, Any] = {}
        self._values: Dict[str, Any] = {}

        if load_defaults:
            self._load_yaml_configs()

        self._values = copy.deepcopy(self._defaults)

        if overrides:
            self.apply_overrides(overrides)

        logger.info(
            "ConfigManager initialized",
            extra={
                "config_dir": str(self._config_dir),
                "top_level_keys": self.get_all_keys(),
                "strict": strict,
            },
        )

    # =========================================================================
    # YAML LOADING & DEFAULTS
    # =========================================================================

    @classmethod
    def from_yaml(cls, path: Path, strict: bool = True) -> "ConfigManager":
        """Build a manager from a single YAML file on top of the bundled defaults."""
        manager = cls(strict=strict)
        manager.apply_overrides(manager._read_yaml(Path(path)))
        return manager

    @staticmethod
    def _deep_merge_dict(
        target: MutableMapping[str, Any],
        source: Mapping[str, Any],
    ) -> None:
        """Recursively merge `source` into `target` (in-place)."""
        for key, value in source.items():
            if isinstance(value, Mapping) and isinstance(target.get(key), dict):
                ConfigManager._deep_merge_dict(target[key], value)
            elif isinstance(value, Mapping):
                target[key] = copy.deepcopy(dict(value))
            else:
                target[key] = value

    def _read_yaml(self, yaml_file: Path) -> Dict[str, Any]:
        try:
            with yaml_file.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as exc:
            if self._strict:
                raise ConfigLoadError(str(yaml_file), str(exc)) from exc
            logger.warning(
                "Failed to load YAML config",
                extra={
                    "file": str(yaml_file),
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                },
            )
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            if self._strict:
                raise ConfigLoadError(
                    str(yaml_file), f"root must be a mapping, got {type(data).__name__}"
                )
            logger.warning(
                "Ignoring non-dict YAML root object",
                extra={"file": str(yaml_file), "root_type": type(data).__name__},
            )
            return {}
        return data

    def _load_yaml_configs(self) -> None:
        config_dir = self._config_dir
        if not config_dir.exists():
            if self._strict:
                raise ConfigLoadError(str(config_dir), "directory does not exist")
            logger.warning(
                "Config directory not found; using built-in defaults only",
                extra={"config_dir": str(config_dir)},
            )
            return

        yaml_files = sorted(config_dir.rglob("*.yaml")) + sorted(config_dir.rglob("*.yml"))
        loaded_count = 0

        for yaml_file in yaml_files:
            data = self._read_yaml(yaml_file)
            if data:
                self._deep_merge_dict(self._defaults, data)
                loaded_count += 1
                logger.debug(
                    "Loaded YAML config",
                    extra={"file": str(yaml_file.relative_to(config_dir))},
                )

        logger.debug(
            "YAML configs loaded",
            extra={"yaml_file_count": loaded_count, "total_keys": len(self._defaults)},
        )

    # =========================================================================
    # READ API
    # =========================================================================

    @staticmethod
    def _traverse(root: Mapping[str, Any], key: str) -> Any:
        value: Any = root
        for part in key.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return _MISSING
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Retrieve a configuration value by dot-notation path.

        Falls back to the YAML default, then to `default`.
        """
        value = self._traverse(self._values, key)
        if value is _MISSING or value is None:
            fallback = self._traverse(self._defaults, key)
            if fallback is _MISSING or fallback is None:
                return default
            return fallback
        return value

    def get_default(self, key: str, default: Any = None) -> Any:
        value = self._traverse(self._defaults, key)
        return default if value is _MISSING else value

    def get_all_keys(self) -> List[str]:
        """Return the top-level configuration keys."""
        return list(self._values.keys())

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    # =========================================================================
    # WRITE API
    # =========================================================================

    def set(self, key: str, value: Any) -> None:
        """
        Set a leaf value by dot path.

        When the key already holds a value, the new value must have a
        compatible type (ints are accepted where floats are stored; bools
        are not accepted as numbers).

        Raises
        ------
        ConfigValueError
            If the type does not match the existing value.
        """
        current = self._traverse(self._values, key)
        if current is not _MISSING and current is not None:
            self._check_type(key, current, value)

        parts = key.split(".")
        node: Dict[str, Any] = self._values
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

        logger.debug(
            "Config value set",
            extra={"config_key": key, "old_value": None if current is _MISSING else current, "new_value": value},
        )

    @staticmethod
    def _check_type(key: str, current: Any, value: Any) -> None:
        if isinstance(current, bool) or isinstance(value, bool):
            ok = isinstance(current, bool) and isinstance(value, bool)
        elif isinstance(current, float):
            ok = isinstance(value, (int, float))
        elif isinstance(current, (dict, list)):
            ok = isinstance(value, type(current))
        else:
            ok = isinstance(value, type(current))

        if not ok:
            raise ConfigValueError(key, type(current).__name__, type(value).__name__)

    def apply_overrides(self, overrides: Mapping[str, Any]) -> None:
        """Deep-merge a nested override mapping on top of current values."""
        self._deep_merge_dict(self._values, overrides)
        logger.info(
            "Config overrides applied",
            extra={"override_keys": list(overrides.keys())},
        )

    def reset(self) -> None:
        """Drop all overrides and return to the YAML defaults."""
        self._values = copy.deepcopy(self._defaults)
