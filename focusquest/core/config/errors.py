"""
Configuration error hierarchy for FocusQuest.

Purpose
-------
Exceptions raised by the configuration layer so callers can tell a broken
balance file apart from a bad programmatic override.

Exception Hierarchy
-------------------
ConfigError (base)
├── ConfigLoadError (YAML file unreadable or malformed, strict mode only)
└── ConfigValueError (override has the wrong type for its key)
"""


class ConfigError(Exception):
    """
    Base exception for all configuration-related errors.

    Example
    -------
    >>> try:
    ...     manager.set("progression.xp.per_minute", "fast")
    ... except ConfigError as e:
    ...     logger.error(f"Config operation failed: {e}")
    """

    pass


class ConfigLoadError(ConfigError):
    """
    Raised when a balance YAML file cannot be loaded in strict mode.

    Non-strict loading logs the failure and keeps the defaults it already has.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config file {path}: {reason}")


class ConfigValueError(ConfigError):
    """
    Raised when `ConfigManager.set` receives a value whose type does not
    match the value already stored under that key.
    """

    def __init__(self, key: str, expected: str, actual: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid value for '{key}': expected {expected}, got {actual}"
        )
