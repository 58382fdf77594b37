"""
Configuration subsystem for FocusQuest.

- **config.py**: static process settings from environment variables (.env support)
- **manager.py**: `ConfigManager`, YAML balance defaults with overrides
- **errors.py**: configuration exception hierarchy

`ConfigManager` is imported from `focusquest.core.config.manager` directly;
it depends on the logging subsystem, which itself reads `Config`.
"""

from focusquest.core.config.config import Config, Environment
from focusquest.core.config.errors import ConfigError, ConfigLoadError, ConfigValueError

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValueError",
    "Environment",
]
