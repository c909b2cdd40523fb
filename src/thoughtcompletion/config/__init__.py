"""Settings loading, validation, and management for ThoughtCompletion.

Main components:
- SettingsLoader: Locate, merge and validate settings files
- load_settings: One-call helper for CLI commands
- Environment variable substitution (${VAR_NAME} pattern)
- THOUGHTCOMPLETION_* environment overrides
"""

from thoughtcompletion.config.env_loader import (
    get_env_var,
    load_env_file,
    substitute_env_vars,
)
from thoughtcompletion.config.loader import SettingsLoader, load_settings

__all__ = [
    "SettingsLoader",
    "load_settings",
    "substitute_env_vars",
    "get_env_var",
    "load_env_file",
]
