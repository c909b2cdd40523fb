"""Settings loader for ThoughtCompletion.

This module provides the SettingsLoader class for locating, parsing, merging
and validating settings from YAML files, environment variables and explicit
overrides.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from thoughtcompletion.config.defaults import (
    ENV_PREFIX,
    PROJECT_CONFIG_FILES,
    USER_CONFIG_DIR,
    USER_CONFIG_FILES,
)
from thoughtcompletion.config.env_loader import load_env_file, substitute_env_vars
from thoughtcompletion.config.validator import flatten_pydantic_errors
from thoughtcompletion.lib.errors import ConfigError, FileNotFoundError
from thoughtcompletion.lib.logging_config import get_logger
from thoughtcompletion.models.config import Settings

logger = get_logger(__name__)

# Environment variable suffix -> dotted settings path
ENV_VAR_MAP: dict[str, tuple[str, ...]] = {
    "PROVIDER": ("provider",),
    "OPENAI_BASE_URL": ("openai", "base_url"),
    "OPENAI_API_KEY": ("openai", "api_key"),
    "OPENAI_MODEL": ("openai", "model"),
    "OLLAMA_BASE_URL": ("ollama", "base_url"),
    "OLLAMA_MODEL": ("ollama", "model"),
    "MAX_TOKENS": ("max_tokens",),
    "TRIGGER_MODE": ("trigger_mode",),
    "ACTIVE_DOCUMENT_TYPE": ("active_document_type",),
    "REQUEST_TIMEOUT": ("request_timeout",),
}


def _parse_env_value(suffix: str, value: str) -> Any:
    """Parse environment variable value to the type of its settings field.

    Args:
        suffix: Variable name without the prefix
        value: String value from the environment

    Returns:
        Parsed value (int, float or str)

    Raises:
        ValueError: If the value cannot be parsed
    """
    if suffix == "MAX_TOKENS":
        return int(value)
    if suffix == "REQUEST_TIMEOUT":
        return float(value)
    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override dict into base dict (in-place).

    For nested dicts, merging is recursive.
    For other types, override completely replaces base.

    Args:
        base: Base dictionary to merge into (modified in-place)
        override: Dictionary with values to override
    """
    for key, override_value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(override_value, dict)
        ):
            _deep_merge(base[key], override_value)
        else:
            base[key] = override_value


def _set_path(target: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested value, creating intermediate dicts as needed."""
    node = target
    for key in path[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[path[-1]] = value


def _read_yaml_with_env_substitution(path: Path) -> dict[str, Any] | None:
    """Read a YAML file with environment variable substitution.

    Args:
        path: Path to YAML file

    Returns:
        Parsed dictionary or None if empty

    Raises:
        OSError: If file cannot be read
        yaml.YAMLError: If YAML parsing fails
        ConfigError: If env var substitution fails or the top level is not a
            mapping
    """
    raw_text = path.read_text(encoding="utf-8")
    substituted = substitute_env_vars(raw_text)
    content = yaml.safe_load(substituted)
    if not content:
        return None
    if not isinstance(content, dict):
        raise ConfigError("settings", f"Settings file {path} must contain a mapping")
    return content


class SettingsLoader:
    """Loads and validates ThoughtCompletion settings.

    This class handles:
    - Loading user settings from ~/.thoughtcompletion/config.yml|config.yaml
    - Loading project settings from .thoughtcompletion.yml|.yaml
    - Deep-merging project over user settings
    - Applying THOUGHTCOMPLETION_* environment overrides
    - Converting validation errors into human-readable messages

    Precedence (highest to lowest):
    1. Explicit overrides (CLI flags)
    2. Environment variables
    3. Explicit settings file, or project settings
    4. User settings
    5. Model defaults
    """

    def __init__(self) -> None:
        """Initialize the SettingsLoader with empty caches."""
        self._user_config_loaded = False
        self._user_config: dict[str, Any] | None = None

    def load_user_config(self) -> dict[str, Any] | None:
        """Load user-level settings from the home directory.

        Results are cached after first load.

        Returns:
            Raw settings dictionary, or None if no file exists

        Raises:
            ConfigError: If YAML parsing fails
        """
        if self._user_config_loaded:
            return self._user_config

        user_dir = Path.home() / USER_CONFIG_DIR
        result = self._load_first_existing(
            [user_dir / name for name in USER_CONFIG_FILES], "user settings"
        )
        self._user_config = result
        self._user_config_loaded = True
        return result

    def load_project_config(self, project_dir: str | Path) -> dict[str, Any] | None:
        """Load project-level settings from a directory.

        Args:
            project_dir: Directory searched for .thoughtcompletion.yml|.yaml

        Returns:
            Raw settings dictionary, or None if no file exists

        Raises:
            ConfigError: If YAML parsing fails
        """
        project_path = Path(project_dir)
        return self._load_first_existing(
            [project_path / name for name in PROJECT_CONFIG_FILES],
            "project settings",
        )

    def load_file(self, file_path: str | Path) -> dict[str, Any]:
        """Load an explicitly named settings file.

        Args:
            file_path: Path to a YAML settings file

        Returns:
            Raw settings dictionary (empty if the file is empty)

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigError: If YAML parsing fails
        """
        path = Path(file_path)
        try:
            return _read_yaml_with_env_substitution(path) or {}
        except OSError as e:
            raise FileNotFoundError(
                str(file_path),
                f"Settings file not found at {file_path}. "
                f"Please ensure the file exists at this path.",
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(
                "yaml_parse",
                f"Failed to parse settings file {file_path}: {str(e)}",
            ) from e

    def _load_first_existing(
        self, candidates: list[Path], config_name: str
    ) -> dict[str, Any] | None:
        """Load the first existing file among candidates.

        Args:
            candidates: Paths in order of preference
            config_name: Human-readable name for messages

        Returns:
            Raw settings dictionary, or None if none exists

        Raises:
            ConfigError: If YAML parsing fails
        """
        existing = [path for path in candidates if path.exists()]
        if not existing:
            return None

        config_path = existing[0]
        if len(existing) > 1:
            logger.info(
                f"Multiple {config_name} files found. Using {config_path} "
                f"(prefer .yml extension)."
            )

        try:
            return _read_yaml_with_env_substitution(config_path)
        except yaml.YAMLError as e:
            raise ConfigError(
                "yaml_parse",
                f"Failed to parse {config_name} at {config_path}: {str(e)}",
            ) from e

    def env_overrides(
        self, env_vars: os._Environ[str] | dict[str, str] | None = None
    ) -> dict[str, Any]:
        """Collect settings overrides from THOUGHTCOMPLETION_* variables.

        Values that cannot be parsed are ignored with a warning.

        Args:
            env_vars: Environment mapping; defaults to ``os.environ``

        Returns:
            Nested overrides dictionary
        """
        env = os.environ if env_vars is None else env_vars
        overrides: dict[str, Any] = {}
        for suffix, path in ENV_VAR_MAP.items():
            name = f"{ENV_PREFIX}{suffix}"
            if name not in env:
                continue
            try:
                value = _parse_env_value(suffix, env[name])
            except ValueError:
                logger.warning(f"Ignoring invalid value for {name}: {env[name]!r}")
                continue
            _set_path(overrides, path, value)
        return overrides

    def load_settings(
        self,
        config_path: str | Path | None = None,
        project_dir: str | Path | None = None,
        overrides: dict[str, Any] | None = None,
        env_vars: dict[str, str] | None = None,
    ) -> Settings:
        """Load, merge and validate settings.

        Args:
            config_path: Explicit settings file; replaces project discovery
            project_dir: Directory for project settings; defaults to the
                working directory
            overrides: Highest-precedence values (e.g. from CLI flags)
            env_vars: Environment mapping; defaults to ``os.environ``

        Returns:
            Validated Settings instance

        Raises:
            FileNotFoundError: If ``config_path`` does not exist
            ConfigError: If parsing or validation fails
        """
        merged: dict[str, Any] = {}

        user_config = self.load_user_config()
        if user_config:
            _deep_merge(merged, user_config)

        if config_path is not None:
            file_config: dict[str, Any] | None = self.load_file(config_path)
        else:
            file_config = self.load_project_config(project_dir or Path.cwd())
        if file_config:
            _deep_merge(merged, file_config)

        _deep_merge(merged, self.env_overrides(env_vars))
        if overrides:
            _deep_merge(merged, overrides)

        try:
            settings = Settings(**merged)
        except PydanticValidationError as e:
            error_text = "\n".join(flatten_pydantic_errors(e, merged))
            raise ConfigError(
                "settings_validation", f"Invalid settings:\n{error_text}"
            ) from e

        logger.debug(
            f"Settings loaded: provider={settings.provider.value}, "
            f"active_document_type={settings.active_document_type}, "
            f"custom_types={len(settings.document_types)}"
        )
        return settings


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    env_file: str | Path | None = None,
) -> Settings:
    """One-call helper for CLI commands.

    Loads the ``.env`` file (if present) first so that ``${VAR}`` references
    and THOUGHTCOMPLETION_* overrides can come from it.

    Args:
        config_path: Optional explicit settings file
        overrides: Optional highest-precedence values
        env_file: Optional path to a .env file

    Returns:
        Validated Settings instance

    Raises:
        FileNotFoundError: If ``config_path`` does not exist
        ConfigError: If parsing or validation fails
    """
    load_env_file(env_file)
    return SettingsLoader().load_settings(config_path=config_path, overrides=overrides)
