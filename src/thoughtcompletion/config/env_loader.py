"""Environment variable handling for ThoughtCompletion settings.

Settings files may reference environment variables with ``${VAR_NAME}`` or
``${VAR_NAME:-default}``; references are substituted in the raw YAML text
before parsing so that secrets such as API keys never have to live in the
file itself.
"""

import os
import re
from pathlib import Path

from dotenv import load_dotenv

from thoughtcompletion.lib.errors import ConfigError
from thoughtcompletion.lib.logging_config import get_logger

logger = get_logger(__name__)

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def get_env_var(name: str, default: str | None = None) -> str | None:
    """Read an environment variable.

    Args:
        name: Variable name
        default: Value returned when the variable is unset

    Returns:
        The variable's value, or ``default``
    """
    return os.environ.get(name, default)


def substitute_env_vars(text: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` references in text.

    Args:
        text: Raw text (typically YAML) containing references

    Returns:
        Text with every reference replaced by its value

    Raises:
        ConfigError: If a referenced variable is unset and has no default

    Example:
        >>> os.environ["OPENAI_API_KEY"] = "sk-test"
        >>> substitute_env_vars("api_key: ${OPENAI_API_KEY}")
        'api_key: sk-test'
        >>> substitute_env_vars("model: ${TC_MODEL:-llama3.2}")
        'model: llama3.2'
    """

    def _replace(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        value = get_env_var(name)
        if value is not None:
            return value
        if default is not None:
            return default
        raise ConfigError(
            name,
            f"Environment variable '{name}' is referenced in settings but not set. "
            f"Set it or provide a default with ${{{name}:-value}}.",
        )

    return ENV_VAR_PATTERN.sub(_replace, text)


def load_env_file(path: str | Path | None = None, override: bool = False) -> bool:
    """Load variables from a ``.env`` file into the process environment.

    Args:
        path: Path to the file. Defaults to ``.env`` in the working directory.
        override: Whether file values replace variables already set

    Returns:
        True if a file was found and loaded, False otherwise
    """
    env_path = Path(path) if path is not None else Path.cwd() / ".env"
    if not env_path.is_file():
        return False

    logger.debug(f"Loading environment from {env_path}")
    return load_dotenv(env_path, override=override)
