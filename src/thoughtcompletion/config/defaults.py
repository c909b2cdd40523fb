"""Default configuration values for ThoughtCompletion.

Provider connection defaults live on the settings models themselves; this
module holds the request-level defaults and the settings file locations.
"""

# Request defaults applied by providers when options leave them unset
DEFAULT_REQUEST_MAX_TOKENS = 500
DEFAULT_REQUEST_TEMPERATURE = 0.7

# Temperature used for generated continuations
COMPLETION_TEMPERATURE = 0.7

# Directory and file names searched by the settings loader
USER_CONFIG_DIR = ".thoughtcompletion"
USER_CONFIG_FILES = ("config.yml", "config.yaml")
PROJECT_CONFIG_FILES = (".thoughtcompletion.yml", ".thoughtcompletion.yaml")

# Prefix for environment variable overrides (THOUGHTCOMPLETION_PROVIDER, ...)
ENV_PREFIX = "THOUGHTCOMPLETION_"
