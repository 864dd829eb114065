"""Configuration module for package settings and environment variables.

Settings are read from the environment (and a local ``.env`` file, if
present) when the module is imported.
"""

import os

from dotenv import load_dotenv

from object_migrations.exceptions import ConfigurationError

load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Logging configuration
LOG_LEVEL = os.getenv("OBJECT_MIGRATIONS_LOG_LEVEL", "WARNING").upper()
LOG_DIR = os.getenv("OBJECT_MIGRATIONS_LOG_DIR") or None
LOG_FILE = os.getenv("OBJECT_MIGRATIONS_LOG_FILE") or None


def validate_config():
    """
    Validate configuration parameters.

    :raises ConfigurationError: If configuration is invalid
    """
    if LOG_LEVEL not in VALID_LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid OBJECT_MIGRATIONS_LOG_LEVEL: {LOG_LEVEL!r} "
            f"(expected one of {', '.join(VALID_LOG_LEVELS)})"
        )

    if LOG_DIR:
        try:
            os.makedirs(LOG_DIR, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Unable to create log directory at {LOG_DIR}: {e}"
            ) from e


# Validate configuration when module is imported
validate_config()
