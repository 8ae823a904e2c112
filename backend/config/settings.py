"""
Runtime Configuration

Reads the backend configuration from environment variables, falling back to
the defaults in constants.py.

Recognised variables:
- RECIPES_DB_URL: SQLAlchemy database URL
- RECIPES_DB_ECHO: echo SQL statements ('true', '1', 'yes')
- RECIPES_LOG_LEVEL: root log level name
- RECIPES_LOG_DIR: directory for the rotating log file
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path

from constants import EnvKeys, DatabaseDefaults, LoggingDefaults
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DATA_DIR = Path.home() / DatabaseDefaults.DIR_NAME


def _env_flag(key: str, default: str = 'false') -> bool:
    return os.environ.get(key, default).lower() in ('true', '1', 'yes')


def default_database_url() -> str:
    """File-backed SQLite database under the user's home directory."""
    return f"sqlite:///{DATA_DIR / DatabaseDefaults.FILE_NAME}"


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_echo: bool
    log_level: str
    log_dir: Path

    @property
    def log_file(self) -> Path:
        return self.log_dir / LoggingDefaults.FILE_NAME


def load_settings() -> Settings:
    """
    Build Settings from the current environment.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If RECIPES_LOG_LEVEL is not a known level name
    """
    log_level = os.environ.get(EnvKeys.LOG_LEVEL, LoggingDefaults.LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(
            f"Unknown log level: {log_level}",
            missing_keys=[EnvKeys.LOG_LEVEL]
        )

    database_url = os.environ.get(EnvKeys.DB_URL) or default_database_url()
    log_dir = Path(os.environ.get(EnvKeys.LOG_DIR) or DATA_DIR / "logs")

    settings = Settings(
        database_url=database_url,
        database_echo=_env_flag(EnvKeys.DB_ECHO),
        log_level=log_level,
        log_dir=log_dir,
    )
    logger.debug(f"Loaded settings: database_url={settings.database_url}")
    return settings
