"""
Application-wide constants and configuration keys.

This module centralizes all magic strings and numbers used throughout the application
to improve maintainability and reduce duplication.
"""


class ServerConfig:
    """Server configuration constants"""

    HOST = "127.0.0.1"
    PORT = 8000
    API_PREFIX = "/api"

    @classmethod
    def url(cls) -> str:
        """Get the full server URL"""
        return f"http://{cls.HOST}:{cls.PORT}"


class EnvKeys:
    """Environment variables read by config.settings"""

    DB_URL = "RECIPES_DB_URL"
    DB_ECHO = "RECIPES_DB_ECHO"
    LOG_LEVEL = "RECIPES_LOG_LEVEL"
    LOG_DIR = "RECIPES_LOG_DIR"


class DatabaseDefaults:
    """Default values for database configuration"""

    DIR_NAME = ".recipe_manager"
    FILE_NAME = "recipes.db"
    BUSY_TIMEOUT_MS = 5000
    IN_MEMORY_NAME = "recipes"


class LoggingDefaults:
    """Default values for logging configuration"""

    LEVEL = "INFO"
    FILE_NAME = "backend.log"
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5


class RecipeLimits:
    """Field limits for recipe payloads"""

    LABEL_MAX_LENGTH = 256
    DEFAULT_PAGE_SIZE = 50
    MAX_PAGE_SIZE = 1000


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
