import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from issueforge.errors import ConfigurationError

DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:8501")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API service."""

    database_url: str
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    echo_sql: bool = False


def load_settings(env_file: bool = True) -> Settings:
    """
    Build Settings from environment variables.

    Reads configuration from environment variables (and a .env file if present):
    - DATABASE_URL: SQLAlchemy async connection string (required)
    - CORS_ORIGINS: comma separated list of allowed origins
    - SQL_ECHO: "1"/"true" to log emitted SQL

    Raises:
        ConfigurationError: If DATABASE_URL is not set
    """
    if env_file:
        load_dotenv()

    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise ConfigurationError(
            "DATABASE_URL is not defined. "
            "Create a .env file with DATABASE_URL=your_connection_string"
        )

    origins = os.getenv("CORS_ORIGINS")
    if origins:
        cors_origins = tuple(o.strip() for o in origins.split(",") if o.strip())
    else:
        cors_origins = DEFAULT_CORS_ORIGINS

    echo_sql = os.getenv("SQL_ECHO", "").lower().strip() in {"1", "true", "yes"}

    return Settings(database_url=database_url, cors_origins=cors_origins, echo_sql=echo_sql)
