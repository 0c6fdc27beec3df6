"""Environment-driven configuration for TaskFlow.

Settings are read once at import from the process environment (and a local
`.env` file when present). Modules import the constants they need from here.
"""

import logging
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

# Runtime environment: development | production | test
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskflow.db")

# Connection pool (ignored for SQLite)
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "5"))
DB_POOL_TIMEOUT_SEC = int(os.getenv("DB_POOL_TIMEOUT_SEC", "30"))

# JWT
DEFAULT_JWT_SECRET = "change-me-in-production"
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", DEFAULT_JWT_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "168"))  # 7 days
JWT_ISSUER = os.getenv("JWT_ISSUER", "taskflow-api")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "taskflow-users")

# Password hashing (PBKDF2-HMAC-SHA256)
PASSWORD_HASH_ITERATIONS = int(os.getenv("PASSWORD_HASH_ITERATIONS", "260000"))

# Text-completion service
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
OPENAI_TIMEOUT_SEC = float(os.getenv("OPENAI_TIMEOUT_SEC", "15"))

# CORS
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]


class ConfigError(RuntimeError):
    """Raised when the runtime configuration is unusable."""


def is_production() -> bool:
    return ENVIRONMENT == "production"


def config_problems(
    environment: str = None,
    jwt_secret: str = None,
    openai_api_key: str = None,
    db_pool_size: int = None,
    db_max_overflow: int = None,
    db_pool_timeout_sec: int = None,
) -> List[str]:
    """Collect configuration problems without raising.

    Arguments default to the values loaded from the environment; they are
    accepted explicitly so the checks can be unit tested deterministically.
    """
    environment = environment if environment is not None else ENVIRONMENT
    jwt_secret = jwt_secret if jwt_secret is not None else JWT_SECRET_KEY
    openai_api_key = openai_api_key if openai_api_key is not None else OPENAI_API_KEY
    db_pool_size = db_pool_size if db_pool_size is not None else DB_POOL_SIZE
    db_max_overflow = db_max_overflow if db_max_overflow is not None else DB_MAX_OVERFLOW
    db_pool_timeout_sec = db_pool_timeout_sec if db_pool_timeout_sec is not None else DB_POOL_TIMEOUT_SEC

    problems: List[str] = []
    if environment == "production":
        if not jwt_secret or jwt_secret == DEFAULT_JWT_SECRET:
            problems.append("JWT_SECRET_KEY is required and must be changed in production")
        if not openai_api_key:
            problems.append("OPENAI_API_KEY is required in production")
    if PASSWORD_HASH_ITERATIONS < 1:
        problems.append("PASSWORD_HASH_ITERATIONS must be positive")
    if OPENAI_TIMEOUT_SEC <= 0:
        problems.append("OPENAI_TIMEOUT_SEC must be positive")
    if db_pool_size < 1:
        problems.append("DB_POOL_SIZE must be positive")
    if db_max_overflow < 0:
        problems.append("DB_MAX_OVERFLOW must not be negative")
    if db_pool_timeout_sec < 1:
        problems.append("DB_POOL_TIMEOUT_SEC must be positive")
    return problems


def validate_config(**overrides) -> None:
    """Raise ConfigError if any configuration problem is found."""
    problems = config_problems(**overrides)
    if problems:
        raise ConfigError(f"Configuration validation failed: {', '.join(problems)}")


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
