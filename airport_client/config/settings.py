"""Client configuration read from the environment (and an optional .env file)."""
import os
from typing import Optional
from dotenv import load_dotenv


class Config:
    """Settings shared by every environment. Values are read once at import."""

    # .env values never override variables already set
    load_dotenv()

    # Airport API Configuration
    AIRPORT_API_BASE_URL: str = os.getenv("AIRPORT_API_BASE_URL", "http://localhost:8080")
    AIRPORT_API_TIMEOUT: int = int(os.getenv("AIRPORT_API_TIMEOUT", "30"))
    API_CLIENT_TYPE: str = os.getenv("API_CLIENT_TYPE", "http")

    # Session storage (Redis)
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    SESSION_KEY_PREFIX: str = os.getenv("SESSION_KEY_PREFIX", "texas_airport_prefs:")

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    TESTING: bool = False

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values."""
        required_vars = [
            ("AIRPORT_API_BASE_URL", cls.AIRPORT_API_BASE_URL),
            ("REDIS_URL", cls.REDIS_URL),
        ]

        missing = [name for name, value in required_vars if not value]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        if cls.AIRPORT_API_TIMEOUT <= 0:
            raise ValueError("AIRPORT_API_TIMEOUT must be a positive number of seconds")

        if cls.API_CLIENT_TYPE.lower() not in ("http", "mock"):
            raise ValueError(f"Unsupported API_CLIENT_TYPE: {cls.API_CLIENT_TYPE}")


class DevelopmentConfig(Config):
    """Verbose logging against a local service."""
    DEBUG = True


class ProductionConfig(Config):
    """Production settings; INFO logging."""
    DEBUG = False


class TestingConfig(Config):
    """In-memory mock service and an isolated Redis namespace."""
    TESTING = True
    API_CLIENT_TYPE = "mock"
    REDIS_URL = "redis://localhost:6379/15"  # Use different DB for tests
    SESSION_KEY_PREFIX = "test_airport_prefs:"


def get_config(env: Optional[str] = None) -> type[Config]:
    """Pick the configuration class named by ``env`` or ``AIRPORT_ENV``."""
    env = (env or os.getenv("AIRPORT_ENV", "development")).lower()

    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }

    return config_map.get(env, DevelopmentConfig)
