"""Factory for creating API client and session store instances (Factory Pattern)."""
import logging
from typing import Optional

from airport_client.config.settings import Config
from airport_client.domain.interfaces.airport_api_client import IAirportAPIClient
from airport_client.domain.interfaces.session_storage import ISessionStore
from airport_client.infrastructure.clients.airport_api_client import AirportAPIClient
from airport_client.infrastructure.clients.mock_airport_api_client import MockAirportAPIClient
from airport_client.infrastructure.repositories.session_storage import RedisSessionStore
from airport_client.infrastructure.redis_client import RedisClientFactory


logger = logging.getLogger(__name__)


class ClientFactory:
    """
    Factory for creating infrastructure instances following Factory Pattern.

    Centralizes creation logic and allows easy switching between implementations.
    """

    @staticmethod
    def create_session_store(
        storage_type: str = "redis",
        config: type[Config] = Config,
        redis_client=None
    ) -> ISessionStore:
        """
        Create a session store instance.

        Args:
            storage_type: Type of storage ("redis")
            config: Configuration class to read connection settings from
            redis_client: Optional pre-built Redis client

        Returns:
            ISessionStore instance

        Raises:
            ValueError: If storage type is not supported
        """
        storage_type = storage_type.lower()

        if storage_type == "redis":
            if redis_client is None:
                redis_client = RedisClientFactory.create_client(config.REDIS_URL)
            return RedisSessionStore(redis_client=redis_client, key_prefix=config.SESSION_KEY_PREFIX)
        else:
            raise ValueError(f"Unsupported storage type: {storage_type}")

    @staticmethod
    def create_api_client(
        session_store: ISessionStore,
        client_type: Optional[str] = None,
        config: type[Config] = Config
    ) -> IAirportAPIClient:
        """
        Create an airport API client.

        Args:
            session_store: Store the client reads the bearer token from
            client_type: "http" or "mock" (defaults to Config value)
            config: Configuration class to read API settings from

        Returns:
            IAirportAPIClient instance

        Raises:
            ValueError: If client type is not supported
        """
        client_type = (client_type or config.API_CLIENT_TYPE).lower()

        if client_type == "http":
            return AirportAPIClient(
                session_store=session_store,
                base_url=config.AIRPORT_API_BASE_URL,
                timeout=config.AIRPORT_API_TIMEOUT,
            )
        elif client_type == "mock":
            logger.info("Using in-memory mock airport API")
            return MockAirportAPIClient(session_store=session_store)
        else:
            raise ValueError(f"Unsupported API client type: {client_type}")
