"""Client-side session and synchronization layer for the airport reservation API."""
import logging
import sys
from typing import Optional

from airport_client.config.settings import Config, get_config
from airport_client.domain.interfaces.collection_view import ICollectionView
from airport_client.infrastructure.service_container import ServiceContainer


def create_client(
    config_class: Optional[type[Config]] = None,
    view: Optional[ICollectionView] = None,
    **overrides
) -> ServiceContainer:
    """
    Create and configure the client with dependency injection.

    Implements Factory Pattern: the returned container is the single place
    the session store, API client and coordinator are built.

    Args:
        config_class: Optional configuration class (for testing)
        view: Presentation observer for the flights/bookings lists
        **overrides: Pre-built session_store, api_client or executor

    Returns:
        Configured ServiceContainer
    """
    _logger = logging.getLogger(__name__)

    config = config_class or get_config()

    _configure_logging(config)

    try:
        config.validate()
    except ValueError as e:
        _logger.critical(f"Invalid configuration: {e}")
        raise

    container = ServiceContainer(config=config, view=view, **overrides)
    _logger.info(f"Airport client initialized against {config.AIRPORT_API_BASE_URL}")
    return container


def _configure_logging(config: type[Config]) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=logging.DEBUG if config.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )


__all__ = ["create_client", "ServiceContainer"]
