"""Factories for creating infrastructure instances (Factory Pattern)."""

from airport_client.infrastructure.factories.client_factory import ClientFactory
from airport_client.infrastructure.factories.commands_factory import CommandsFactory

__all__ = [
    "ClientFactory",
    "CommandsFactory",
]
