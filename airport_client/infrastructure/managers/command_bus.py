"""Command bus implementation (Registry Pattern).

Routes command objects from the presentation layer to the handler
registered for their type.
"""
import logging
from typing import Any, Dict, Optional

from airport_client.domain.interfaces.command_bus import ICommandBus
from airport_client.domain.interfaces.command_handler import ICommandHandler


logger = logging.getLogger(__name__)


class CommandBus(ICommandBus):
    """
    Implementation of the command bus following Registry Pattern.
    """

    def __init__(self):
        """Initialize command bus with empty registry."""
        self._handlers: Dict[type, ICommandHandler] = {}
        self._logger = logging.getLogger(__name__)

    def register_handler(self, handler: ICommandHandler) -> None:
        """
        Register a handler for its command type.

        Args:
            handler: Command handler instance

        Raises:
            ValueError: If handler is invalid
        """
        if not isinstance(handler, ICommandHandler):
            raise ValueError("Handler must implement ICommandHandler")

        command_type = handler.get_command_type()

        if not isinstance(command_type, type):
            raise ValueError("Handler must return a command class")

        if command_type in self._handlers:
            self._logger.warning(
                f"Handler for command '{command_type.__name__}' already exists. Overwriting."
            )

        self._handlers[command_type] = handler
        self._logger.debug(f"Registered handler for command '{command_type.__name__}'")

    def get_handler(self, command_type: type) -> Optional[ICommandHandler]:
        return self._handlers.get(command_type)

    def get_all_handlers(self) -> Dict[type, ICommandHandler]:
        return self._handlers.copy()

    def dispatch(self, command: Any) -> Any:
        """
        Route a command to its handler.

        Args:
            command: Command instance

        Returns:
            Whatever the handler returns

        Raises:
            ValueError: If no handler is registered or the command is invalid
        """
        name = type(command).__name__
        handler = self.get_handler(type(command))
        if handler is None:
            raise ValueError(f"No handler registered for command '{name}'")

        if not handler.validate_command(command):
            raise ValueError(f"Invalid command '{name}'")

        self._logger.debug(f"Dispatching {name}")
        return handler.handle(command)
