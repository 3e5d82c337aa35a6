"""Interface for command buses (Registry Pattern).

Routes command objects coming from the presentation layer to the
handler registered for their type.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from airport_client.domain.interfaces.command_handler import ICommandHandler


class ICommandBus(ABC):
    """
    Interface for command buses following Registry Pattern.
    """

    @abstractmethod
    def register_handler(self, handler: ICommandHandler) -> None:
        """
        Register a handler for its command type.

        Args:
            handler: Command handler instance

        Raises:
            ValueError: If handler is invalid
        """
        pass

    @abstractmethod
    def get_handler(self, command_type: type) -> Optional[ICommandHandler]:
        """
        Get handler for a command type.

        Args:
            command_type: Command class

        Returns:
            Command handler if found, None otherwise
        """
        pass

    @abstractmethod
    def get_all_handlers(self) -> Dict[type, ICommandHandler]:
        pass

    @abstractmethod
    def dispatch(self, command: Any) -> Any:
        """
        Route a command to its handler and return the handler's result.

        Raises:
            ValueError: If no handler is registered or the command is invalid
        """
        pass
