"""Interface for command handlers (Strategy Pattern).

Each UI intent is an explicit command object; a handler turns it into
calls on the coordinator, the booking workflow or the auth service.
"""
from abc import ABC, abstractmethod
from typing import Any


class ICommandHandler(ABC):
    """
    Interface for command handlers following Strategy Pattern.
    """

    @abstractmethod
    def get_command_type(self) -> type:
        """
        Get the command class this handler processes.

        Returns:
            Command dataclass type
        """
        pass

    @abstractmethod
    def validate_command(self, command: Any) -> bool:
        """
        Validate a command before execution.

        Args:
            command: Command instance to validate

        Returns:
            True if the command can be executed, False otherwise
        """
        pass

    @abstractmethod
    def handle(self, command: Any) -> Any:
        """
        Execute a command.

        Args:
            command: Command instance

        Returns:
            Handler specific result

        Raises:
            ValueError: If the command is invalid
        """
        pass
