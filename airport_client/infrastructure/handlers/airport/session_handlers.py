"""Handlers for login, registration and logout."""
import logging

from airport_client.application.commands import Login, Logout, Register
from airport_client.application.services.authentication_service import AuthenticationService
from airport_client.domain.interfaces.command_handler import ICommandHandler
from airport_client.domain.result import Result


logger = logging.getLogger(__name__)


class LoginHandler(ICommandHandler):
    def __init__(self, auth_service: AuthenticationService):
        self.auth_service = auth_service

    def get_command_type(self) -> type:
        return Login

    def validate_command(self, command: Login) -> bool:
        # Empty fields are reported by the service as a validation error
        return isinstance(command.email, str) and isinstance(command.password, str)

    def handle(self, command: Login) -> Result:
        return self.auth_service.login(command.email, command.password)


class RegisterHandler(ICommandHandler):
    def __init__(self, auth_service: AuthenticationService):
        self.auth_service = auth_service

    def get_command_type(self) -> type:
        return Register

    def validate_command(self, command: Register) -> bool:
        return isinstance(command.email, str) and isinstance(command.password, str)

    def handle(self, command: Register) -> Result:
        return self.auth_service.register(
            command.name,
            command.email,
            command.password,
            phone_number=command.phone_number,
            initial_miles=command.initial_miles,
        )


class LogoutHandler(ICommandHandler):
    def __init__(self, auth_service: AuthenticationService):
        self.auth_service = auth_service

    def get_command_type(self) -> type:
        return Logout

    def validate_command(self, command: Logout) -> bool:
        return True

    def handle(self, command: Logout) -> None:
        self.auth_service.logout()
