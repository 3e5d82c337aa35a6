"""Handlers for tab selection, manual refresh and view re-entry."""
import logging
from concurrent.futures import Future

from airport_client.application.commands import SelectTab, Refresh, Resume
from airport_client.application.use_cases.tab_coordinator import Tab, TabCoordinator
from airport_client.domain.interfaces.command_handler import ICommandHandler


logger = logging.getLogger(__name__)


class SelectTabHandler(ICommandHandler):
    """Switches the active tab and fetches its collection."""

    def __init__(self, coordinator: TabCoordinator):
        self.coordinator = coordinator

    def get_command_type(self) -> type:
        return SelectTab

    def validate_command(self, command: SelectTab) -> bool:
        try:
            Tab(command.tab)
        except ValueError:
            logger.warning(f"Unknown tab: {command.tab}")
            return False
        return True

    def handle(self, command: SelectTab) -> Future:
        return self.coordinator.select_tab(Tab(command.tab))


class RefreshHandler(ICommandHandler):
    """Re-fetches whichever tab is active."""

    def __init__(self, coordinator: TabCoordinator):
        self.coordinator = coordinator

    def get_command_type(self) -> type:
        return Refresh

    def validate_command(self, command: Refresh) -> bool:
        return True

    def handle(self, command: Refresh) -> Future:
        return self.coordinator.refresh()


class ResumeHandler(ICommandHandler):
    """Re-fetches the active tab when the view is shown again."""

    def __init__(self, coordinator: TabCoordinator):
        self.coordinator = coordinator

    def get_command_type(self) -> type:
        return Resume

    def validate_command(self, command: Resume) -> bool:
        return True

    def handle(self, command: Resume) -> Future:
        return self.coordinator.on_resume()
