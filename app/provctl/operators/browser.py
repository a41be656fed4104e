"""Browser extension operator: downloads the package into the profile."""

from provctl.collaborators import CollaboratorError
from provctl.models.action import ActionResult, ActionType, PlannedAction
from provctl.models.config import BrowserExtensionDeclaration, ResourceKind
from provctl.operators.base import Operator


class BrowserExtensionOperator(Operator[BrowserExtensionDeclaration]):
    """Installs Firefox extensions by placing ``<id>.<ext>`` in the profile.

    Firefox picks the file up and asks for confirmation on next start.
    """

    @property
    def kind(self) -> ResourceKind:
        return ResourceKind.BROWSER_EXTENSION

    @property
    def action_type(self) -> ActionType:
        return ActionType.INSTALL

    def is_available(self) -> bool:
        return self._env.firefox.is_available()

    def apply(
        self, declaration: BrowserExtensionDeclaration, planned: PlannedAction
    ) -> ActionResult:
        extensions_dir = self._env.firefox.extensions_dir()
        if extensions_dir is None:
            raise CollaboratorError("No default Firefox profile found")

        destination = extensions_dir / declaration.file_name
        result = self._env.firefox.download(declaration.url, destination)
        return self.from_command(planned, result, "download")
