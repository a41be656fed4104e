"""Windows Task Scheduler client used for backup jobs."""

import logging

from provctl.collaborators.base import Collaborator
from provctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class TaskScheduler(Collaborator):
    """Client for schtasks.exe."""

    @property
    def name(self) -> str:
        return "schtasks"

    def is_available(self) -> bool:
        """Check if schtasks is available."""
        return command_exists("schtasks")

    def has_task(self, task_name: str) -> bool:
        """Check if a task with this name is registered."""
        return run_command(["schtasks", "/Query", "/TN", task_name]).success

    def create_task(
        self,
        task_name: str,
        command: str,
        schedule: str,
        start_time: str,
    ) -> CommandResult:
        """Register (or replace) a scheduled task.

        Args:
            task_name: Task name.
            command: Command line the task runs.
            schedule: Schedule type (``DAILY``, ``WEEKLY``, ``ONLOGON``).
            start_time: ``HH:MM`` start time; ignored for ``ONLOGON``.

        Returns:
            CommandResult of ``schtasks /Create``.
        """
        args = ["schtasks", "/Create", "/TN", task_name, "/TR", command, "/SC", schedule]
        if schedule != "ONLOGON":
            args.extend(["/ST", start_time])
        args.append("/F")
        logger.info("Creating scheduled task %s (%s)", task_name, schedule)
        return run_command(args)
