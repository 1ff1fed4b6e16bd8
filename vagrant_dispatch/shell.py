from __future__ import annotations

import logging
import subprocess

from vagrant_dispatch.exceptions import ShellSpawnError
from vagrant_dispatch.viewers import LogViewer

logger = logging.getLogger(__name__)


class DetachedShellRunner:
    """
    Spawns commands through the user's shell in their own session, with
    stdout and stderr going to the viewer's log. Nothing waits on the child
    and its exit status is only visible in the log.
    """

    def __init__(self, shell: str | None = None) -> None:
        self._shell = shell

    def run_async(self, command: str, cwd: str, viewer: LogViewer) -> None:
        try:
            with open(viewer.log_path, "ab") as log:
                proc = subprocess.Popen(
                    command,
                    shell=True,
                    executable=self._shell,
                    cwd=cwd,
                    stdin=subprocess.DEVNULL,
                    stdout=log,
                    stderr=subprocess.STDOUT,
                    start_new_session=True,
                )
        except OSError as e:
            raise ShellSpawnError(f"cannot run {command!r} in {cwd!r}: {e}") from e
        viewer.attach(command, cwd, proc)
        logger.debug("Spawned pid %d for %r", proc.pid, command)
