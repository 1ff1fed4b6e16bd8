from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess

from vagrant_dispatch.exceptions import EditorNotFound, VagrantError

logger = logging.getLogger(__name__)


def get_editor() -> str:
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or "vi"


def require_bins(*bins: str) -> None:
    missing = [b for b in bins if shutil.which(b) is None]
    if missing:
        raise EditorNotFound("Missing required binaries: " + ", ".join(missing))


class SubprocessEditor:
    """
    Opens files in $VISUAL, $EDITOR or vi. Unlike dispatched vagrant
    commands this blocks until the editor exits.
    """

    def __init__(self, editor: str | None = None) -> None:
        self._command = shlex.split(editor or get_editor())
        if not self._command:
            raise EditorNotFound("No editor configured; set $EDITOR or $VISUAL")

    @property
    def name(self) -> str:
        return os.path.basename(self._command[0])

    def open_file(self, path: str) -> None:
        require_bins(self._command[0])
        logger.debug("Opening %s with %s", path, self._command)
        try:
            subprocess.run([*self._command, path], check=True)
        except subprocess.CalledProcessError as e:
            raise VagrantError(
                f"Editor {self.name!r} exited with code {e.returncode}"
            ) from e
