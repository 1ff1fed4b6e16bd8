from __future__ import annotations

import logging
import os
import re
import shlex
from typing import NamedTuple

from vagrant_dispatch.config import DispatchConfig
from vagrant_dispatch.exceptions import VagrantError
from vagrant_dispatch.stubs import (
    ShellProtocol,
    TargetSelector,
    ViewerHostProtocol,
    ViewerProtocol,
)
from vagrant_dispatch.utilities import list_machines, locate_project_root

logger = logging.getLogger(__name__)


class DispatchResult(NamedTuple):
    command: str
    cwd: str
    viewer: str


def compose_command(template: str, target: str | None = None) -> str:
    if target:
        return f"{template} {shlex.quote(target)}"
    return template


def is_own_viewer(name: str, base: str) -> bool:
    if name == base:
        return True
    return re.fullmatch(re.escape(base) + r"-\d+", name) is not None


def next_viewer_name(base: str, open_names: set[str]) -> str:
    """First of ``base``, ``base-2``, ``base-3``... not currently open."""
    if base not in open_names:
        return base
    n = 2
    while f"{base}-{n}" in open_names:
        n += 1
    return f"{base}-{n}"


class Dispatcher:
    """
    Builds vagrant command lines and hands them to the shell.

    Usage:

        dispatcher = Dispatcher(config, shell, viewers, select_target=prompt)
        dispatcher.dispatch("vagrant halt", scoped=True, interactive=True, prompt=True)

    ``dispatch`` never waits for the spawned process; its outcome is only
    visible in the viewer.
    """

    def __init__(
        self,
        config: DispatchConfig,
        shell: ShellProtocol,
        viewers: ViewerHostProtocol,
        select_target: TargetSelector | None = None,
    ) -> None:
        self._config = config
        self._shell = shell
        self._viewers = viewers
        self._select_target = select_target

    def resolve_cwd(self, scoped: bool, start_dir: str | None = None) -> str:
        start = start_dir if start_dir is not None else os.getcwd()
        if not scoped:
            return start
        return locate_project_root(start, self._config)

    def choose_target(self, cwd: str, prompt: bool) -> str | None:
        if not prompt or self._select_target is None:
            return None
        candidates = list_machines(cwd, self._config)
        if not candidates:
            logger.debug("No machines under %s, not prompting", cwd)
            return None
        return self._select_target(candidates) or None

    def _allocate_viewer(self) -> tuple[ViewerProtocol, bool]:
        """Open a viewer; the flag tells whether it was not open before."""
        base = self._config.viewer_name
        open_names = {v.name for v in self._viewers.list_open()}
        if self._config.isolated_viewers:
            name = next_viewer_name(base, open_names)
        else:
            name = base
        return self._viewers.open(name), name not in open_names

    def dispatch(
        self,
        command: str,
        *,
        scoped: bool,
        interactive: bool,
        prompt: bool = False,
        target: str | None = None,
        start_dir: str | None = None,
    ) -> DispatchResult:
        cwd = self.resolve_cwd(scoped, start_dir)

        if interactive and not target:
            target = self.choose_target(cwd, prompt)
        elif not interactive:
            target = None

        final = compose_command(command, target)
        viewer, fresh = self._allocate_viewer()

        logger.info("Running %r in %s (viewer %s)", final, cwd, viewer.name)
        try:
            self._shell.run_async(final, cwd, viewer)
        except VagrantError:
            if fresh:
                self._viewers.close(viewer)
            raise
        return DispatchResult(command=final, cwd=cwd, viewer=viewer.name)


def close_all_viewers(viewers: ViewerHostProtocol, config: DispatchConfig) -> list[str]:
    closed = []
    for viewer in viewers.list_open():
        if is_own_viewer(viewer.name, config.viewer_name):
            viewers.close(viewer)
            closed.append(viewer.name)
    logger.debug("Closed viewers: %s", closed)
    return closed


def close_idle_viewers(viewers: ViewerHostProtocol, config: DispatchConfig) -> list[str]:
    closed = []
    for viewer in viewers.list_open():
        if not is_own_viewer(viewer.name, config.viewer_name):
            continue
        if viewer.is_running():
            continue
        viewers.close(viewer)
        closed.append(viewer.name)
    logger.debug("Closed idle viewers: %s", closed)
    return closed
