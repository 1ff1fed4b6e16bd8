from __future__ import annotations

import datetime
import logging
import os
import subprocess
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class LogViewer:
    """
    A viewer backed by ``<name>.log`` with a ``<name>.yaml`` sidecar holding
    the command, cwd and pid of the process writing to it.
    """

    def __init__(self, host: LogViewerHost, name: str) -> None:
        self._host = host
        self._name = name

    def __repr__(self) -> str:
        return f"LogViewer({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def log_path(self) -> str:
        return os.path.join(self._host.state_dir, self._name + ".log")

    @property
    def meta_path(self) -> str:
        return os.path.join(self._host.state_dir, self._name + ".yaml")

    def metadata(self) -> dict[str, Any]:
        try:
            with open(self.meta_path, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except FileNotFoundError:
            return {}
        except yaml.YAMLError as e:
            logger.warning("Unreadable viewer metadata %s: %s", self.meta_path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def attach(self, command: str, cwd: str, proc: subprocess.Popen[bytes]) -> None:
        meta = {
            "name": self._name,
            "command": command,
            "cwd": cwd,
            "pid": proc.pid,
            "started": datetime.datetime.now().isoformat(timespec="seconds"),
        }
        with open(self.meta_path, "w", encoding="utf-8") as fh:
            yaml.safe_dump(meta, fh, default_flow_style=False)
        self._host.track(proc)

    def is_running(self) -> bool:
        pid = self.metadata().get("pid")
        if not isinstance(pid, int):
            return False
        return self._host.pid_alive(pid)

    def read(self) -> str:
        try:
            with open(self.log_path, "r", encoding="utf-8", errors="replace") as fh:
                return fh.read()
        except FileNotFoundError:
            return ""


class LogViewerHost:
    """Keeps viewers as files under state_dir so they outlive the CLI call."""

    def __init__(self, state_dir: str) -> None:
        self.state_dir = os.path.expanduser(state_dir)
        self._procs: dict[int, subprocess.Popen[bytes]] = {}

    def _ensure_dir(self) -> None:
        os.makedirs(self.state_dir, exist_ok=True)

    def open(self, name: str) -> LogViewer:
        self._ensure_dir()
        viewer = LogViewer(self, name)
        with open(viewer.log_path, "wb"):
            pass
        with open(viewer.meta_path, "w", encoding="utf-8") as fh:
            yaml.safe_dump({"name": name, "pid": None}, fh, default_flow_style=False)
        logger.debug("Opened viewer %s at %s", name, viewer.log_path)
        return viewer

    def get(self, name: str) -> LogViewer | None:
        viewer = LogViewer(self, name)
        if os.path.exists(viewer.meta_path):
            return viewer
        return None

    def list_open(self) -> list[LogViewer]:
        if not os.path.isdir(self.state_dir):
            return []
        names = sorted(
            fn[: -len(".yaml")]
            for fn in os.listdir(self.state_dir)
            if fn.endswith(".yaml")
        )
        return [LogViewer(self, name) for name in names]

    def close(self, viewer: LogViewer) -> None:
        # The process, if any, keeps running; only the viewer goes away.
        for path in (viewer.meta_path, viewer.log_path):
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
        logger.debug("Closed viewer %s", viewer.name)

    def track(self, proc: subprocess.Popen[bytes]) -> None:
        self._procs[proc.pid] = proc

    def pid_alive(self, pid: int) -> bool:
        proc = self._procs.get(pid)
        if proc is not None:
            return proc.poll() is None
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            return True
        return True
