from __future__ import annotations


class VagrantError(Exception):
    """Base exception for vagrant-dispatch errors."""


class VagrantfileNotFound(VagrantError):
    """No Vagrantfile above the start directory and no usable fallback."""

    def __init__(self, start_dir: str) -> None:
        self.start_dir = start_dir
        super().__init__(
            f"Vagrantfile not found in {start_dir!r} or any parent directory"
        )


class MachineListingError(VagrantError):
    """Machine metadata directory exists but cannot be listed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot list machines in {path!r}: {reason}")


class ConfigError(VagrantError):
    """Invalid or unreadable configuration."""


class EditorNotFound(VagrantError):
    """No usable editor binary."""


class ShellSpawnError(VagrantError):
    """The shell process for a dispatched command could not be started."""
