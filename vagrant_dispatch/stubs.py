from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence


class ViewerProtocol(Protocol):
    """An output surface a dispatched process streams into."""

    @property
    def name(self) -> str: ...

    def is_running(self) -> bool: ...


class ViewerHostProtocol(Protocol):
    """Owner of the viewers; implemented by the host integration layer."""

    def open(self, name: str) -> ViewerProtocol: ...

    def list_open(self) -> list[ViewerProtocol]: ...

    def close(self, viewer: ViewerProtocol) -> None: ...


class ShellProtocol(Protocol):
    """Spawn a shell command without waiting for it."""

    def run_async(self, command: str, cwd: str, viewer: ViewerProtocol) -> None: ...


class EditorProtocol(Protocol):
    def open_file(self, path: str) -> None: ...


TargetSelector = Callable[[Sequence[str]], Optional[str]]
