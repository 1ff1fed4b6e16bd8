from vagrant_dispatch.commands import COMMANDS, CommandSpec, build_template
from vagrant_dispatch.config import DispatchConfig, load_config
from vagrant_dispatch.dispatcher import (
    DispatchResult,
    Dispatcher,
    close_all_viewers,
    close_idle_viewers,
    compose_command,
)
from vagrant_dispatch.exceptions import (
    ConfigError,
    EditorNotFound,
    MachineListingError,
    ShellSpawnError,
    VagrantError,
    VagrantfileNotFound,
)
from vagrant_dispatch.stubs import ShellProtocol, ViewerHostProtocol, ViewerProtocol
from vagrant_dispatch.utilities import list_machines, locate_project_root, locate_vagrantfile

__version__ = "0.1.0"

__all__ = [
    "COMMANDS",
    "CommandSpec",
    "ConfigError",
    "DispatchConfig",
    "DispatchResult",
    "Dispatcher",
    "EditorNotFound",
    "MachineListingError",
    "ShellProtocol",
    "ShellSpawnError",
    "VagrantError",
    "VagrantfileNotFound",
    "ViewerHostProtocol",
    "ViewerProtocol",
    "build_template",
    "close_all_viewers",
    "close_idle_viewers",
    "compose_command",
    "list_machines",
    "load_config",
    "locate_project_root",
    "locate_vagrantfile",
]
