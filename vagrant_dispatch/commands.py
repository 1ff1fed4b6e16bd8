from __future__ import annotations

import shlex
from dataclasses import dataclass

from vagrant_dispatch.config import DispatchConfig
from vagrant_dispatch.exceptions import VagrantError


@dataclass(frozen=True)
class CommandSpec:
    name: str
    args: tuple[str, ...]
    scoped: bool
    interactive: bool
    help: str
    takes_argument: bool = False


def _spec(
    name: str,
    args: str,
    scoped: bool,
    interactive: bool,
    help: str,
    takes_argument: bool = False,
) -> CommandSpec:
    return CommandSpec(
        name=name,
        args=tuple(args.split()),
        scoped=scoped,
        interactive=interactive,
        help=help,
        takes_argument=takes_argument,
    )


COMMANDS: dict[str, CommandSpec] = {
    spec.name: spec
    for spec in (
        _spec("list-boxes", "box list", False, False, "List all installed boxes."),
        _spec("update-box", "box update", True, False, "Update the project's box."),
        _spec("up", "up", True, False, "Start and provision the environment."),
        _spec("provision", "provision", True, False, "Provision the environment."),
        _spec("destroy", "destroy", True, False, "Destroy the environment."),
        _spec(
            "destroy-force",
            "destroy --force",
            True,
            False,
            "Destroy the environment without confirmation.",
        ),
        _spec("reload", "reload", True, False, "Restart with the new Vagrantfile."),
        _spec("resume", "resume", True, False, "Resume a suspended machine."),
        _spec("ssh", "ssh", True, True, "SSH into a machine."),
        _spec(
            "ssh-command",
            "ssh",
            True,
            True,
            "Run a command on a machine over SSH.",
            takes_argument=True,
        ),
        _spec("status", "status", True, True, "Show machine status."),
        _spec(
            "global-status", "global-status", False, False, "Show all known environments."
        ),
        _spec("suspend", "suspend", True, True, "Suspend a machine."),
        _spec("halt", "halt", True, True, "Stop a machine."),
        _spec("sync", "rsync", True, False, "Sync rsync folders to the machines."),
        _spec("init-project", "init", False, False, "Create a new Vagrantfile here."),
    )
}


def build_template(
    spec: CommandSpec, config: DispatchConfig, argument: str | None = None
) -> str:
    """
    Render the command line for spec, without any machine name.

    ``up`` gets the configured options appended verbatim; ``ssh-command``
    passes argument to ``ssh -c`` as a single shell word.
    """
    parts = [config.vagrant_bin, *spec.args]

    if spec.name == "up" and config.up_options.strip():
        parts.append(config.up_options.strip())

    if spec.takes_argument:
        if not argument or not argument.strip():
            raise VagrantError(f"{spec.name} requires a command to run")
        parts.extend(["-c", shlex.quote(argument)])

    return " ".join(parts)
