"""Command-line front end: one sub-command per vagrant action."""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from typing import Any, Sequence

import click

from vagrant_dispatch.commands import COMMANDS, CommandSpec, build_template
from vagrant_dispatch.config import DispatchConfig, load_config
from vagrant_dispatch.dispatcher import Dispatcher, close_all_viewers, close_idle_viewers
from vagrant_dispatch.editor import SubprocessEditor
from vagrant_dispatch.exceptions import VagrantError
from vagrant_dispatch.shell import DetachedShellRunner
from vagrant_dispatch.stubs import EditorProtocol
from vagrant_dispatch.utilities import locate_vagrantfile
from vagrant_dispatch.viewers import LogViewerHost

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    config: DispatchConfig
    start_dir: str
    viewers: LogViewerHost

    def dispatcher(self) -> Dispatcher:
        return Dispatcher(
            self.config,
            DetachedShellRunner(),
            self.viewers,
            select_target=prompt_for_target,
        )


def handle_errors(func):
    """Turn library errors into click errors so they print without a traceback."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except VagrantError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def prompt_for_target(candidates: Sequence[str]) -> str | None:
    click.echo("Machines: " + ", ".join(candidates))
    while True:
        name = click.prompt(
            "Machine (empty for none)", default="", show_default=False
        ).strip()
        if not name:
            return None
        if name in candidates:
            return name
        click.echo(f"Unknown machine {name!r}", err=True)


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="YAML config file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-C",
    "--directory",
    type=click.Path(file_okay=False),
    help="Start the Vagrantfile search here instead of the current directory.",
)
@click.option("--vagrant-bin", help="vagrant executable to run.")
@click.option("--up-options", help="Extra flags appended to 'vagrant up'.")
@click.option("--fallback-dir", help="Project directory used when no Vagrantfile is found.")
@click.option("--state-dir", help="Directory holding viewer logs.")
@click.option(
    "--shared-viewer",
    is_flag=True,
    help="Send every command to the same viewer.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: bool,
    directory: str | None,
    vagrant_bin: str | None,
    up_options: str | None,
    fallback_dir: str | None,
    state_dir: str | None,
    shared_viewer: bool,
) -> None:
    """Run vagrant commands for the project enclosing the current directory."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {
        "vagrant_bin": vagrant_bin,
        "up_options": up_options,
        "fallback_project_dir": fallback_dir,
        "state_dir": state_dir,
        "isolated_viewers": False if shared_viewer else None,
    }
    try:
        config = load_config(cli=overrides, config_file=config_file)
    except VagrantError as e:
        raise click.ClickException(str(e)) from e
    logger.debug("Using %s", config)

    ctx.obj = AppContext(
        config=config,
        start_dir=os.path.abspath(directory or os.getcwd()),
        viewers=LogViewerHost(config.state_dir),
    )


def _make_command(spec: CommandSpec) -> click.Command:
    params: list[click.Parameter] = []
    if spec.takes_argument:
        params.append(click.Argument(["argument"]))
    if spec.interactive:
        params.append(
            click.Option(
                ["-s", "--select"], is_flag=True, help="Prompt for a machine."
            )
        )
        params.append(click.Option(["-m", "--machine"], help="Machine to target."))

    @click.pass_obj
    @handle_errors
    def callback(
        app: AppContext,
        argument: str | None = None,
        select: bool = False,
        machine: str | None = None,
    ) -> None:
        template = build_template(spec, app.config, argument)
        result = app.dispatcher().dispatch(
            template,
            scoped=spec.scoped,
            interactive=spec.interactive,
            prompt=select,
            target=machine,
            start_dir=app.start_dir,
        )
        viewer = app.viewers.get(result.viewer)
        where = viewer.log_path if viewer is not None else result.viewer
        click.echo(f"{result.command}  [{result.cwd}]  -> {where}")

    return click.Command(spec.name, callback=callback, params=params, help=spec.help)


for _command_spec in COMMANDS.values():
    cli.add_command(_make_command(_command_spec))


@cli.command("edit-config")
@click.option("--editor", help="Editor command; defaults to $VISUAL or $EDITOR.")
@click.pass_obj
@handle_errors
def edit_config(app: AppContext, editor: str | None) -> None:
    """Open the project's Vagrantfile for editing."""
    path = locate_vagrantfile(app.start_dir, app.config)
    opener: EditorProtocol = SubprocessEditor(editor)
    opener.open_file(path)


@cli.command("viewers")
@click.pass_obj
def list_viewers(app: AppContext) -> None:
    """List open viewers."""
    viewers = app.viewers.list_open()
    if not viewers:
        click.echo("No open viewers.")
        return
    for viewer in viewers:
        meta = viewer.metadata()
        state = "running" if viewer.is_running() else "idle"
        click.echo(f"{viewer.name:<12} {state:<8} {meta.get('command') or ''}")


@cli.command("show")
@click.argument("name")
@click.pass_obj
def show_viewer(app: AppContext, name: str) -> None:
    """Print a viewer's output."""
    viewer = app.viewers.get(name)
    if viewer is None:
        raise click.ClickException(f"No viewer named {name!r}")
    click.echo(viewer.read(), nl=False)


@cli.command("close-all")
@click.pass_obj
def close_all(app: AppContext) -> None:
    """Close every vagrant viewer."""
    for name in close_all_viewers(app.viewers, app.config):
        click.echo(f"Closed {name}")


@cli.command("close-idle")
@click.pass_obj
def close_idle(app: AppContext) -> None:
    """Close vagrant viewers whose process has finished."""
    for name in close_idle_viewers(app.viewers, app.config):
        click.echo(f"Closed {name}")


def main() -> None:
    cli()
