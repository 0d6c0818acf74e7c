import asyncio
import os

import click

from razorsnap.config.listener_config import ListenerConfig, RazorsnapPaths
from razorsnap.evaluation import load_project_evaluation
from razorsnap.exceptions import RazorSnapshotException
from razorsnap.listener import create_default_listener
from razorsnap.paths import try_resolve_configuration_output_path
from razorsnap.project import Workspace
from razorsnap.util.logging import configure_logging
from razorsnap.writer import read_snapshot

_MAX_CONTENT_WIDTH = 100
_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class AutoRegisteringGroup(click.Group):
    """
    A click.Group which registers all click.Command attributes defined on its class,
    such that commands can be defined as static methods of the subclass.
    """

    def __init__(self, name: str, help: str):
        super().__init__(name=name, help=help)
        for attr in dir(self.__class__):
            cmd = getattr(self.__class__, attr)
            if isinstance(cmd, click.Command):
                self.add_command(cmd)


class TopLevelCommands(AutoRegisteringGroup):
    """Root CLI group containing the razorsnap commands."""

    def __init__(self) -> None:
        super().__init__(name="razorsnap", help="Writes and inspects Razor project configuration documents (project.razor.json).")

    @staticmethod
    @click.command(
        "write",
        help="Processes a dumped project evaluation as if the build host had loaded the project, writing its project.razor.json.",
        context_settings={"max_content_width": _MAX_CONTENT_WIDTH},
    )
    @click.argument("evaluation_file", type=click.Path(exists=True, dir_okay=False))
    @click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False), default=None, help="Path to a configuration YAML.")
    @click.option(
        "--log-level", type=click.Choice(_LOG_LEVELS, case_sensitive=False), default=None, help="Overrides the configured log level."
    )
    def write(evaluation_file: str, config_file: str | None, log_level: str | None) -> None:
        try:
            config = ListenerConfig.load(config_file)
            configure_logging(log_level or config.log_level)
            evaluation = load_project_evaluation(evaluation_file)
        except RazorSnapshotException as e:
            raise click.ClickException(str(e)) from e

        output_path = try_resolve_configuration_output_path(evaluation.event.project_instance)
        if output_path is None:
            click.echo(f"Project {evaluation.event.project_id} defines no intermediate output path; nothing to write.")
            return

        listener = create_default_listener(Workspace([evaluation.to_project_model()]), config)
        if asyncio.run(listener.project_loaded(evaluation.event)):
            click.echo(f"Processed project {evaluation.event.project_id}; configuration document: {output_path}")
        else:
            click.echo(f"No configuration document was written for project {evaluation.event.project_id}; see the log for details.")

    @staticmethod
    @click.command("show", help="Summarises a project.razor.json document.", context_settings={"max_content_width": _MAX_CONTENT_WIDTH})
    @click.argument("snapshot_file", type=click.Path(dir_okay=False))
    def show(snapshot_file: str) -> None:
        snapshot = read_snapshot(snapshot_file)
        if snapshot is None:
            click.echo("No Razor configuration known yet")
            return
        click.echo(f"Project: {snapshot.project_file_path}")
        click.echo(f"Target framework: {snapshot.target_framework}")
        if snapshot.configuration is None:
            click.echo("Configuration: <none>")
        else:
            configuration = snapshot.configuration
            extensions = ", ".join(configuration.extension_names) or "<none>"
            click.echo(f"Configuration: {configuration.configuration_name} (language version {configuration.language_version})")
            click.echo(f"Extensions: {extensions}")
        click.echo(f"Tag helpers: {len(snapshot.tag_helpers)}")
        for tag_helper in snapshot.tag_helpers:
            click.echo(f"  {tag_helper.kind}: {tag_helper.name} ({tag_helper.assembly_name})")

    @staticmethod
    @click.command("init-config", help="Writes a configuration file with the default settings.")
    @click.option("--path", type=click.Path(dir_okay=False), default=None, help="Where to write the file (default: ~/.razorsnap/config.yml).")
    @click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
    def init_config(path: str | None, force: bool) -> None:
        path = path or RazorsnapPaths().config_file
        if os.path.exists(path) and not force:
            raise click.ClickException(f"{path} already exists; use --force to overwrite it")
        ListenerConfig().save(path)
        click.echo(f"Wrote default configuration to {path}")


top_level = TopLevelCommands()

