"""
Reacts to projects being loaded by the build host by writing the project's Razor configuration
(`project.razor.json`) to its intermediate output directory, from where the Razor language server picks it up.
"""

import asyncio
from collections.abc import Sequence

from sensai.util import logging
from sensai.util.logging import StopWatch

from razorsnap.config.listener_config import ListenerConfig
from razorsnap.constants import MSBUILD_PROJECT_DIRECTORY_PROPERTY_NAME, MSBUILD_PROJECT_FULL_PATH_PROPERTY_NAME
from razorsnap.debug import DebuggerWaitHook
from razorsnap.engine import (
    DefaultProjectEngineFactory,
    DefaultTagHelperResolver,
    ProjectEngineFactory,
    RazorProjectEngineBuilder,
    RazorProjectFileSystem,
    TagHelperResolver,
)
from razorsnap.model import ProjectConfigurationSnapshot
from razorsnap.paths import get_target_framework, try_resolve_configuration_output_path
from razorsnap.project import ProjectLoadedEvent, Workspace
from razorsnap.providers import DefaultRazorConfigurationProvider, FallbackConfigurationProvider, RazorConfigurationProvider
from razorsnap.selector import ConfigurationSelector
from razorsnap.writer import SnapshotWriter

log = logging.getLogger(__name__)


def _no_customization(builder: RazorProjectEngineBuilder) -> None:
    pass


class ConfigurationSnapshotBuilder:
    """
    Assembles the configuration snapshot of a loaded project.
    Projects lacking the properties required to do so are skipped, which is not considered an error.
    """

    def __init__(
        self,
        configuration_selector: ConfigurationSelector,
        project_engine_factory: ProjectEngineFactory,
        tag_helper_resolver: TagHelperResolver,
        workspace: Workspace,
        tag_helper_resolution_timeout: float | None = None,
    ) -> None:
        self._configuration_selector = configuration_selector
        self._project_engine_factory = project_engine_factory
        self._tag_helper_resolver = tag_helper_resolver
        self._workspace = workspace
        self._tag_helper_resolution_timeout = tag_helper_resolution_timeout

    async def build(self, event: ProjectLoadedEvent) -> tuple[str, ProjectConfigurationSnapshot] | None:
        """
        :param event: the event of the loaded project
        :return: a pair (path of the configuration document, snapshot), or None if the project is to be skipped
        """
        project_instance = event.project_instance

        config_path = try_resolve_configuration_output_path(project_instance)
        if config_path is None:
            log.debug("Skipping project %s: no intermediate output path", event.project_id)
            return None

        project_file_path = project_instance.get_property_value(MSBUILD_PROJECT_FULL_PATH_PROPERTY_NAME)
        if not project_file_path:
            log.debug("Skipping project %s: no project file path", event.project_id)
            return None

        target_framework = get_target_framework(project_instance)
        if not target_framework:
            log.debug("Skipping project %s: no target framework", event.project_id)
            return None

        razor_configuration = self._configuration_selector.get_razor_configuration(project_instance)
        project_directory = project_instance.get_property_value(MSBUILD_PROJECT_DIRECTORY_PROPERTY_NAME)
        file_system = RazorProjectFileSystem.create(project_directory)
        project_engine = self._project_engine_factory.create(razor_configuration, file_system, _no_customization)
        project = self._workspace.get_project(event.project_id)

        stopwatch = StopWatch()
        tag_helpers = await asyncio.wait_for(
            self._tag_helper_resolver.get_tag_helpers(project, project_engine), timeout=self._tag_helper_resolution_timeout
        )
        log.debug("Resolved %d tag helpers for %s in %s", len(tag_helpers), project_file_path, stopwatch.get_elapsed_time_string())

        snapshot = ProjectConfigurationSnapshot(
            project_file_path=project_file_path,
            configuration=razor_configuration,
            target_framework=target_framework,
            tag_helpers=tuple(tag_helpers),
        )
        return config_path, snapshot


class ProjectLoadListener:
    """
    The entry point invoked by the build host for every project load.

    Every event is processed independently (and possibly concurrently with other events, even for the same project,
    in which case the last write wins). No failure is ever propagated to the build host: errors are logged and the
    event is dropped.
    """

    def __init__(
        self,
        snapshot_builder: ConfigurationSnapshotBuilder,
        writer: SnapshotWriter | None = None,
        debug_hook: DebuggerWaitHook | None = None,
    ) -> None:
        self._snapshot_builder = snapshot_builder
        self._writer = writer or SnapshotWriter()
        self._debug_hook = debug_hook or DebuggerWaitHook()
        self._pending_tasks: set[asyncio.Task[bool]] = set()

    async def project_loaded(self, event: ProjectLoadedEvent) -> bool:
        """
        :return: whether the configuration document of the project was written
        """
        try:
            await self._debug_hook.handle(event.project_instance)

            result = await self._snapshot_builder.build(event)
            if result is None:
                return False
            config_path, snapshot = result
            return self._writer.write(config_path, snapshot)
        except Exception:
            log.exception("Unexpected exception got thrown while processing the load of project %s", event.project_id)
            return False

    def on_project_loaded(self, event: ProjectLoadedEvent) -> "asyncio.Task[bool]":
        """
        Schedules the processing of the given event on the running event loop and returns immediately.
        Must be called from within the event loop.
        """
        task = asyncio.get_running_loop().create_task(self.project_loaded(event), name=f"razor-project-loaded[{event.project_id}]")
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)
        return task

    async def wait_for_pending_events(self) -> None:
        """
        Waits until all events scheduled via :meth:`on_project_loaded` (including ones scheduled while waiting) are processed.
        """
        while self._pending_tasks:
            await asyncio.gather(*list(self._pending_tasks))


def create_default_listener(
    workspace: Workspace,
    config: ListenerConfig | None = None,
    providers: Sequence[RazorConfigurationProvider] | None = None,
    tag_helper_resolver: TagHelperResolver | None = None,
) -> ProjectLoadListener:
    """
    Composes a listener from the standard collaborators.

    :param workspace: the workspace providing the models of indexed projects
    :param config: the listener configuration; if None, the default configuration is used
    :param providers: the configuration providers to consult before the fallback provider, in order of precedence;
        if None, only the default provider is used
    :param tag_helper_resolver: the resolver to use; if None, the tag helpers known to the workspace are used
    """
    config = config or ListenerConfig()
    if providers is None:
        providers = [DefaultRazorConfigurationProvider()]
    selector = ConfigurationSelector(providers, FallbackConfigurationProvider())
    snapshot_builder = ConfigurationSnapshotBuilder(
        selector,
        DefaultProjectEngineFactory(),
        tag_helper_resolver or DefaultTagHelperResolver(),
        workspace,
        tag_helper_resolution_timeout=config.tag_helper_resolution_timeout,
    )
    debug_hook = DebuggerWaitHook(enabled=config.debug_wait_enabled, poll_interval=config.debug_poll_interval)
    return ProjectLoadListener(snapshot_builder, debug_hook=debug_hook)
