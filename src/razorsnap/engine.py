"""
The Razor project engine and the collaborators that produce one and use it to resolve a project's tag helpers.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from overrides import override
from sensai.util import logging

from razorsnap.model import RazorConfiguration, RazorLanguageVersion, TagHelperDescriptor
from razorsnap.paths import normalize_separators
from razorsnap.project import ProjectModel

log = logging.getLogger(__name__)


class TagHelperKind:
    DEFAULT = "ITagHelper"
    VIEW_COMPONENT = "MVC.ViewComponent"
    COMPONENT = "Components.Component"
    BIND = "Components.Bind"
    EVENT_HANDLER = "Components.EventHandler"
    REF = "Components.Ref"
    KEY = "Components.Key"

    COMPONENT_KINDS = (COMPONENT, BIND, EVENT_HANDLER, REF, KEY)


class RazorProjectFileSystem:
    """
    The file system view of a project used by the project engine, rooted at the project directory.
    """

    def __init__(self, root: str) -> None:
        self.root = root

    @classmethod
    def create(cls, root_directory_path: str) -> "RazorProjectFileSystem":
        if not root_directory_path:
            raise ValueError("The root directory path of a Razor project file system must not be empty")
        root = normalize_separators(root_directory_path)
        if len(root) > 1:
            root = root.rstrip(os.sep)
        return cls(root)


@dataclass(frozen=True)
class RazorProjectEngine:
    configuration: RazorConfiguration
    file_system: RazorProjectFileSystem
    tag_helper_kinds: frozenset[str]

    def supports(self, tag_helper: TagHelperDescriptor) -> bool:
        return tag_helper.kind in self.tag_helper_kinds


class RazorProjectEngineBuilder:
    def __init__(self, configuration: RazorConfiguration, file_system: RazorProjectFileSystem) -> None:
        self.configuration = configuration
        self.file_system = file_system
        self.tag_helper_kinds: set[str] = set()

    def build(self) -> RazorProjectEngine:
        return RazorProjectEngine(self.configuration, self.file_system, frozenset(self.tag_helper_kinds))


class ProjectEngineFactory(ABC):
    @abstractmethod
    def create(
        self,
        configuration: RazorConfiguration | None,
        file_system: RazorProjectFileSystem,
        configure: Callable[[RazorProjectEngineBuilder], None],
    ) -> RazorProjectEngine:
        """
        :param configuration: the project's configuration; if None, the default configuration is assumed
        :param file_system: the file system of the project
        :param configure: a callback which may customise the engine before it is built
        """


class DefaultProjectEngineFactory(ProjectEngineFactory):
    """
    Creates engines whose supported tag helper kinds follow from the configuration: MVC extensions add view
    components and language version 3.0 introduced components.
    """

    @override
    def create(
        self,
        configuration: RazorConfiguration | None,
        file_system: RazorProjectFileSystem,
        configure: Callable[[RazorProjectEngineBuilder], None],
    ) -> RazorProjectEngine:
        builder = RazorProjectEngineBuilder(configuration or RazorConfiguration.DEFAULT, file_system)
        builder.tag_helper_kinds.add(TagHelperKind.DEFAULT)
        if any(name.startswith("MVC-") for name in builder.configuration.extension_names):
            builder.tag_helper_kinds.add(TagHelperKind.VIEW_COMPONENT)
        if builder.configuration.language_version.as_tuple() >= RazorLanguageVersion.VERSION_3_0.as_tuple():
            builder.tag_helper_kinds.update(TagHelperKind.COMPONENT_KINDS)
        configure(builder)
        return builder.build()


class TagHelperResolver(ABC):
    @abstractmethod
    async def get_tag_helpers(self, project: ProjectModel | None, project_engine: RazorProjectEngine) -> list[TagHelperDescriptor]:
        """
        :param project: the workspace's model of the project; None if the workspace has not indexed the project yet,
            in which case implementations shall degrade gracefully rather than raise
        :param project_engine: the engine configured for the project
        :return: the project's tag helpers in discovery order
        """


class DefaultTagHelperResolver(TagHelperResolver):
    """
    Resolves the tag helpers discovered by the workspace which the project engine supports.
    """

    @override
    async def get_tag_helpers(self, project: ProjectModel | None, project_engine: RazorProjectEngine) -> list[TagHelperDescriptor]:
        if project is None:
            log.debug("Project not (yet) known to the workspace; no tag helpers resolved")
            return []
        tag_helpers = [tag_helper for tag_helper in project.tag_helpers if project_engine.supports(tag_helper)]
        num_unsupported = len(project.tag_helpers) - len(tag_helpers)
        if num_unsupported > 0:
            log.debug(
                "Ignoring %d tag helpers of %s not supported by configuration %s", num_unsupported, project, project_engine.configuration
            )
        return tag_helpers
