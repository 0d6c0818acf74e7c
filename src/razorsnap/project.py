"""
The build-side view of a project (evaluated properties and items, the load event) and the workspace
from which already-indexed project models are obtained.
"""

import threading
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import NewType

from sensai.util import logging
from sensai.util.string import ToStringMixin

from razorsnap.model import TagHelperDescriptor

log = logging.getLogger(__name__)

ProjectId = NewType("ProjectId", str)


@dataclass(frozen=True)
class ProjectItem:
    """
    An evaluated MSBuild item, e.g. a `ProjectCapability` or a `ReferencePath`.
    """

    evaluated_include: str
    metadata: Mapping[str, str] = field(default_factory=dict, hash=False)

    def get_metadata_value(self, name: str) -> str:
        """
        :param name: the metadata name
        :return: the metadata value, or the empty string if the item carries no such metadata
        """
        return self.metadata.get(name, "")


class ProjectPropertyView:
    """
    Read-only view over the evaluated properties and items of a project.
    """

    def __init__(self, properties: Mapping[str, str], items: Mapping[str, Iterable[ProjectItem]] | None = None) -> None:
        self._properties = dict(properties)
        self._items: dict[str, tuple[ProjectItem, ...]] = {}
        for item_type, type_items in (items or {}).items():
            self._items[item_type] = tuple(type_items)

    def get_property_value(self, name: str) -> str:
        """
        :param name: the property name
        :return: the evaluated value, or the empty string if the property is not defined
        """
        return self._properties.get(name, "")

    def get_items(self, item_type: str) -> list[ProjectItem]:
        """
        :param item_type: the item type, e.g. "ProjectCapability"
        :return: the items of the given type in evaluation order
        """
        return list(self._items.get(item_type, ()))


@dataclass(frozen=True)
class ProjectLoadedEvent:
    """
    Fired by the build host after it has evaluated (or re-evaluated) a project.
    """

    project_id: ProjectId
    project_instance: ProjectPropertyView


@dataclass(frozen=True)
class ProjectModel(ToStringMixin):
    """
    The workspace's model of a compiled project, including the tag helpers discovered in its compilation.
    """

    project_id: ProjectId
    name: str
    assembly_name: str
    tag_helpers: Sequence[TagHelperDescriptor] = ()

    def _tostring_includes(self) -> list[str]:
        return ["project_id", "name"]


class Workspace:
    """
    Holds the project models indexed so far. A project for which a build event arrives may not have been
    indexed yet.
    """

    def __init__(self, projects: Iterable[ProjectModel] = ()) -> None:
        self._projects: dict[ProjectId, ProjectModel] = {}
        self._lock = threading.Lock()
        for project in projects:
            self.add_project(project)

    def add_project(self, project: ProjectModel) -> None:
        with self._lock:
            if project.project_id in self._projects:
                log.debug("Replacing project model for %s", project.project_id)
            self._projects[project.project_id] = project

    def remove_project(self, project_id: ProjectId) -> None:
        with self._lock:
            self._projects.pop(project_id, None)

    def get_project(self, project_id: ProjectId) -> ProjectModel | None:
        with self._lock:
            return self._projects.get(project_id)
