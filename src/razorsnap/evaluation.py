"""
Reading of project evaluations dumped to JSON, which allows the listener to be run outside of a build host.

The expected format is::

    {
      "ProjectId": "MyApp",
      "Properties": {"IntermediateOutputPath": "obj/Debug/", ...},
      "Items": {"ProjectCapability": ["DotNetCoreRazor", ...], "RazorConfiguration": [{"Include": "MVC-3.0", "Metadata": {...}}]},
      "TagHelpers": [...]
    }

where "ProjectId" and "TagHelpers" are optional.
"""

import json
import os
from dataclasses import dataclass
from typing import Any

from sensai.util import logging

from razorsnap.constants import MSBUILD_PROJECT_FULL_PATH_PROPERTY_NAME, RAZORSNAP_FILE_ENCODING
from razorsnap.exceptions import ProjectEvaluationError
from razorsnap.model import TagHelperDescriptor
from razorsnap.project import ProjectId, ProjectItem, ProjectLoadedEvent, ProjectModel, ProjectPropertyView
from razorsnap.serialization import tag_helper_from_dict

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectEvaluation:
    event: ProjectLoadedEvent
    tag_helpers: tuple[TagHelperDescriptor, ...]

    def to_project_model(self) -> ProjectModel:
        project_file_path = self.event.project_instance.get_property_value(MSBUILD_PROJECT_FULL_PATH_PROPERTY_NAME)
        name = os.path.splitext(os.path.basename(project_file_path))[0] if project_file_path else str(self.event.project_id)
        return ProjectModel(project_id=self.event.project_id, name=name, assembly_name=name, tag_helpers=self.tag_helpers)


def _parse_item(path: str, item_type: str, raw_item: Any) -> ProjectItem:
    if isinstance(raw_item, str):
        return ProjectItem(raw_item)
    if isinstance(raw_item, dict) and isinstance(raw_item.get("Include"), str):
        metadata = raw_item.get("Metadata", {})
        if not isinstance(metadata, dict) or not all(isinstance(v, str) for v in metadata.values()):
            raise ProjectEvaluationError(path, f"metadata of {item_type} item '{raw_item['Include']}' must map names to strings")
        return ProjectItem(raw_item["Include"], dict(metadata))
    raise ProjectEvaluationError(path, f"invalid {item_type} item {raw_item!r}")


def parse_project_evaluation(data: Any, path: str = "<memory>") -> ProjectEvaluation:
    """
    :param data: the decoded JSON evaluation
    :param path: the origin of the data (for error messages)
    """
    if not isinstance(data, dict):
        raise ProjectEvaluationError(path, "expected a JSON object at the top level")

    properties = data.get("Properties", {})
    if not isinstance(properties, dict) or not all(isinstance(v, str) for v in properties.values()):
        raise ProjectEvaluationError(path, "'Properties' must map property names to strings")

    raw_items = data.get("Items", {})
    if not isinstance(raw_items, dict):
        raise ProjectEvaluationError(path, "'Items' must map item types to lists of items")
    items: dict[str, list[ProjectItem]] = {}
    for item_type, type_items in raw_items.items():
        if not isinstance(type_items, list):
            raise ProjectEvaluationError(path, f"items of type {item_type} must be given as a list")
        items[item_type] = [_parse_item(path, item_type, raw_item) for raw_item in type_items]

    project_instance = ProjectPropertyView(properties, items)
    project_id = data.get("ProjectId") or project_instance.get_property_value(MSBUILD_PROJECT_FULL_PATH_PROPERTY_NAME) or path

    try:
        tag_helpers = tuple(tag_helper_from_dict(d) for d in data.get("TagHelpers", []))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ProjectEvaluationError(path, "invalid tag helper descriptor", cause=e) from e

    return ProjectEvaluation(ProjectLoadedEvent(ProjectId(project_id), project_instance), tag_helpers)


def load_project_evaluation(path: str) -> ProjectEvaluation:
    try:
        with open(path, encoding=RAZORSNAP_FILE_ENCODING) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ProjectEvaluationError(path, "could not read JSON", cause=e) from e
    evaluation = parse_project_evaluation(data, path)
    log.info("Loaded evaluation of project %s with %d tag helpers", evaluation.event.project_id, len(evaluation.tag_helpers))
    return evaluation
