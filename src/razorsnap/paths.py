import os

from razorsnap.constants import (
    INTERMEDIATE_OUTPUT_PATH_PROPERTY_NAME,
    MSBUILD_PROJECT_DIRECTORY_PROPERTY_NAME,
    RAZOR_CONFIGURATION_FILE_NAME,
    TARGET_FRAMEWORK_PROPERTY_NAME,
    TARGET_FRAMEWORK_VERSION_PROPERTY_NAME,
)
from razorsnap.project import ProjectPropertyView


def normalize_separators(path: str) -> str:
    """
    Replaces both forward and backward slashes with the separator of the current platform.
    MSBuild reports paths with whichever separator the project file used.
    """
    return path.replace("\\", os.sep).replace("/", os.sep)


def try_resolve_configuration_output_path(project_instance: ProjectPropertyView) -> str | None:
    """
    Determines where the Razor configuration document of a project is to be written.

    :param project_instance: the evaluated project
    :return: the absolute path of the document inside the project's intermediate output directory,
        or None if the project does not define the properties required to determine it (in which case
        the project is not one we track)
    """
    intermediate_output_path = project_instance.get_property_value(INTERMEDIATE_OUTPUT_PATH_PROPERTY_NAME)
    if not intermediate_output_path:
        return None

    intermediate_output_path = normalize_separators(intermediate_output_path)
    if not os.path.isabs(intermediate_output_path):
        project_directory = project_instance.get_property_value(MSBUILD_PROJECT_DIRECTORY_PROPERTY_NAME)
        if not project_directory:
            return None
        intermediate_output_path = os.path.join(normalize_separators(project_directory), intermediate_output_path)

    return os.path.join(intermediate_output_path, RAZOR_CONFIGURATION_FILE_NAME)


def get_target_framework(project_instance: ProjectPropertyView) -> str:
    """
    :return: the `TargetFramework` of the project or, for legacy projects which do not define it,
        the `TargetFrameworkVersion`; the empty string if neither is defined
    """
    target_framework = project_instance.get_property_value(TARGET_FRAMEWORK_PROPERTY_NAME)
    if not target_framework:
        target_framework = project_instance.get_property_value(TARGET_FRAMEWORK_VERSION_PROPERTY_NAME)
    return target_framework
