"""
Providers which determine a project's Razor configuration from its evaluated MSBuild state.

Providers are consulted in order by the :class:`~razorsnap.selector.ConfigurationSelector`; they must be
stateless and deterministic, i.e. the result may depend on the context only.
"""

import ntpath
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from overrides import override
from sensai.util import logging

from razorsnap.constants import (
    EXTENSIONS_METADATA_NAME,
    FUSION_NAME_METADATA_NAME,
    MVC_RAZOR_ASSEMBLY_FILE_NAME,
    RAZOR_CONFIGURATION_ITEM_TYPE,
    RAZOR_CORE_CAPABILITY,
    RAZOR_CORE_CONFIGURATION_CAPABILITY,
    RAZOR_DEFAULT_CONFIGURATION_PROPERTY_NAME,
    RAZOR_EXTENSION_ITEM_TYPE,
    RAZOR_LANG_VERSION_PROPERTY_NAME,
    REFERENCE_PATH_ITEM_TYPE,
    VERSION_METADATA_NAME,
)
from razorsnap.model import FallbackRazorConfiguration, RazorConfiguration, RazorExtension, RazorLanguageVersion
from razorsnap.project import ProjectItem, ProjectPropertyView

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RazorConfigurationProviderContext:
    project_capabilities: Sequence[str]
    project_instance: ProjectPropertyView

    def has_capability(self, capability: str) -> bool:
        return capability in self.project_capabilities


class RazorConfigurationProvider(ABC):
    @abstractmethod
    def try_resolve_configuration(self, context: RazorConfigurationProviderContext) -> RazorConfiguration | None:
        """
        :param context: the capabilities and evaluated state of the project
        :return: the configuration if this provider applies to the project, None otherwise
        """


class DefaultRazorConfigurationProvider(RazorConfigurationProvider):
    """
    Resolves the configuration declared by the Razor SDK: the `RazorDefaultConfiguration` property names a
    `RazorConfiguration` item, whose `Extensions` metadata lists the `RazorExtension` items to enable.
    """

    @override
    def try_resolve_configuration(self, context: RazorConfigurationProviderContext) -> RazorConfiguration | None:
        if not context.has_capability(RAZOR_CORE_CAPABILITY):
            return None
        if not context.has_capability(RAZOR_CORE_CONFIGURATION_CAPABILITY):
            return None
        return self.get_configuration(context.project_instance)

    @classmethod
    def get_configuration(cls, project_instance: ProjectPropertyView) -> RazorConfiguration | None:
        configuration_item = cls._get_configuration_item(project_instance)
        if configuration_item is None:
            return None

        language_version_str = project_instance.get_property_value(RAZOR_LANG_VERSION_PROPERTY_NAME)
        language_version = RazorLanguageVersion.from_str(language_version_str) if language_version_str else None
        if language_version is None:
            log.debug(
                "Project declares Razor configuration '%s' without a valid %s",
                configuration_item.evaluated_include,
                RAZOR_LANG_VERSION_PROPERTY_NAME,
            )
            return None

        extension_names = cls.get_configured_extension_names(configuration_item)
        extensions = tuple(
            RazorExtension(item.evaluated_include)
            for item in project_instance.get_items(RAZOR_EXTENSION_ITEM_TYPE)
            if item.evaluated_include in extension_names
        )
        return RazorConfiguration(configuration_item.evaluated_include, language_version, extensions)

    @staticmethod
    def _get_configuration_item(project_instance: ProjectPropertyView) -> ProjectItem | None:
        default_configuration = project_instance.get_property_value(RAZOR_DEFAULT_CONFIGURATION_PROPERTY_NAME)
        if not default_configuration:
            return None
        for item in project_instance.get_items(RAZOR_CONFIGURATION_ITEM_TYPE):
            if item.evaluated_include == default_configuration:
                return item
        return None

    @staticmethod
    def get_configured_extension_names(configuration_item: ProjectItem) -> list[str]:
        extension_names = configuration_item.get_metadata_value(EXTENSIONS_METADATA_NAME)
        return [name.strip() for name in extension_names.split(";") if name.strip()]


class FallbackConfigurationProvider(RazorConfigurationProvider):
    """
    Infers the configuration of projects which use Razor without declaring a configuration (pre-SDK MVC projects)
    from the version of the MVC Razor assembly they reference.
    """

    _FUSION_NAME_VERSION_PATTERN = re.compile(r"Version=(\d+(?:\.\d+)+)")

    @override
    def try_resolve_configuration(self, context: RazorConfigurationProviderContext) -> RazorConfiguration | None:
        if not context.has_capability(RAZOR_CORE_CAPABILITY):
            return None

        mvc_reference = self._find_mvc_reference(context.project_instance)
        if mvc_reference is None:
            return None

        mvc_version = self.get_assembly_version(mvc_reference)
        if mvc_version is None:
            log.debug("Could not determine the version of MVC reference %s", mvc_reference.evaluated_include)
            return None
        return FallbackRazorConfiguration.select_configuration(mvc_version)

    @staticmethod
    def _find_mvc_reference(project_instance: ProjectPropertyView) -> ProjectItem | None:
        for reference in project_instance.get_items(REFERENCE_PATH_ITEM_TYPE):
            # reference paths may use either separator regardless of the platform we run on
            if ntpath.basename(reference.evaluated_include).lower() == MVC_RAZOR_ASSEMBLY_FILE_NAME.lower():
                return reference
        return None

    @classmethod
    def get_assembly_version(cls, reference: ProjectItem) -> tuple[int, ...] | None:
        version_str = reference.get_metadata_value(VERSION_METADATA_NAME)
        if not version_str:
            m = cls._FUSION_NAME_VERSION_PATTERN.search(reference.get_metadata_value(FUSION_NAME_METADATA_NAME))
            if m is None:
                return None
            version_str = m.group(1)
        try:
            version = tuple(int(part) for part in version_str.strip().split("."))
        except ValueError:
            return None
        if len(version) < 2:
            return None
        return version
