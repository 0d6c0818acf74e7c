"""
Value types describing a project's Razor configuration and the snapshot persisted for the language server.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Self

from sensai.util.string import ToStringMixin


class RazorLanguageVersion(Enum):
    """
    The Razor language versions known to razorsnap.
    """

    VERSION_1_0 = "1.0"
    VERSION_1_1 = "1.1"
    VERSION_2_0 = "2.0"
    VERSION_2_1 = "2.1"
    VERSION_3_0 = "3.0"
    VERSION_5_0 = "5.0"
    VERSION_6_0 = "6.0"
    VERSION_7_0 = "7.0"
    VERSION_8_0 = "8.0"
    EXPERIMENTAL = "Experimental"
    LATEST = "8.0"
    """Alias of the most recent released version"""

    @classmethod
    def from_str(cls, version_str: str) -> Self | None:
        """
        :param version_str: a version such as "2.1" or "3.0.0", or one of "Latest"/"Experimental" (case-insensitive)
        :return: the version or None if the string does not denote a known version
        """
        version_str = version_str.strip()
        if version_str.lower() == "latest":
            return cls.LATEST
        if version_str.lower() == "experimental":
            return cls.EXPERIMENTAL
        m = re.fullmatch(r"(\d+)\.(\d+)(?:\.0)?", version_str)
        if m is None:
            return None
        normalised = f"{int(m.group(1))}.{int(m.group(2))}"
        for version in cls:
            if version.value == normalised:
                return version
        return None

    def as_tuple(self) -> tuple[int, int]:
        """
        :return: (major, minor); the experimental version sorts above all released versions
        """
        if self is RazorLanguageVersion.EXPERIMENTAL:
            return 1337, 1337
        major, minor = self.value.split(".")
        return int(major), int(minor)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RazorExtension:
    extension_name: str


@dataclass(frozen=True)
class RazorConfiguration(ToStringMixin):
    """
    Identifies the Razor language configuration active for a project.
    """

    configuration_name: str
    language_version: RazorLanguageVersion
    extensions: tuple[RazorExtension, ...] = ()

    DEFAULT: ClassVar["RazorConfiguration"]
    """The configuration assumed by the project engine when no configuration could be determined"""

    @property
    def extension_names(self) -> list[str]:
        return [extension.extension_name for extension in self.extensions]

    def _tostring_includes(self) -> list[str]:
        return ["configuration_name", "language_version"]


RazorConfiguration.DEFAULT = RazorConfiguration("Default", RazorLanguageVersion.LATEST)


def _mvc_configuration(name: str, version: RazorLanguageVersion) -> RazorConfiguration:
    return RazorConfiguration(name, version, (RazorExtension(name),))


class FallbackRazorConfiguration:
    """
    Configurations assumed for projects that reference MVC but do not declare a Razor configuration themselves.
    """

    MVC_1_0 = _mvc_configuration("MVC-1.0", RazorLanguageVersion.VERSION_1_0)
    MVC_1_1 = _mvc_configuration("MVC-1.1", RazorLanguageVersion.VERSION_1_1)
    MVC_2_0 = _mvc_configuration("MVC-2.0", RazorLanguageVersion.VERSION_2_0)
    MVC_2_1 = _mvc_configuration("MVC-2.1", RazorLanguageVersion.VERSION_2_1)
    MVC_3_0 = _mvc_configuration("MVC-3.0", RazorLanguageVersion.VERSION_3_0)
    LATEST = MVC_3_0

    @classmethod
    def select_configuration(cls, mvc_version: tuple[int, ...]) -> RazorConfiguration:
        """
        :param mvc_version: the version of the referenced MVC Razor assembly, at least (major, minor)
        :return: the matching configuration; unknown versions map to the latest configuration
        """
        major_minor = tuple(mvc_version[:2])
        match major_minor:
            case (1, 0):
                return cls.MVC_1_0
            case (1, 1):
                return cls.MVC_1_1
            case (2, 0):
                return cls.MVC_2_0
            case (2, 1):
                return cls.MVC_2_1
            case _:
                return cls.LATEST


@dataclass(frozen=True)
class RequiredAttributeDescriptor:
    name: str
    value: str | None = None


@dataclass(frozen=True)
class TagMatchingRuleDescriptor:
    tag_name: str
    parent_tag: str | None = None
    tag_structure: str = "Unspecified"
    attributes: tuple[RequiredAttributeDescriptor, ...] = ()


@dataclass(frozen=True)
class BoundAttributeDescriptor:
    name: str
    type_name: str
    property_name: str | None = None
    is_enum: bool = False
    documentation: str | None = None


@dataclass(frozen=True)
class TagHelperDescriptor(ToStringMixin):
    """
    A discovered tag helper. The pipeline treats descriptors as opaque values and never inspects them
    beyond their kind, which the project engine uses to decide whether it supports them.
    """

    kind: str
    name: str
    assembly_name: str
    display_name: str | None = None
    documentation: str | None = None
    tag_output_hint: str | None = None
    tag_matching_rules: tuple[TagMatchingRuleDescriptor, ...] = ()
    bound_attributes: tuple[BoundAttributeDescriptor, ...] = ()
    allowed_child_tags: tuple[str, ...] = ()
    metadata: Mapping[str, str] = field(default_factory=dict, hash=False)

    def _tostring_includes(self) -> list[str]:
        return ["kind", "name", "assembly_name"]


@dataclass(frozen=True)
class ProjectConfigurationSnapshot(ToStringMixin):
    """
    The unit persisted to disk for the language server: everything it needs to know about a project's Razor setup.
    """

    project_file_path: str
    configuration: RazorConfiguration | None
    target_framework: str
    tag_helpers: Sequence[TagHelperDescriptor] = ()

    def _tostring_includes(self) -> list[str]:
        return ["project_file_path", "target_framework", "configuration"]

    def _tostring_additional_entries(self) -> dict[str, int]:
        return {"num_tag_helpers": len(self.tag_helpers)}
