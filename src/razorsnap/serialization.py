"""
Encoding rules for the `project.razor.json` document consumed by the Razor language server.

The field names follow the language server's expectations (PascalCase). Any change to the encoding must
be reflected in SERIALIZATION_FORMAT_VERSION, since documents written by an older version may still be
present on disk.
"""

import json
from collections.abc import Mapping
from typing import Any

from razorsnap.model import (
    BoundAttributeDescriptor,
    ProjectConfigurationSnapshot,
    RazorConfiguration,
    RazorExtension,
    RazorLanguageVersion,
    RequiredAttributeDescriptor,
    TagHelperDescriptor,
    TagMatchingRuleDescriptor,
)

SERIALIZATION_FORMAT_VERSION = 1
JSON_INDENT = 2


def configuration_to_dict(configuration: RazorConfiguration) -> dict[str, Any]:
    return {
        "ConfigurationName": configuration.configuration_name,
        "LanguageVersion": configuration.language_version.value,
        "Extensions": [{"ExtensionName": extension.extension_name} for extension in configuration.extensions],
    }


def configuration_from_dict(d: Mapping[str, Any]) -> RazorConfiguration:
    if not isinstance(d["LanguageVersion"], str):
        raise ValueError(f"Razor language version must be a string, got {d['LanguageVersion']!r}")
    language_version = RazorLanguageVersion.from_str(d["LanguageVersion"])
    if language_version is None:
        raise ValueError(f"Unknown Razor language version '{d['LanguageVersion']}'")
    extensions = tuple(RazorExtension(e["ExtensionName"]) for e in d.get("Extensions", []))
    return RazorConfiguration(d["ConfigurationName"], language_version, extensions)


def _tag_matching_rule_to_dict(rule: TagMatchingRuleDescriptor) -> dict[str, Any]:
    return {
        "TagName": rule.tag_name,
        "ParentTag": rule.parent_tag,
        "TagStructure": rule.tag_structure,
        "Attributes": [{"Name": a.name, "Value": a.value} for a in rule.attributes],
    }


def _bound_attribute_to_dict(attribute: BoundAttributeDescriptor) -> dict[str, Any]:
    return {
        "Name": attribute.name,
        "TypeName": attribute.type_name,
        "PropertyName": attribute.property_name,
        "IsEnum": attribute.is_enum,
        "Documentation": attribute.documentation,
    }


def tag_helper_to_dict(tag_helper: TagHelperDescriptor) -> dict[str, Any]:
    return {
        "Kind": tag_helper.kind,
        "Name": tag_helper.name,
        "AssemblyName": tag_helper.assembly_name,
        "DisplayName": tag_helper.display_name,
        "Documentation": tag_helper.documentation,
        "TagOutputHint": tag_helper.tag_output_hint,
        "TagMatchingRules": [_tag_matching_rule_to_dict(rule) for rule in tag_helper.tag_matching_rules],
        "BoundAttributes": [_bound_attribute_to_dict(attribute) for attribute in tag_helper.bound_attributes],
        "AllowedChildTags": list(tag_helper.allowed_child_tags),
        # sorted for byte-identical output across runs
        "Metadata": {key: tag_helper.metadata[key] for key in sorted(tag_helper.metadata)},
    }


def tag_helper_from_dict(d: Mapping[str, Any]) -> TagHelperDescriptor:
    rules = tuple(
        TagMatchingRuleDescriptor(
            tag_name=r["TagName"],
            parent_tag=r.get("ParentTag"),
            tag_structure=r.get("TagStructure", "Unspecified"),
            attributes=tuple(RequiredAttributeDescriptor(a["Name"], a.get("Value")) for a in r.get("Attributes", [])),
        )
        for r in d.get("TagMatchingRules", [])
    )
    bound_attributes = tuple(
        BoundAttributeDescriptor(
            name=a["Name"],
            type_name=a["TypeName"],
            property_name=a.get("PropertyName"),
            is_enum=bool(a.get("IsEnum", False)),
            documentation=a.get("Documentation"),
        )
        for a in d.get("BoundAttributes", [])
    )
    return TagHelperDescriptor(
        kind=d["Kind"],
        name=d["Name"],
        assembly_name=d["AssemblyName"],
        display_name=d.get("DisplayName"),
        documentation=d.get("Documentation"),
        tag_output_hint=d.get("TagOutputHint"),
        tag_matching_rules=rules,
        bound_attributes=bound_attributes,
        allowed_child_tags=tuple(d.get("AllowedChildTags", [])),
        metadata=dict(d.get("Metadata", {})),
    )


def snapshot_to_dict(snapshot: ProjectConfigurationSnapshot) -> dict[str, Any]:
    return {
        "ProjectFilePath": snapshot.project_file_path,
        "Configuration": configuration_to_dict(snapshot.configuration) if snapshot.configuration is not None else None,
        "TargetFramework": snapshot.target_framework,
        "TagHelpers": [tag_helper_to_dict(tag_helper) for tag_helper in snapshot.tag_helpers],
    }


def snapshot_from_dict(d: Mapping[str, Any]) -> ProjectConfigurationSnapshot:
    configuration_dict = d.get("Configuration")
    return ProjectConfigurationSnapshot(
        project_file_path=d["ProjectFilePath"],
        configuration=configuration_from_dict(configuration_dict) if configuration_dict is not None else None,
        target_framework=d["TargetFramework"],
        tag_helpers=tuple(tag_helper_from_dict(t) for t in d.get("TagHelpers", [])),
    )


def serialize_snapshot(snapshot: ProjectConfigurationSnapshot) -> str:
    """
    :return: the indented JSON document for the given snapshot
    """
    return json.dumps(snapshot_to_dict(snapshot), indent=JSON_INDENT, ensure_ascii=False)


def deserialize_snapshot(document: str) -> ProjectConfigurationSnapshot:
    """
    :raises ValueError: if the document is not valid JSON (json.JSONDecodeError is a subclass) or lacks a value
    :raises KeyError: if a required field is missing
    """
    d = json.loads(document)
    if not isinstance(d, dict):
        raise ValueError(f"Expected a JSON object, got {type(d).__name__}")
    return snapshot_from_dict(d)
