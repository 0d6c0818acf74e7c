import logging
from collections.abc import Callable, Mapping, Sequence

import pytest
from sensai.util.logging import configure

from razorsnap.model import (
    BoundAttributeDescriptor,
    RazorConfiguration,
    RazorExtension,
    RazorLanguageVersion,
    RequiredAttributeDescriptor,
    TagHelperDescriptor,
    TagMatchingRuleDescriptor,
)
from razorsnap.project import ProjectId, ProjectItem, ProjectLoadedEvent, ProjectPropertyView
from razorsnap.providers import RazorConfigurationProvider, RazorConfigurationProviderContext

configure(level=logging.INFO)


class CapabilityProvider(RazorConfigurationProvider):
    """Test provider which applies to all projects declaring a given capability."""

    def __init__(self, capability: str, configuration: RazorConfiguration | None) -> None:
        self.capability = capability
        self.configuration = configuration
        self.num_calls = 0

    def try_resolve_configuration(self, context: RazorConfigurationProviderContext) -> RazorConfiguration | None:
        self.num_calls += 1
        if context.has_capability(self.capability):
            return self.configuration
        return None


def make_project_instance(
    properties: Mapping[str, str], capabilities: Sequence[str] = (), items: Mapping[str, Sequence[ProjectItem]] | None = None
) -> ProjectPropertyView:
    all_items = dict(items or {})
    all_items["ProjectCapability"] = [ProjectItem(c) for c in capabilities]
    return ProjectPropertyView(properties, all_items)


@pytest.fixture
def make_event() -> Callable[..., ProjectLoadedEvent]:
    def factory(
        properties: Mapping[str, str],
        capabilities: Sequence[str] = (),
        items: Mapping[str, Sequence[ProjectItem]] | None = None,
        project_id: str = "proj",
    ) -> ProjectLoadedEvent:
        return ProjectLoadedEvent(ProjectId(project_id), make_project_instance(properties, capabilities, items))

    return factory


@pytest.fixture
def mvc_configuration() -> RazorConfiguration:
    return RazorConfiguration("MVC-3.0", RazorLanguageVersion.VERSION_3_0, (RazorExtension("MVC-3.0"),))


@pytest.fixture
def tag_helpers() -> list[TagHelperDescriptor]:
    return [
        TagHelperDescriptor(
            kind="ITagHelper",
            name="Microsoft.AspNetCore.Mvc.TagHelpers.AnchorTagHelper",
            assembly_name="Microsoft.AspNetCore.Mvc.TagHelpers",
            display_name="AnchorTagHelper",
            tag_matching_rules=(TagMatchingRuleDescriptor("a", attributes=(RequiredAttributeDescriptor("asp-action"),)),),
            bound_attributes=(BoundAttributeDescriptor("asp-action", "System.String", property_name="Action"),),
            metadata={"Common.TypeName": "Microsoft.AspNetCore.Mvc.TagHelpers.AnchorTagHelper", "Common.ClassifyAttributesOnly": "False"},
        ),
        TagHelperDescriptor(
            kind="Components.Component",
            name="MyApp.Shared.NavMenu",
            assembly_name="MyApp",
            tag_matching_rules=(TagMatchingRuleDescriptor("NavMenu"),),
        ),
    ]
