import asyncio
import os

import pytest

from razorsnap.engine import DefaultProjectEngineFactory, DefaultTagHelperResolver, RazorProjectFileSystem, TagHelperKind
from razorsnap.model import FallbackRazorConfiguration, RazorConfiguration, RazorLanguageVersion
from razorsnap.project import ProjectId, ProjectModel, Workspace


def _no_customization(builder) -> None:
    pass


class TestRazorProjectFileSystem:
    def test_empty_root_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            RazorProjectFileSystem.create("")

    def test_root_is_normalized(self) -> None:
        file_system = RazorProjectFileSystem.create("/repo\\proj/")
        assert file_system.root == os.sep.join(["", "repo", "proj"])


class TestDefaultProjectEngineFactory:
    def test_default_configuration_when_none_resolved(self) -> None:
        engine = DefaultProjectEngineFactory().create(None, RazorProjectFileSystem.create("/repo/proj"), _no_customization)
        assert engine.configuration == RazorConfiguration.DEFAULT
        assert TagHelperKind.COMPONENT in engine.tag_helper_kinds

    def test_mvc_2_1_supports_view_components_but_not_components(self) -> None:
        engine = DefaultProjectEngineFactory().create(
            FallbackRazorConfiguration.MVC_2_1, RazorProjectFileSystem.create("/repo/proj"), _no_customization
        )
        assert engine.tag_helper_kinds == {TagHelperKind.DEFAULT, TagHelperKind.VIEW_COMPONENT}

    def test_customization_callback_is_applied(self) -> None:
        def configure(builder) -> None:
            builder.tag_helper_kinds.discard(TagHelperKind.VIEW_COMPONENT)

        engine = DefaultProjectEngineFactory().create(
            FallbackRazorConfiguration.MVC_3_0, RazorProjectFileSystem.create("/repo/proj"), configure
        )
        assert TagHelperKind.VIEW_COMPONENT not in engine.tag_helper_kinds
        assert TagHelperKind.COMPONENT in engine.tag_helper_kinds


class TestDefaultTagHelperResolver:
    def test_absent_project_yields_no_tag_helpers(self) -> None:
        engine = DefaultProjectEngineFactory().create(None, RazorProjectFileSystem.create("/repo/proj"), _no_customization)
        assert asyncio.run(DefaultTagHelperResolver().get_tag_helpers(None, engine)) == []

    def test_filters_unsupported_kinds_preserving_order(self, tag_helpers) -> None:
        project = ProjectModel(ProjectId("proj"), "proj", "proj", tuple(tag_helpers))
        legacy_configuration = RazorConfiguration("MVC-2.1", RazorLanguageVersion.VERSION_2_1)
        legacy_engine = DefaultProjectEngineFactory().create(
            legacy_configuration, RazorProjectFileSystem.create("/repo/proj"), _no_customization
        )
        modern_engine = DefaultProjectEngineFactory().create(None, RazorProjectFileSystem.create("/repo/proj"), _no_customization)

        assert asyncio.run(DefaultTagHelperResolver().get_tag_helpers(project, legacy_engine)) == [tag_helpers[0]]
        assert asyncio.run(DefaultTagHelperResolver().get_tag_helpers(project, modern_engine)) == tag_helpers


class TestWorkspace:
    def test_get_add_remove(self) -> None:
        project = ProjectModel(ProjectId("proj"), "proj", "proj")
        workspace = Workspace([project])
        assert workspace.get_project(ProjectId("proj")) == project
        assert workspace.get_project(ProjectId("other")) is None
        workspace.remove_project(ProjectId("proj"))
        assert workspace.get_project(ProjectId("proj")) is None
