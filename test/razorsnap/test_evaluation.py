import json

import pytest

from razorsnap.evaluation import load_project_evaluation, parse_project_evaluation
from razorsnap.exceptions import ProjectEvaluationError
from razorsnap.serialization import tag_helper_to_dict


def _evaluation_data(tag_helpers=()) -> dict:
    return {
        "ProjectId": "MyApp",
        "Properties": {
            "IntermediateOutputPath": "obj/Debug/",
            "MSBuildProjectDirectory": "/repo/MyApp",
            "MSBuildProjectFullPath": "/repo/MyApp/MyApp.csproj",
            "TargetFramework": "net6.0",
        },
        "Items": {
            "ProjectCapability": ["DotNetCoreRazor", "DotNetCoreRazorConfiguration"],
            "RazorConfiguration": [{"Include": "MVC-3.0", "Metadata": {"Extensions": "MVC-3.0"}}],
        },
        "TagHelpers": [tag_helper_to_dict(t) for t in tag_helpers],
    }


class TestParseProjectEvaluation:
    def test_parse(self, tag_helpers) -> None:
        evaluation = parse_project_evaluation(_evaluation_data(tag_helpers))

        assert evaluation.event.project_id == "MyApp"
        project_instance = evaluation.event.project_instance
        assert project_instance.get_property_value("TargetFramework") == "net6.0"
        assert [i.evaluated_include for i in project_instance.get_items("ProjectCapability")] == [
            "DotNetCoreRazor",
            "DotNetCoreRazorConfiguration",
        ]
        assert project_instance.get_items("RazorConfiguration")[0].get_metadata_value("Extensions") == "MVC-3.0"
        assert evaluation.tag_helpers == tuple(tag_helpers)

    def test_project_model(self, tag_helpers) -> None:
        model = parse_project_evaluation(_evaluation_data(tag_helpers)).to_project_model()
        assert model.project_id == "MyApp"
        assert model.name == "MyApp"
        assert model.tag_helpers == tuple(tag_helpers)

    def test_project_id_defaults_to_project_file(self) -> None:
        data = _evaluation_data()
        del data["ProjectId"]
        assert parse_project_evaluation(data).event.project_id == "/repo/MyApp/MyApp.csproj"

    def test_optional_sections(self) -> None:
        evaluation = parse_project_evaluation({}, "empty.json")
        assert evaluation.event.project_id == "empty.json"
        assert evaluation.event.project_instance.get_property_value("TargetFramework") == ""
        assert evaluation.tag_helpers == ()

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"Properties": {"TargetFramework": 6}},
            {"Items": ["DotNetCoreRazor"]},
            {"Items": {"ProjectCapability": "DotNetCoreRazor"}},
            {"Items": {"RazorConfiguration": [{"Metadata": {}}]}},
            {"Items": {"RazorConfiguration": [{"Include": "MVC-3.0", "Metadata": {"Extensions": ["MVC-3.0"]}}]}},
            {"TagHelpers": [{"Name": "NoKind"}]},
            {"TagHelpers": [{"Kind": "ITagHelper", "Name": "Anchor", "AssemblyName": "Mvc", "Metadata": "ab"}]},
        ],
    )
    def test_invalid(self, data) -> None:
        with pytest.raises(ProjectEvaluationError, match="evaluation.json"):
            parse_project_evaluation(data, "evaluation.json")


class TestLoadProjectEvaluation:
    def test_load(self, tmp_path, tag_helpers) -> None:
        path = tmp_path / "evaluation.json"
        path.write_text(json.dumps(_evaluation_data(tag_helpers)), encoding="utf-8")
        assert len(load_project_evaluation(str(path)).tag_helpers) == 2

    def test_malformed_json(self, tmp_path) -> None:
        path = tmp_path / "evaluation.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ProjectEvaluationError) as e:
            load_project_evaluation(str(path))
        assert e.value.path == str(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ProjectEvaluationError):
            load_project_evaluation(str(tmp_path / "missing.json"))
