import json

import pytest

from armstrong.data_source import DataSource, new_data_source_from_example
from armstrong.reference import Reference
from armstrong.types import Dependency

WORKSPACE_ID = (
    "/subscriptions/34adfa4f-cedf-4dc0-ba29-b6d1a69ab345/resourceGroups/testrg123"
    "/providers/Microsoft.MachineLearningServices/workspaces/workspaces123"
)
EXPECT_EXAMPLE_ID = WORKSPACE_ID + "/computes/compute123"
WORKSPACE_PATTERN = (
    "/subscriptions/resourceGroups/providers/Microsoft.MachineLearningServices/workspaces"
)

EXAMPLE = {
    "parameters": {
        "subscriptionId": "34adfa4f-cedf-4dc0-ba29-b6d1a69ab345",
        "resourceGroupName": "testrg123",
        "workspaceName": "workspaces123",
        "computeName": "compute123",
        "api-version": "2020-06-01",
    },
    "responses": {
        "201": {"body": {"id": EXPECT_EXAMPLE_ID}},
    },
}


@pytest.fixture
def example_path(tmp_path):
    path = tmp_path / "data_source_example.json"
    path.write_text(json.dumps(EXAMPLE), encoding="utf-8")
    return path


def test_new_data_source_from_example(example_path):
    r = new_data_source_from_example(example_path)
    assert r.api_version == "2020-06-01"
    assert r.example_id == EXPECT_EXAMPLE_ID
    assert len(r.property_dependency_mappings) == 1
    assert r.property_dependency_mappings[0].literal_value == WORKSPACE_ID
    assert r.label == ""


def test_required_dependencies(example_path):
    r = new_data_source_from_example(example_path)
    dep = Dependency(
        pattern=WORKSPACE_PATTERN,
        resource_type="azurerm_machine_learning_workspace",
        referred_property="id",
    )
    assert r.required_dependencies(None, [dep]) == [dep]


def test_hcl_with_reference(example_path):
    r = new_data_source_from_example(example_path)
    dep = Dependency(pattern=WORKSPACE_PATTERN, resource_type="azapi_resource", referred_property="id")
    refs = [Reference(label="workspace", type="resource", resource_type="azapi_resource", property_name="id")]
    r.update_property_dependency_mappings_reference([dep], refs)
    r.generate_label(refs)
    text = r.hcl(False)
    assert 'data "azapi_resource" "compute" {' in text
    assert "\tparent_id = azapi_resource.workspace.id\n" in text
    assert '    name = "acctest' in text


def test_hcl_keeps_default_name():
    r = DataSource(
        api_version="2020-06-01",
        example_id=WORKSPACE_ID + "/computes/default",
        label="compute",
    )
    text = r.hcl(True)
    assert '    name = "default"\n' in text
    assert f'\tparent_id = "{WORKSPACE_ID}"\n' in text


def test_missing_api_version(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"parameters": {}}), encoding="utf-8")
    with pytest.raises(ValueError):
        new_data_source_from_example(path)


def test_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        new_data_source_from_example(path)