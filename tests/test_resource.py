import pytest
import yaml

from lithos.inputs import InputKind, PlaceInputs, ProductInputs, RobloxInputs
from lithos.outputs import AssetOutputs, ExperienceOutputs, OutputKind, RobloxOutputs
from lithos.resource import RobloxResource, yaml_hash


def _experience():
    return RobloxResource.existing(
        "experience_singleton",
        RobloxInputs.from_data({"experience": {"groupId": None}}),
        RobloxOutputs(OutputKind.EXPERIENCE, ExperienceOutputs(10, 11)),
    )


def test_unit_inputs_hash_is_tag():
    resource = RobloxResource("order", RobloxInputs(InputKind.EXPERIENCE_THUMBNAIL_ORDER))
    assert resource.inputs_hash() == "experienceThumbnailOrder"


def test_inputs_hash_is_block_yaml():
    resource = RobloxResource("place_start", RobloxInputs(InputKind.PLACE, PlaceInputs(True)))
    assert resource.inputs_hash() == "place:\n  isStart: true"


def test_inputs_hash_parses_back_to_data():
    inputs = RobloxInputs(InputKind.PRODUCT, ProductInputs("Gems", "Shiny", 25))
    resource = RobloxResource("product_gems", inputs)
    assert yaml.safe_load(resource.inputs_hash()) == inputs.to_data()


def test_inputs_hash_changes_with_inputs():
    first = RobloxResource("p", RobloxInputs(InputKind.PLACE, PlaceInputs(True)))
    second = RobloxResource("p", RobloxInputs(InputKind.PLACE, PlaceInputs(False)))
    assert first.inputs_hash() != second.inputs_hash()
    assert yaml.safe_load(second.inputs_hash()) == {"place": {"isStart": False}}


def test_outputs_hash_reflects_outputs():
    resource = _experience()
    assert yaml.safe_load(resource.outputs_hash()) == resource.outputs.to_data()


def test_outputs_hash_without_outputs_loads_as_none():
    resource = RobloxResource("p", RobloxInputs(InputKind.PLACE, PlaceInputs(True)))
    assert yaml.safe_load(resource.outputs_hash()) is None


def test_yaml_hash_has_no_trailing_whitespace():
    text = yaml_hash([{"place": {"assetId": 1}}])
    assert text == text.rstrip()
    assert yaml.safe_load(text) == [{"place": {"assetId": 1}}]


def test_yaml_hash_empty_list():
    assert yaml_hash([]) == "[]"


def test_existing_records_dependencies_and_outputs():
    experience = _experience()
    place = RobloxResource.existing(
        "place_start",
        RobloxInputs(InputKind.PLACE, PlaceInputs(True)),
        RobloxOutputs(OutputKind.PLACE, AssetOutputs(11)),
        [experience],
    )
    assert place.dependencies == ["experience_singleton"]
    assert place.outputs == RobloxOutputs(OutputKind.PLACE, AssetOutputs(11))


def test_add_dependency_chains():
    experience = _experience()
    other = RobloxResource("other", RobloxInputs(InputKind.SPATIAL_VOICE, None)
                           if False else RobloxInputs(InputKind.EXPERIENCE_THUMBNAIL_ORDER))
    place = RobloxResource("place", RobloxInputs(InputKind.PLACE, PlaceInputs(False)))
    result = place.add_dependency(experience).add_dependency(other)
    assert result is place
    assert place.dependencies == ["experience_singleton", "other"]


def test_new_resource_has_no_outputs():
    resource = RobloxResource("p", RobloxInputs(InputKind.PLACE, PlaceInputs(True)))
    assert resource.outputs is None
    assert resource.dependencies == []


def test_data_round_trip():
    experience = _experience()
    place = RobloxResource("place", RobloxInputs(InputKind.PLACE, PlaceInputs(False)))
    place.add_dependency(experience)
    for resource in (experience, place):
        assert RobloxResource.from_data(resource.to_data()) == resource


def test_data_uses_serialized_inputs_and_outputs():
    data = _experience().to_data()
    assert data["outputs"] == {"experience": {"assetId": 10, "startPlaceId": 11}}
    assert data["inputs"] == {"experience": {"groupId": None}}


def test_from_data_missing_inputs_raises():
    with pytest.raises(ValueError):
        RobloxResource.from_data({"id": "x"})