import pytest

from lithos.outputs import (
    AssetAliasOutputs,
    AssetOutputs,
    AssetWithInitialIconOutputs,
    ExperienceOutputs,
    ImageAssetOutputs,
    NotificationOutputs,
    OutputKind,
    PassOutputs,
    PlaceFileOutputs,
    ProductOutputs,
    RobloxOutputs,
    all_outputs,
    optional_output,
    single_output,
)

SAMPLES = [
    RobloxOutputs(OutputKind.EXPERIENCE, ExperienceOutputs(10, 11)),
    RobloxOutputs(OutputKind.EXPERIENCE_CONFIGURATION),
    RobloxOutputs(OutputKind.EXPERIENCE_ACTIVATION),
    RobloxOutputs(OutputKind.EXPERIENCE_ICON, AssetOutputs(1)),
    RobloxOutputs(OutputKind.EXPERIENCE_THUMBNAIL, AssetOutputs(2)),
    RobloxOutputs(OutputKind.EXPERIENCE_THUMBNAIL_ORDER),
    RobloxOutputs(OutputKind.PLACE, AssetOutputs(3)),
    RobloxOutputs(OutputKind.PLACE_FILE, PlaceFileOutputs(5)),
    RobloxOutputs(OutputKind.PLACE_CONFIGURATION),
    RobloxOutputs(OutputKind.SOCIAL_LINK, AssetOutputs(4)),
    RobloxOutputs(OutputKind.PRODUCT, ProductOutputs(6, 7)),
    RobloxOutputs(OutputKind.PRODUCT_ICON, AssetOutputs(8)),
    RobloxOutputs(OutputKind.PASS, PassOutputs(9, 12)),
    RobloxOutputs(OutputKind.BADGE, AssetWithInitialIconOutputs(13, 14)),
    RobloxOutputs(OutputKind.BADGE_ICON, AssetOutputs(15)),
    RobloxOutputs(OutputKind.IMAGE_ASSET, ImageAssetOutputs(16, None)),
    RobloxOutputs(OutputKind.AUDIO_ASSET, AssetOutputs(17)),
    RobloxOutputs(OutputKind.ASSET_ALIAS, AssetAliasOutputs("Images/a.png")),
    RobloxOutputs(OutputKind.SPATIAL_VOICE),
    RobloxOutputs(OutputKind.NOTIFICATION, NotificationOutputs("n-1")),
]


@pytest.mark.parametrize("outputs", SAMPLES, ids=lambda o: o.kind.value)
def test_round_trip(outputs):
    assert RobloxOutputs.from_data(outputs.to_data()) == outputs


def test_camel_case_fields():
    data = RobloxOutputs(OutputKind.EXPERIENCE, ExperienceOutputs(10, 11)).to_data()
    assert data == {"experience": {"assetId": 10, "startPlaceId": 11}}


def test_unit_kind_serializes_as_tag():
    assert RobloxOutputs(OutputKind.SPATIAL_VOICE).to_data() == "spatialVoice"


def test_wrong_payload_raises():
    with pytest.raises(TypeError):
        RobloxOutputs(OutputKind.PASS, AssetOutputs(1))


def test_unknown_tag_raises():
    with pytest.raises(ValueError):
        RobloxOutputs.from_data("nothing")


def test_all_outputs_keeps_order():
    outputs = [
        RobloxOutputs(OutputKind.EXPERIENCE_THUMBNAIL, AssetOutputs(1)),
        RobloxOutputs(OutputKind.EXPERIENCE, ExperienceOutputs(10, 11)),
        RobloxOutputs(OutputKind.EXPERIENCE_THUMBNAIL, AssetOutputs(2)),
    ]
    thumbnails = all_outputs(outputs, OutputKind.EXPERIENCE_THUMBNAIL)
    assert [t.asset_id for t in thumbnails] == [1, 2]


def test_single_output_returns_first():
    outputs = [
        RobloxOutputs(OutputKind.PLACE, AssetOutputs(3)),
        RobloxOutputs(OutputKind.PLACE, AssetOutputs(4)),
    ]
    assert single_output(outputs, OutputKind.PLACE) == AssetOutputs(3)


def test_single_output_missing_raises():
    with pytest.raises(LookupError):
        single_output([RobloxOutputs(OutputKind.PLACE, AssetOutputs(3))], OutputKind.EXPERIENCE)


def test_optional_output():
    outputs = [RobloxOutputs(OutputKind.AUDIO_ASSET, AssetOutputs(17))]
    assert optional_output(outputs, OutputKind.AUDIO_ASSET) == AssetOutputs(17)
    assert optional_output(outputs, OutputKind.IMAGE_ASSET) is None