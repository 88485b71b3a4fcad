"""Realized-state output records for Roblox resources."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import auto
from typing import Any

from lithos.inputs import _check_payload, _tagged_from_data, _tagged_to_data, _TaggedKind


@dataclass
class ExperienceOutputs:
    asset_id: int
    start_place_id: int


@dataclass
class AssetOutputs:
    asset_id: int


@dataclass
class NotificationOutputs:
    id: str


@dataclass
class PlaceFileOutputs:
    version: int


@dataclass
class ProductOutputs:
    asset_id: int
    product_id: int


@dataclass
class PassOutputs:
    asset_id: int
    icon_asset_id: int


@dataclass
class AssetWithInitialIconOutputs:
    asset_id: int
    initial_icon_asset_id: int


@dataclass
class ImageAssetOutputs:
    asset_id: int
    decal_asset_id: int | None


@dataclass
class AssetAliasOutputs:
    name: str


class OutputKind(_TaggedKind):
    """The kinds of resource outputs, valued by their serialized tag."""

    EXPERIENCE = auto()
    EXPERIENCE_CONFIGURATION = auto()
    EXPERIENCE_ACTIVATION = auto()
    EXPERIENCE_ICON = auto()
    EXPERIENCE_THUMBNAIL = auto()
    EXPERIENCE_THUMBNAIL_ORDER = auto()
    PLACE = auto()
    PLACE_FILE = auto()
    PLACE_CONFIGURATION = auto()
    SOCIAL_LINK = auto()
    PRODUCT = auto()
    PRODUCT_ICON = auto()
    PASS = auto()
    BADGE = auto()
    BADGE_ICON = auto()
    IMAGE_ASSET = auto()
    AUDIO_ASSET = auto()
    ASSET_ALIAS = auto()
    SPATIAL_VOICE = auto()
    NOTIFICATION = auto()


_OUTPUT_PAYLOADS: dict[OutputKind, type | None] = {
    OutputKind.EXPERIENCE: ExperienceOutputs,
    OutputKind.EXPERIENCE_CONFIGURATION: None,
    OutputKind.EXPERIENCE_ACTIVATION: None,
    OutputKind.EXPERIENCE_ICON: AssetOutputs,
    OutputKind.EXPERIENCE_THUMBNAIL: AssetOutputs,
    OutputKind.EXPERIENCE_THUMBNAIL_ORDER: None,
    OutputKind.PLACE: AssetOutputs,
    OutputKind.PLACE_FILE: PlaceFileOutputs,
    OutputKind.PLACE_CONFIGURATION: None,
    OutputKind.SOCIAL_LINK: AssetOutputs,
    OutputKind.PRODUCT: ProductOutputs,
    OutputKind.PRODUCT_ICON: AssetOutputs,
    OutputKind.PASS: PassOutputs,
    OutputKind.BADGE: AssetWithInitialIconOutputs,
    OutputKind.BADGE_ICON: AssetOutputs,
    OutputKind.IMAGE_ASSET: ImageAssetOutputs,
    OutputKind.AUDIO_ASSET: AssetOutputs,
    OutputKind.ASSET_ALIAS: AssetAliasOutputs,
    OutputKind.SPATIAL_VOICE: None,
    OutputKind.NOTIFICATION: NotificationOutputs,
}


@dataclass
class RobloxOutputs:
    """The realized state of one resource: a kind and its payload."""

    kind: OutputKind
    value: Any = None

    def __post_init__(self) -> None:
        _check_payload(self.kind, self.value, _OUTPUT_PAYLOADS[self.kind])

    def to_data(self) -> Any:
        """Return the serializable form, tagged by kind."""
        return _tagged_to_data(self.kind, self.value)

    @classmethod
    def from_data(cls, data: Any) -> RobloxOutputs:
        """Build outputs from their serialized form."""
        kind, value = _tagged_from_data(OutputKind, _OUTPUT_PAYLOADS, data)
        return cls(kind, value)


def all_outputs(outputs: Iterable[RobloxOutputs], kind: OutputKind) -> list[Any]:
    """Return the payloads of every output of the given kind, in order."""
    return [output.value for output in outputs if output.kind is kind]


def single_output(outputs: Iterable[RobloxOutputs], kind: OutputKind) -> Any:
    """Return the payload of the first output of the given kind.

    Raises LookupError when there is none.
    """
    found = all_outputs(outputs, kind)
    if not found:
        raise LookupError("Missing expected output")
    return found[0]


def optional_output(outputs: Iterable[RobloxOutputs], kind: OutputKind) -> Any:
    """Return the payload of the first output of the given kind, or None."""
    found = all_outputs(outputs, kind)
    return found[0] if found else None