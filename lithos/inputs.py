"""Desired-state input records for Roblox resources."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class _TaggedKind(Enum):
    """Enum whose automatic values are the camelCase form of the member name."""

    @staticmethod
    def _generate_next_value_(name: str, start: int, count: int, last_values: list) -> str:
        return _camel(name.lower())


def _payload_to_data(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        return {_camel(f.name): getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return dict(value)
    return value


def _payload_from_data(payload_type: type, data: Any) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a mapping for {payload_type.__name__}")
    if payload_type is dict:
        return dict(data)
    kwargs = {}
    for f in dataclasses.fields(payload_type):
        key = _camel(f.name)
        if key in data:
            kwargs[f.name] = data[key]
        elif "None" in str(f.type):
            kwargs[f.name] = None
        else:
            raise ValueError(f"missing field {key!r} for {payload_type.__name__}")
    return payload_type(**kwargs)


def _check_payload(kind: Enum, value: Any, payload_type: type | None) -> None:
    if payload_type is None:
        if value is not None:
            raise TypeError(f"{kind.value} takes no payload")
    elif payload_type is dict:
        if not isinstance(value, Mapping):
            raise TypeError(f"{kind.value} requires a mapping payload")
    elif not isinstance(value, payload_type):
        raise TypeError(f"{kind.value} requires a {payload_type.__name__} payload")


def _tagged_to_data(kind: Enum, value: Any) -> Any:
    if value is None:
        return kind.value
    return {kind.value: _payload_to_data(value)}


def _kind_for(kind_type: type[Enum], tag: Any) -> Any:
    try:
        return kind_type(tag)
    except ValueError:
        raise ValueError(f"unknown variant {tag!r}") from None


def _tagged_from_data(
    kind_type: type[Enum], payloads: Mapping[Any, type | None], data: Any
) -> tuple[Any, Any]:
    if isinstance(data, str):
        kind = _kind_for(kind_type, data)
        if payloads[kind] is not None:
            raise ValueError(f"variant {data!r} requires a payload")
        return kind, None
    if isinstance(data, Mapping) and len(data) == 1:
        ((tag, payload),) = data.items()
        kind = _kind_for(kind_type, tag)
        payload_type = payloads[kind]
        if payload_type is None:
            if payload is not None:
                raise ValueError(f"variant {tag!r} takes no payload")
            return kind, None
        return kind, _payload_from_data(payload_type, payload)
    raise ValueError("expected a variant name or a single-key mapping")


@dataclass
class ExperienceInputs:
    group_id: int | None


@dataclass
class ExperienceActivationInputs:
    is_active: bool


@dataclass
class FileInputs:
    file_path: str
    file_hash: str


@dataclass
class PlaceInputs:
    is_start: bool


@dataclass
class SocialLinkInputs:
    title: str
    url: str
    link_type: str


@dataclass
class ProductInputs:
    name: str
    description: str
    price: int


@dataclass
class PassInputs:
    name: str
    description: str
    price: int | None
    icon_file_path: str
    icon_file_hash: str


@dataclass
class BadgeInputs:
    name: str
    description: str
    enabled: bool
    icon_file_path: str


@dataclass
class FileWithGroupIdInputs:
    file_path: str
    file_hash: str
    group_id: int | None


@dataclass
class AssetAliasInputs:
    name: str


@dataclass
class SpatialVoiceInputs:
    enabled: bool


@dataclass
class NotificationInputs:
    name: str
    content: str


class InputKind(_TaggedKind):
    """The kinds of resource inputs, valued by their serialized tag."""

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


_INPUT_PAYLOADS: dict[InputKind, type | None] = {
    InputKind.EXPERIENCE: ExperienceInputs,
    InputKind.EXPERIENCE_CONFIGURATION: dict,
    InputKind.EXPERIENCE_ACTIVATION: ExperienceActivationInputs,
    InputKind.EXPERIENCE_ICON: FileInputs,
    InputKind.EXPERIENCE_THUMBNAIL: FileInputs,
    InputKind.EXPERIENCE_THUMBNAIL_ORDER: None,
    InputKind.PLACE: PlaceInputs,
    InputKind.PLACE_FILE: FileInputs,
    InputKind.PLACE_CONFIGURATION: dict,
    InputKind.SOCIAL_LINK: SocialLinkInputs,
    InputKind.PRODUCT: ProductInputs,
    InputKind.PRODUCT_ICON: FileInputs,
    InputKind.PASS: PassInputs,
    InputKind.BADGE: BadgeInputs,
    InputKind.BADGE_ICON: FileInputs,
    InputKind.IMAGE_ASSET: FileWithGroupIdInputs,
    InputKind.AUDIO_ASSET: FileWithGroupIdInputs,
    InputKind.ASSET_ALIAS: AssetAliasInputs,
    InputKind.SPATIAL_VOICE: SpatialVoiceInputs,
    InputKind.NOTIFICATION: NotificationInputs,
}


@dataclass
class RobloxInputs:
    """The desired state of one resource: a kind and its payload.

    Configuration kinds carry a plain mapping; kinds without data carry None.
    """

    kind: InputKind
    value: Any = None

    def __post_init__(self) -> None:
        _check_payload(self.kind, self.value, _INPUT_PAYLOADS[self.kind])

    def to_data(self) -> Any:
        """Return the serializable form, tagged by kind."""
        return _tagged_to_data(self.kind, self.value)

    @classmethod
    def from_data(cls, data: Any) -> RobloxInputs:
        """Build inputs from their serialized form."""
        kind, value = _tagged_from_data(InputKind, _INPUT_PAYLOADS, data)
        return cls(kind, value)