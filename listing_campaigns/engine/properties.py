"""Render-engine property schema.

Every property the engine reads or writes is declared here with its value
kind, so values are encoded and decoded by lookup instead of guessing the
accessor from the property name.
"""

from enum import Enum
from typing import Any

from ..models.suggestion import RGBA


class PropertyKind(Enum):
    STRING = "string"
    FLOAT = "float"
    BOOL = "bool"
    COLOR = "color"


PROPERTY_SCHEMA: dict[str, PropertyKind] = {
    "text/text": PropertyKind.STRING,
    "text/fontSize": PropertyKind.FLOAT,
    "fill/color/value": PropertyKind.COLOR,
    "fill/image/imageFileURI": PropertyKind.STRING,
    "rotation": PropertyKind.FLOAT,
    "opacity": PropertyKind.FLOAT,
    "blur/enabled": PropertyKind.BOOL,
    "dropShadow/enabled": PropertyKind.BOOL,
    "dropShadow/blurRadius/x": PropertyKind.FLOAT,
    "dropShadow/blurRadius/y": PropertyKind.FLOAT,
    "dropShadow/offset/x": PropertyKind.FLOAT,
    "dropShadow/offset/y": PropertyKind.FLOAT,
    "dropShadow/color": PropertyKind.COLOR,
    "stroke/enabled": PropertyKind.BOOL,
    "stroke/width": PropertyKind.FLOAT,
    "stroke/color": PropertyKind.COLOR,
    "backgroundColor/enabled": PropertyKind.BOOL,
    "backgroundColor/cornerRadius": PropertyKind.FLOAT,
    "position/x": PropertyKind.FLOAT,
    "position/y": PropertyKind.FLOAT,
}

# Properties read back when snapshotting a region
SNAPSHOT_PROPERTIES = ["position/x", "position/y"]
TEXT_SNAPSHOT_PROPERTIES = SNAPSHOT_PROPERTIES + ["text/fontSize"]


def get_kind(path: str) -> PropertyKind:
    if path not in PROPERTY_SCHEMA:
        raise KeyError(f"Unknown render property: {path}")
    return PROPERTY_SCHEMA[path]


def encode_value(path: str, value: Any) -> dict[str, Any]:
    """Encode a property write as {"path", "kind", "value"}."""
    kind = get_kind(path)
    if kind is PropertyKind.COLOR:
        if not isinstance(value, RGBA):
            raise TypeError(f"{path} expects RGBA, got {type(value).__name__}")
        encoded: Any = value.to_dict()
    elif kind is PropertyKind.FLOAT:
        encoded = float(value)
    elif kind is PropertyKind.BOOL:
        encoded = bool(value)
    else:
        encoded = str(value)
    return {"path": path, "kind": kind.value, "value": encoded}


def decode_value(path: str, raw: Any) -> Any:
    """Decode a value read from the engine. None stays None."""
    if raw is None:
        return None
    kind = get_kind(path)
    if kind is PropertyKind.COLOR:
        return RGBA.from_dict(raw)
    if kind is PropertyKind.FLOAT:
        return float(raw)
    if kind is PropertyKind.BOOL:
        return bool(raw)
    return str(raw)
