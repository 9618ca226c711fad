"""Region mutation - the change set applied to one physical region."""

from dataclasses import dataclass, fields
from typing import Any

from .suggestion import RGBA


@dataclass(frozen=True)
class Shadow:
    blur_x: float = 4.0
    blur_y: float = 4.0
    offset_x: float = 2.0
    offset_y: float = 2.0
    color: RGBA = RGBA(0.0, 0.0, 0.0, 0.4)


@dataclass(frozen=True)
class Stroke:
    width: float
    color: RGBA


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass
class RegionMutation:
    """Properties to set on one region. None means "leave untouched"."""

    region: str
    role: str | None = None  # logical role, if the region is mapped
    text: str | None = None
    font_size: float | None = None
    fill_color: RGBA | None = None
    image_uri: str | None = None
    rotation: float | None = None
    opacity: float | None = None
    blur: bool | None = None
    drop_shadow: Shadow | None = None
    stroke: Stroke | None = None
    corner_radius: float | None = None
    position: Position | None = None

    def is_empty(self) -> bool:
        return all(
            getattr(self, f.name) is None
            for f in fields(self)
            if f.name not in ("region", "role")
        )

    def to_properties(self) -> list[tuple[str, Any]]:
        """Flatten into (property path, value) pairs in apply order."""
        props: list[tuple[str, Any]] = []
        if self.text is not None:
            props.append(("text/text", self.text))
        if self.font_size is not None:
            props.append(("text/fontSize", self.font_size))
        if self.fill_color is not None:
            props.append(("fill/color/value", self.fill_color))
        if self.image_uri is not None:
            props.append(("fill/image/imageFileURI", self.image_uri))
        if self.rotation is not None:
            props.append(("rotation", self.rotation))
        if self.opacity is not None:
            props.append(("opacity", self.opacity))
        if self.blur is not None:
            props.append(("blur/enabled", self.blur))
        if self.drop_shadow is not None:
            shadow = self.drop_shadow
            props.extend([
                ("dropShadow/enabled", True),
                ("dropShadow/blurRadius/x", shadow.blur_x),
                ("dropShadow/blurRadius/y", shadow.blur_y),
                ("dropShadow/offset/x", shadow.offset_x),
                ("dropShadow/offset/y", shadow.offset_y),
                ("dropShadow/color", shadow.color),
            ])
        if self.stroke is not None:
            props.extend([
                ("stroke/enabled", True),
                ("stroke/width", self.stroke.width),
                ("stroke/color", self.stroke.color),
            ])
        if self.corner_radius is not None:
            props.extend([
                ("backgroundColor/enabled", True),
                ("backgroundColor/cornerRadius", self.corner_radius),
            ])
        if self.position is not None:
            props.extend([
                ("position/x", self.position.x),
                ("position/y", self.position.y),
            ])
        return props
