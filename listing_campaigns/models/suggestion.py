"""Suggestion bundle - the normalized creative plan for one listing."""

from dataclasses import dataclass, field
from typing import Any

from .tier import Tier

CTA_POSITIONS = ("top", "center", "bottom")


class InvalidSuggestionError(Exception):
    """Suggestion payload cannot be turned into a valid bundle."""
    pass


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "sim")
    return bool(value)


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class RGBA:
    """Color with channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def of(cls, r: float, g: float, b: float, a: float = 1.0) -> "RGBA":
        return cls(
            _clamp(float(r), 0.0, 1.0),
            _clamp(float(g), 0.0, 1.0),
            _clamp(float(b), 0.0, 1.0),
            _clamp(float(a), 0.0, 1.0),
        )

    @classmethod
    def from_dict(cls, data: Any) -> "RGBA | None":
        if not isinstance(data, dict):
            return None
        return cls.of(
            _as_float(data.get("r"), 0.0),
            _as_float(data.get("g"), 0.0),
            _as_float(data.get("b"), 0.0),
            _as_float(data.get("a"), 1.0),
        )

    def to_dict(self) -> dict[str, float]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}


@dataclass(frozen=True)
class Offset:
    x: int = 0
    y: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Offset":
        if not isinstance(data, dict):
            return cls()
        return cls(int(_as_float(data.get("x"), 0)), int(_as_float(data.get("y"), 0)))

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass
class TextVariants:
    """Copy per placement. Length limits are enforced when mapped, not here."""

    feed_title: str | None = None
    feed_subtitle: str | None = None
    feed_cta: str | None = None
    story_title: str | None = None
    story_subtitle: str | None = None
    story_cta: str | None = None
    price: str | None = None
    # Legacy fields for older advisory payloads
    title: str | None = None
    subtitle: str | None = None
    cta: str | None = None

    _KEYS = {
        "feed_title": "feedTitle",
        "feed_subtitle": "feedSubtitle",
        "feed_cta": "feedCta",
        "story_title": "storyTitle",
        "story_subtitle": "storySubtitle",
        "story_cta": "storyCta",
        "price": "price",
        "title": "title",
        "subtitle": "subtitle",
        "cta": "cta",
    }

    @classmethod
    def from_dict(cls, data: Any) -> "TextVariants":
        if not isinstance(data, dict):
            return cls()
        return cls(**{attr: _as_text(data.get(key)) for attr, key in cls._KEYS.items()})

    def to_dict(self) -> dict[str, str]:
        return {
            key: getattr(self, attr)
            for attr, key in self._KEYS.items()
            if getattr(self, attr) is not None
        }


@dataclass
class ColorSuggestions:
    primary_title: RGBA | None = None
    secondary_title: RGBA | None = None
    cta_button: RGBA | None = None
    background: RGBA | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ColorSuggestions | None":
        if not isinstance(data, dict):
            return None
        return cls(
            primary_title=RGBA.from_dict(data.get("primaryTitle")),
            secondary_title=RGBA.from_dict(data.get("secondaryTitle")),
            cta_button=RGBA.from_dict(data.get("ctaButton")),
            background=RGBA.from_dict(data.get("background")),
        )

    def to_dict(self) -> dict[str, dict]:
        pairs = {
            "primaryTitle": self.primary_title,
            "secondaryTitle": self.secondary_title,
            "ctaButton": self.cta_button,
            "background": self.background,
        }
        return {key: color.to_dict() for key, color in pairs.items() if color is not None}


@dataclass
class VisualEffects:
    blur: bool = False
    cta_drop_shadow: bool = False
    background_opacity: float = 1.0
    stroke_width: float = 1.0
    corner_radius: float = 0.0
    text_stroke: bool = False
    rotation: dict[str, float] = field(default_factory=dict)  # logical role -> degrees

    @classmethod
    def from_dict(cls, data: Any) -> "VisualEffects | None":
        if not isinstance(data, dict):
            return None
        # Advisory payloads send blur as a 0-10 intensity ("titleBlur")
        blur = data.get("blur", data.get("titleBlur"))
        if isinstance(blur, (int, float)) and not isinstance(blur, bool):
            blur = blur > 0
        rotation = data.get("rotation") or {}
        return cls(
            blur=_as_bool(blur),
            cta_drop_shadow=_as_bool(data.get("ctaDropShadow")),
            background_opacity=_clamp(_as_float(data.get("backgroundOpacity"), 1.0), 0.0, 1.0),
            stroke_width=max(0.0, _as_float(data.get("strokeWidth"), 1.0)),
            corner_radius=max(0.0, _as_float(data.get("cornerRadius"), 0.0)),
            text_stroke=_as_bool(data.get("textStroke")),
            rotation={
                str(role): _as_float(angle, 0.0)
                for role, angle in rotation.items()
            } if isinstance(rotation, dict) else {},
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "blur": self.blur,
            "ctaDropShadow": self.cta_drop_shadow,
            "backgroundOpacity": self.background_opacity,
            "strokeWidth": self.stroke_width,
            "cornerRadius": self.corner_radius,
            "textStroke": self.text_stroke,
        }
        if self.rotation:
            data["rotation"] = dict(self.rotation)
        return data


@dataclass
class LayoutStrategy:
    title_priority: int = 3
    image_focus: bool = False
    cta_position: str = "bottom"
    avoid_overlap: bool = True

    @classmethod
    def from_dict(cls, data: Any) -> "LayoutStrategy | None":
        if not isinstance(data, dict):
            return None
        position = str(data.get("ctaPosition") or "bottom").lower()
        return cls(
            title_priority=int(_clamp(_as_float(data.get("titlePriority"), 3), 1, 5)),
            image_focus=_as_bool(data.get("imageFocus")),
            cta_position=position if position in CTA_POSITIONS else "bottom",
            avoid_overlap=_as_bool(data.get("avoidOverlap"), default=True),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "titlePriority": self.title_priority,
            "imageFocus": self.image_focus,
            "ctaPosition": self.cta_position,
            "avoidOverlap": self.avoid_overlap,
        }


@dataclass
class Positioning:
    title: Offset = field(default_factory=Offset)
    subtitle: Offset = field(default_factory=Offset)
    cta: Offset = field(default_factory=Offset)
    price: Offset = field(default_factory=Offset)
    image: Offset = field(default_factory=Offset)

    @classmethod
    def from_dict(cls, data: Any) -> "Positioning | None":
        if not isinstance(data, dict):
            return None
        return cls(
            title=Offset.from_dict(data.get("titleOffset")),
            subtitle=Offset.from_dict(data.get("subtitleOffset")),
            cta=Offset.from_dict(data.get("ctaOffset")),
            price=Offset.from_dict(data.get("priceOffset")),
            image=Offset.from_dict(data.get("imageOffset")),
        )

    def to_dict(self) -> dict[str, dict]:
        return {
            "titleOffset": self.title.to_dict(),
            "subtitleOffset": self.subtitle.to_dict(),
            "ctaOffset": self.cta.to_dict(),
            "priceOffset": self.price.to_dict(),
            "imageOffset": self.image.to_dict(),
        }


@dataclass
class SuggestionBundle:
    """Creative plan for one listing. `tier` is always a valid Tier."""

    tier: Tier
    confidence: int
    reasoning: str
    recommended_templates: list[str] = field(default_factory=list)
    text: TextVariants = field(default_factory=TextVariants)
    colors: ColorSuggestions | None = None
    effects: VisualEffects | None = None
    layout: LayoutStrategy | None = None
    positioning: Positioning | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "SuggestionBundle":
        """
        Parse an advisory payload.

        Raises:
            InvalidSuggestionError: payload is not an object or the tier is not
                one of baixo/medio/alto.
        """
        if not isinstance(data, dict):
            raise InvalidSuggestionError(f"Expected JSON object, got {type(data).__name__}")

        raw_tier = data.get("profile", data.get("tier"))
        try:
            tier = Tier.parse(raw_tier)
        except ValueError as e:
            raise InvalidSuggestionError(f"Invalid profile classification: {raw_tier!r}") from e

        templates = data.get("templateRecommendations") or []
        return cls(
            tier=tier,
            confidence=int(_clamp(_as_float(data.get("confidence"), 0), 0, 100)),
            reasoning=str(data.get("reasoning") or ""),
            recommended_templates=[str(t) for t in templates] if isinstance(templates, list) else [],
            text=TextVariants.from_dict(data.get("textSuggestions")),
            colors=ColorSuggestions.from_dict(data.get("colorSuggestions")),
            effects=VisualEffects.from_dict(data.get("visualEffects")),
            layout=LayoutStrategy.from_dict(data.get("layoutStrategy")),
            positioning=Positioning.from_dict(data.get("positioning")),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "profile": self.tier.value,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "templateRecommendations": list(self.recommended_templates),
            "textSuggestions": self.text.to_dict(),
        }
        if self.colors is not None:
            data["colorSuggestions"] = self.colors.to_dict()
        if self.effects is not None:
            data["visualEffects"] = self.effects.to_dict()
        if self.layout is not None:
            data["layoutStrategy"] = self.layout.to_dict()
        if self.positioning is not None:
            data["positioning"] = self.positioning.to_dict()
        return data
