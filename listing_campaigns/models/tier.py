"""Market tier and template format enums."""

from enum import Enum


class Tier(Enum):
    """Economic classification of a listing."""

    LOW = "baixo"
    MID = "medio"
    HIGH = "alto"

    @classmethod
    def parse(cls, value: "str | Tier") -> "Tier":
        """Parse a wire value ("baixo") or English alias ("low")."""
        if isinstance(value, Tier):
            return value
        key = str(value or "").strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(f"Invalid tier: {value!r}. Valid: {[t.value for t in cls]}")

    @property
    def label(self) -> str:
        """Upper-case label used in copy, e.g. "ALTO"."""
        return self.value.upper()


_ALIASES: dict[str, Tier] = {
    "baixo": Tier.LOW,
    "low": Tier.LOW,
    "medio": Tier.MID,
    "médio": Tier.MID,
    "mid": Tier.MID,
    "alto": Tier.HIGH,
    "high": Tier.HIGH,
}


class TemplateFormat(Enum):
    FEED = "feed"
    STORY = "story"

    @property
    def canvas_shape(self) -> str:
        return "portrait" if self is TemplateFormat.STORY else "square"
