"""Tier style table applied when suggestions carry no explicit colors."""

from dataclasses import dataclass

from .suggestion import RGBA
from .tier import Tier


@dataclass(frozen=True)
class TierStyle:
    """Base styling for a tier."""

    primary_color: RGBA
    secondary_color: RGBA
    font_scale: float


# baixo = blues, medio = greens, alto = golds
TIER_STYLES: dict[Tier, TierStyle] = {
    Tier.LOW: TierStyle(RGBA(0.2, 0.6, 0.9), RGBA(0.1, 0.4, 0.8), 1.0),
    Tier.MID: TierStyle(RGBA(0.3, 0.7, 0.2), RGBA(0.2, 0.5, 0.1), 1.1),
    Tier.HIGH: TierStyle(RGBA(0.8, 0.6, 0.2), RGBA(0.6, 0.4, 0.1), 1.2),
}

# Non-first templates in a batch get 90% of the tier font scale
SECONDARY_FONT_FACTOR = 0.9


def get_tier_style(tier: Tier) -> TierStyle:
    """Get style for a tier. Every Tier member must have an entry."""
    if tier not in TIER_STYLES:
        raise KeyError(f"No style configured for tier: {tier}")
    return TIER_STYLES[tier]


def get_base_color(tier: Tier, template_index: int) -> RGBA:
    """Primary color for the first template of a batch, secondary for the rest."""
    style = get_tier_style(tier)
    return style.primary_color if template_index == 0 else style.secondary_color


def get_font_scale(tier: Tier, template_index: int) -> float:
    style = get_tier_style(tier)
    if template_index == 0:
        return style.font_scale
    return style.font_scale * SECONDARY_FONT_FACTOR
