"""Heuristic tier classifier - local fallback when the advisory model fails."""

import logging
import math
import random

from ..config import BUDGET_CEILING, BUDGET_DEFAULT, BUDGET_FLOOR
from ..models.product import ProductInfo
from ..models.suggestion import (
    RGBA,
    ColorSuggestions,
    LayoutStrategy,
    Offset,
    Positioning,
    SuggestionBundle,
    TextVariants,
    VisualEffects,
)
from ..models.tier import Tier
from ..utils import extract_first_int

logger = logging.getLogger(__name__)

LUXURY_KEYWORDS = ["luxo", "premium", "alto padrão", "exclusivo", "sofisticado", "diferenciado"]
POPULAR_KEYWORDS = ["popular", "acessível", "primeira casa", "entrada facilitada", "financiamento"]

KEYWORD_CONFIDENCE = 70
DEFAULT_CONFIDENCE = 60

TITLES = {
    Tier.LOW: "Seu Primeiro Imóvel Está Aqui!",
    Tier.MID: "O Apartamento Ideal Para Sua Família",
    Tier.HIGH: "Exclusividade e Sofisticação",
}
SUBTITLES = {
    Tier.LOW: "Financiamento facilitado e entrada reduzida",
    Tier.MID: "Localização privilegiada e acabamento de qualidade",
    Tier.HIGH: "Alto padrão em cada detalhe",
}
CTAS = {
    Tier.LOW: "Realize Seu Sonho Agora!",
    Tier.MID: "Agende Sua Visita",
    Tier.HIGH: "Conheça o Exclusivo",
}
PRICES = {
    Tier.LOW: "A partir de R$ 200.000",
    Tier.MID: "A partir de R$ 400.000",
    Tier.HIGH: "A partir de R$ 800.000",
}

# Color centers: (primary title, secondary title, cta, background)
COLOR_CENTERS = {
    Tier.LOW: ((0.2, 0.5, 0.9), (0.1, 0.4, 0.8), (0.9, 0.3, 0.1), (0.92, 0.95, 0.98, 0.85)),
    Tier.MID: ((0.2, 0.7, 0.3), (0.1, 0.6, 0.2), (0.8, 0.6, 0.1), (0.95, 0.97, 0.93, 0.88)),
    Tier.HIGH: ((0.7, 0.5, 0.2), (0.6, 0.4, 0.1), (0.8, 0.2, 0.1), (0.98, 0.96, 0.92, 0.92)),
}
COLOR_JITTER = 0.1
BACKGROUND_JITTER = {Tier.LOW: 0.005, Tier.MID: 0.005, Tier.HIGH: 0.002}

# Effect ranges: blur intensity, shadow chance, opacity, stroke, radius, text-stroke chance
EFFECT_RANGES = {
    Tier.LOW: {
        "blur": (0.0, 0.0),
        "shadow": 0.0,
        "opacity": (0.85, 0.95),
        "stroke": (1.0, 2.5),
        "radius": (4.0, 10.0),
        "text_stroke": 0.0,
    },
    Tier.MID: {
        "blur": (0.0, 2.0),
        "shadow": 1.0,
        "opacity": (0.88, 0.95),
        "stroke": (2.0, 3.5),
        "radius": (6.0, 12.0),
        "text_stroke": 1.0,
    },
    Tier.HIGH: {
        "blur": (0.0, 3.0),
        "shadow": 1.0,
        "opacity": (0.9, 0.98),
        "stroke": (2.5, 4.0),
        "radius": (8.0, 16.0),
        "text_stroke": 1.0,
    },
}

LAYOUTS = {
    Tier.LOW: {"priority": (1, 3), "image_focus": 0.4, "cta": ("bottom", "center")},
    Tier.MID: {"priority": (2, 4), "image_focus": 0.6, "cta": ("center", "bottom", "top")},
    Tier.HIGH: {"priority": (3, 5), "image_focus": 0.8, "cta": ("center", "top")},
}

# Offset ranges per role: ((x_low, x_high), (y_low, y_high))
OFFSET_RANGES = {
    Tier.LOW: {
        "title": ((-20, 20), (-30, 10)),
        "subtitle": ((-15, 15), (10, 40)),
        "cta": ((-30, 30), (-50, 50)),
        "price": ((-15, 15), (-20, 10)),
        "image": ((-30, 30), (-40, 40)),
    },
    Tier.MID: {
        "title": ((-40, 40), (-60, 20)),
        "subtitle": ((-30, 30), (20, 70)),
        "cta": ((-60, 60), (-100, 100)),
        "price": ((-25, 25), (-30, 15)),
        "image": ((-50, 50), (-60, 60)),
    },
    Tier.HIGH: {
        "title": ((-60, 60), (-100, 30)),
        "subtitle": ((-50, 50), (30, 100)),
        "cta": ((-100, 100), (-200, 200)),
        "price": ((-40, 40), (-40, 20)),
        "image": ((-80, 80), (-100, 100)),
    },
}


class HeuristicClassifier:
    """
    Keyword and budget classifier with a tier-derived creative plan.

    Without `rng` every value is the center of its range, so the same product
    always yields the same bundle. With a seeded `random.Random` values are
    sampled inside the same ranges.
    """

    def __init__(
        self,
        ceiling: int = BUDGET_CEILING,
        floor: int = BUDGET_FLOOR,
        rng: random.Random | None = None,
    ):
        self.ceiling = ceiling
        self.floor = floor
        self.rng = rng

    def classify(self, product: ProductInfo) -> tuple[Tier, int, str]:
        """Return (tier, confidence, reasoning)."""
        description = product.description.lower()
        audience = product.target_audience.lower()
        budget = extract_first_int(product.budget, BUDGET_DEFAULT)

        def mentions(keywords: list[str]) -> bool:
            return any(k in description or k in audience for k in keywords)

        if mentions(LUXURY_KEYWORDS) or budget > self.ceiling:
            return Tier.HIGH, KEYWORD_CONFIDENCE, "Palavras-chave de luxo identificadas ou orçamento alto"
        if mentions(POPULAR_KEYWORDS) or budget < self.floor:
            return Tier.LOW, KEYWORD_CONFIDENCE, "Palavras-chave populares identificadas ou orçamento baixo"
        return Tier.MID, DEFAULT_CONFIDENCE, "Análise baseada em heurísticas simples devido a erro no serviço de IA"

    def analyze(self, product: ProductInfo) -> SuggestionBundle:
        tier, confidence, reasoning = self.classify(product)
        logger.warning(f"Using fallback analysis: {tier.value} ({confidence}%)")
        return SuggestionBundle(
            tier=tier,
            confidence=confidence,
            reasoning=reasoning,
            recommended_templates=[f"template_{tier.value}_feed", f"template_{tier.value}_story"],
            text=self.text_for(tier),
            colors=self.colors_for(tier),
            effects=self.effects_for(tier),
            layout=self.layout_for(tier),
            positioning=self.positioning_for(tier),
        )

    # ===== Tier-derived sections =====

    def text_for(self, tier: Tier) -> TextVariants:
        return TextVariants(
            feed_title=TITLES[tier],
            feed_subtitle=SUBTITLES[tier],
            feed_cta=CTAS[tier],
            story_title="Exclusividade!" if tier is Tier.HIGH else "Oportunidade!",
            story_subtitle=f"{tier.label} PADRÃO",
            story_cta="CONHEÇA" if tier is Tier.HIGH else "SAIBA MAIS",
            price=PRICES[tier],
            title=TITLES[tier],
            subtitle=SUBTITLES[tier],
            cta=CTAS[tier],
        )

    def colors_for(self, tier: Tier) -> ColorSuggestions:
        primary, secondary, cta, background = COLOR_CENTERS[tier]
        bg_jitter = BACKGROUND_JITTER[tier]
        return ColorSuggestions(
            primary_title=self._color(primary, COLOR_JITTER),
            secondary_title=self._color(secondary, COLOR_JITTER),
            cta_button=self._color(cta, COLOR_JITTER),
            background=self._color(background[:3], bg_jitter, alpha=background[3]),
        )

    def effects_for(self, tier: Tier) -> VisualEffects:
        ranges = EFFECT_RANGES[tier]
        return VisualEffects(
            blur=self._pick(*ranges["blur"]) > 0,
            cta_drop_shadow=self._chance(ranges["shadow"]),
            background_opacity=round(self._pick(*ranges["opacity"]), 3),
            stroke_width=round(self._pick(*ranges["stroke"]), 2),
            corner_radius=round(self._pick(*ranges["radius"]), 2),
            text_stroke=self._chance(ranges["text_stroke"]),
        )

    def layout_for(self, tier: Tier) -> LayoutStrategy:
        layout = LAYOUTS[tier]
        positions = layout["cta"]
        if self.rng is None:
            position = positions[0]
        else:
            position = self.rng.choice(positions)
        return LayoutStrategy(
            title_priority=math.floor(self._pick(*layout["priority"])),
            image_focus=self._chance(layout["image_focus"]),
            cta_position=position,
            avoid_overlap=True,
        )

    def positioning_for(self, tier: Tier) -> Positioning:
        ranges = OFFSET_RANGES[tier]
        return Positioning(**{role: self._offset(*axes) for role, axes in ranges.items()})

    # ===== Sampling =====

    def _pick(self, low: float, high: float) -> float:
        if self.rng is None:
            return (low + high) / 2
        return self.rng.uniform(low, high)

    def _chance(self, probability: float) -> bool:
        if self.rng is None:
            return probability >= 0.5
        return self.rng.random() < probability

    def _offset(self, x_range: tuple[int, int], y_range: tuple[int, int]) -> Offset:
        return Offset(math.floor(self._pick(*x_range)), math.floor(self._pick(*y_range)))

    def _color(self, center: tuple[float, ...], jitter: float, alpha: float = 1.0) -> RGBA:
        channels = [c + self._pick(-jitter, jitter) for c in center]
        return RGBA.of(*channels, alpha)
