"""Suggestion resolver - advisory with retry, heuristic fallback."""

import logging
import time
from dataclasses import replace
from typing import Callable

from ..config import ADVISORY_BACKOFF_SECONDS, ADVISORY_MAX_ATTEMPTS
from ..models.product import ProductInfo
from ..models.suggestion import SuggestionBundle, TextVariants
from ..models.tier import Tier
from .advisory import AdvisoryService
from .heuristics import HeuristicClassifier
from .templates import TemplateRegistry

logger = logging.getLogger(__name__)

MANUAL_REASONING = "Profile manually specified"
MANUAL_TEXT = TextVariants(
    feed_title="Título Personalizado",
    feed_subtitle="Subtítulo Personalizado",
    feed_cta="Saiba Mais",
    story_title="Título Story",
    story_subtitle="Subtítulo Story",
    story_cta="Fale Conosco",
    title="Título Personalizado",
    subtitle="Subtítulo Personalizado",
    cta="Saiba Mais",
)


class SuggestionResolver:
    """
    Produce a SuggestionBundle for a listing. Never raises.

    Order: forced tier -> advisory model (bounded retries) -> heuristics.
    Recommendations are always recomputed from templates present on disk.
    """

    def __init__(
        self,
        advisory: AdvisoryService | None,
        registry: TemplateRegistry,
        heuristics: HeuristicClassifier | None = None,
        max_attempts: int = ADVISORY_MAX_ATTEMPTS,
        backoff: float = ADVISORY_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.advisory = advisory
        self.registry = registry
        self.heuristics = heuristics or HeuristicClassifier()
        self.max_attempts = max(1, max_attempts)
        self.backoff = backoff
        self.sleep = sleep

    def resolve(self, product: ProductInfo, tier: Tier | None = None) -> SuggestionBundle:
        """
        Args:
            product: Listing to classify.
            tier: Skip classification and use this tier.

        Returns:
            Bundle whose recommended_templates are the tier's available templates.
        """
        if tier is not None:
            bundle = SuggestionBundle(
                tier=tier,
                confidence=100,
                reasoning=MANUAL_REASONING,
                text=replace(MANUAL_TEXT),
            )
        else:
            bundle = self._ask_advisory(product) or self.heuristics.analyze(product)

        bundle.recommended_templates = self.registry.recommendations(bundle.tier)
        logger.info(
            f"Analysis: {bundle.tier.value} ({bundle.confidence}%), "
            f"{len(bundle.recommended_templates)} templates available"
        )
        return bundle

    def _ask_advisory(self, product: ProductInfo) -> SuggestionBundle | None:
        if self.advisory is None:
            return None

        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                self.sleep(self.backoff * 2 ** (attempt - 2))
            try:
                payload = self.advisory.suggest(product)
                return SuggestionBundle.from_dict(payload)
            except Exception as e:
                logger.error(f"Error in AI analysis (retry {attempt}/{self.max_attempts}): {e}")
        return None
