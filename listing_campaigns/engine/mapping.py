"""Region-mapping engine.

Turns a suggestion bundle into the list of region mutations for one template.
The engine never talks to the render service: it works on region snapshots
read from an open session and returns plain data.

Steps per template:
1. logical -> physical mapping and its inverse
2. image / logo sources
3. copy by logical role
4. tier styling (color + font scale)
5. visual effects and rotation
6. positioning offsets with safe-range clamps
"""

import logging
from typing import TYPE_CHECKING

from ..models.mutation import Position, RegionMutation, Shadow, Stroke
from ..models.product import ProductInfo
from ..models.region import RegionSnapshot
from ..models.styles import get_base_color, get_font_scale, get_tier_style
from ..models.suggestion import RGBA, Offset, SuggestionBundle
from ..models.template import TemplateDescriptor
from ..models.tier import TemplateFormat, Tier
from ..utils import truncate_text
from .traits import TEXT_ROLES, RegionTraits, classify

if TYPE_CHECKING:
    from ..services.templates import TemplateRegistry

logger = logging.getLogger(__name__)

DEFAULT_PRICE = "Consulte valores"
DEFAULT_LOCATION = "Localização"

# Safety caps on suggested copy (advisory prompt asks for less)
TEXT_LIMITS = {"title": 40, "subtitle": 60, "cta": 25, "price": 40}
DESCRIPTION_LIMITS = {TemplateFormat.STORY: 80, TemplateFormat.FEED: 100}

DEFAULT_FONT_SIZE = 24.0
MAIN_TITLE_BOOST = 1.2
PRICE_BOOST = 1.1
TEXT_STROKE_COLOR = RGBA(1.0, 1.0, 1.0, 0.8)
PRICE_GLOW = Stroke(width=1.0, color=RGBA(1.0, 0.9, 1.0, 0.6))

# Position clamps, in canvas pixels
TEXT_FLOOR = 50.0
CTA_RANGE = (50.0, 1000.0)
IMAGE_RANGE = (-200.0, 800.0)
OVERLAP_MARGIN = 5.0


def default_copy(tier: Tier, fmt: TemplateFormat) -> dict[str, str]:
    """Tier-flavored fallback title/subtitle/cta for a placement."""
    if fmt is TemplateFormat.STORY:
        if tier is Tier.HIGH:
            return {"title": "Exclusividade!", "subtitle": f"{tier.label} PADRÃO", "cta": "CONHEÇA"}
        if tier is Tier.MID:
            return {"title": "Oportunidade Única!", "subtitle": f"{tier.label} PADRÃO", "cta": "FALE CONOSCO"}
        if tier is Tier.LOW:
            return {"title": "Oportunidade Única!", "subtitle": f"{tier.label} PADRÃO", "cta": "SAIBA MAIS"}
    else:
        subtitle = f"{tier.label} PADRÃO - Qualidade Garantida"
        if tier is Tier.HIGH:
            return {"title": "Exclusividade e Sofisticação", "subtitle": subtitle, "cta": "CONHEÇA"}
        if tier is Tier.MID:
            return {"title": "Novo Empreendimento", "subtitle": subtitle, "cta": "SAIBA MAIS"}
        if tier is Tier.LOW:
            return {"title": "Seu Primeiro Imóvel", "subtitle": subtitle, "cta": "SAIBA MAIS"}
    raise ValueError(f"No default copy for {tier} / {fmt}")


def build_copy(bundle: SuggestionBundle, descriptor: TemplateDescriptor) -> dict[str, str]:
    """
    Pick title/subtitle/cta/price for a template.

    Fallback chain: format-specific suggestion -> legacy suggestion -> default.
    """
    text = bundle.text
    defaults = default_copy(bundle.tier, descriptor.format)
    if descriptor.is_story:
        specific = (text.story_title, text.story_subtitle, text.story_cta)
    else:
        specific = (text.feed_title, text.feed_subtitle, text.feed_cta)

    copy = {
        "title": specific[0] or text.title or defaults["title"],
        "subtitle": specific[1] or text.subtitle or defaults["subtitle"],
        "cta": specific[2] or text.cta or defaults["cta"],
        "price": text.price or DEFAULT_PRICE,
    }
    return {role: truncate_text(value, TEXT_LIMITS[role]) for role, value in copy.items()}


def _clamp(value: float, low: float, high: float | None = None) -> float:
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


class RegionMappingEngine:
    """Compute region mutations for a template from a suggestion bundle."""

    def __init__(self, registry: "TemplateRegistry | None" = None):
        self.registry = registry

    def map_template(
        self,
        template_name: str,
        bundle: SuggestionBundle,
        product: ProductInfo,
        regions: list[RegionSnapshot],
        template_index: int = 0,
        pinned_image: str | None = None,
    ) -> list[RegionMutation]:
        """Map by template name. Unknown templates yield no mutations."""
        descriptor = self.registry.by_name(template_name) if self.registry else None
        if descriptor is None:
            logger.error(f"Template configuration not found for '{template_name}'. Skipping layer modification.")
            return []
        return self.map_regions(descriptor, bundle, product, regions, template_index, pinned_image)

    def map_regions(
        self,
        descriptor: TemplateDescriptor,
        bundle: SuggestionBundle,
        product: ProductInfo,
        regions: list[RegionSnapshot],
        template_index: int = 0,
        pinned_image: str | None = None,
    ) -> list[RegionMutation]:
        """
        Build mutations for every region in the snapshot.

        Args:
            descriptor: Template being rendered.
            bundle: Creative plan.
            product: Listing facts (images, logo, location, description).
            regions: Named regions reported by the render session.
            template_index: Position of this template in the batch; 0 gets
                primary colors and the full font scale.
            pinned_image: Image URI reserved for this template, overriding
                the cycling assignment.

        Returns:
            Non-empty mutations in snapshot order.
        """
        inverse = descriptor.physical_to_logical()

        ordered: list[RegionSnapshot] = []
        mutations: dict[str, RegionMutation] = {}
        for region in regions:
            if region.name in mutations:
                continue
            ordered.append(region)
            mutations[region.name] = RegionMutation(region=region.name, role=inverse.get(region.name))

        self._assign_images(descriptor, product, pinned_image, mutations)
        copy = build_copy(bundle, descriptor)

        for region in ordered:
            mutation = mutations[region.name]
            traits = classify(region, inverse.get(region.name))

            self._assign_text(mutation, traits, copy, descriptor, product)
            self._apply_styling(mutation, region, traits, bundle, template_index)
            self._apply_effects(mutation, region, traits, bundle)
            self._apply_positioning(mutation, region, traits, bundle)

        result = [mutations[r.name] for r in ordered if not mutations[r.name].is_empty()]
        logger.info(f"Mapped {len(result)}/{len(ordered)} regions for template {descriptor.name}")
        return result

    def _assign_images(
        self,
        descriptor: TemplateDescriptor,
        product: ProductInfo,
        pinned_image: str | None,
        mutations: dict[str, RegionMutation],
    ) -> None:
        image_roles = [role for role in descriptor.regions if role.startswith("image")]
        for index, role in enumerate(image_roles):
            physical = descriptor.regions[role]
            if physical not in mutations:
                continue
            uri = pinned_image
            if uri is None and product.images:
                uri = product.images[index % len(product.images)]
            if uri:
                mutations[physical].image_uri = uri
                logger.debug(f"Set image for {role} ({physical}) to {uri[:50]}")

        if not product.logo:
            return
        for role in descriptor.regions:
            if not role.startswith("logo"):
                continue
            physical = descriptor.regions[role]
            if physical in mutations:
                mutations[physical].image_uri = product.logo

    def _assign_text(
        self,
        mutation: RegionMutation,
        traits: RegionTraits,
        copy: dict[str, str],
        descriptor: TemplateDescriptor,
        product: ProductInfo,
    ) -> None:
        role = traits.logical
        # Decorations behind a CTA must not repeat the CTA text
        if role not in TEXT_ROLES or traits.is_cta_background:
            return

        if role in copy:
            mutation.text = copy[role]
        elif role == "location":
            mutation.text = product.location or DEFAULT_LOCATION
        elif role == "description":
            mutation.text = truncate_text(product.description, DESCRIPTION_LIMITS[descriptor.format])

    def _pick_color(self, traits: RegionTraits, bundle: SuggestionBundle, template_index: int) -> RGBA:
        colors = bundle.colors
        if colors is None:
            return get_base_color(bundle.tier, template_index)

        style = get_tier_style(bundle.tier)
        if traits.is_cta:
            return colors.cta_button or style.primary_color
        if template_index == 0:
            return colors.primary_title or style.primary_color
        return colors.secondary_title or style.secondary_color

    def _apply_styling(
        self,
        mutation: RegionMutation,
        region: RegionSnapshot,
        traits: RegionTraits,
        bundle: SuggestionBundle,
        template_index: int,
    ) -> None:
        if mutation.image_uri is None:
            if traits.is_title or traits.is_subtitle or traits.is_cta:
                mutation.fill_color = self._pick_color(traits, bundle, template_index)
            elif traits.is_background and bundle.colors and bundle.colors.background:
                mutation.fill_color = bundle.colors.background

        if region.font_size:
            mutation.font_size = region.font_size * get_font_scale(bundle.tier, template_index)

    def _apply_effects(
        self,
        mutation: RegionMutation,
        region: RegionSnapshot,
        traits: RegionTraits,
        bundle: SuggestionBundle,
    ) -> None:
        effects = bundle.effects
        if effects is None:
            return

        if traits.is_background and effects.blur:
            mutation.blur = True

        if traits.is_cta and effects.cta_drop_shadow:
            mutation.drop_shadow = Shadow()

        if region.is_text and (traits.is_title or traits.is_price) and effects.text_stroke:
            mutation.stroke = Stroke(width=effects.stroke_width, color=TEXT_STROKE_COLOR)

        if traits.is_background and not traits.is_location:
            mutation.opacity = effects.background_opacity

        if traits.is_cta_background:
            mutation.corner_radius = effects.corner_radius

        if region.is_text and traits.is_main_title:
            mutation.font_size = self._current_font(mutation, region) * MAIN_TITLE_BOOST

        if region.is_text and traits.is_price and not traits.is_title:
            mutation.font_size = self._current_font(mutation, region) * PRICE_BOOST
            mutation.stroke = PRICE_GLOW

        if traits.logical and traits.logical in effects.rotation:
            mutation.rotation = effects.rotation[traits.logical]

    def _current_font(self, mutation: RegionMutation, region: RegionSnapshot) -> float:
        return mutation.font_size or region.font_size or DEFAULT_FONT_SIZE

    def _apply_positioning(
        self,
        mutation: RegionMutation,
        region: RegionSnapshot,
        traits: RegionTraits,
        bundle: SuggestionBundle,
    ) -> None:
        x, y = region.x, region.y
        positioning = bundle.positioning

        if positioning is not None:
            if traits.is_title:
                x, y = self._offset(x, y, positioning.title, TEXT_FLOOR)
            elif traits.is_subtitle:
                x, y = self._offset(x, y, positioning.subtitle, TEXT_FLOOR)
            elif traits.is_cta:
                x, y = self._offset(x, y, positioning.cta, *CTA_RANGE)
            elif traits.is_price:
                x, y = self._offset(x, y, positioning.price, TEXT_FLOOR)
            elif traits.is_image:
                x, y = self._offset(x, y, positioning.image, *IMAGE_RANGE)

        layout = bundle.layout
        if layout is not None and layout.avoid_overlap:
            if traits.is_title or traits.is_subtitle or traits.is_generic_text:
                x = max(OVERLAP_MARGIN, x)
                y = max(OVERLAP_MARGIN, y)

        if (x, y) != (region.x, region.y):
            mutation.position = Position(x=x, y=y)
            logger.debug(f"Position for {region.name}: ({region.x}, {region.y}) -> ({x}, {y})")

    def _offset(
        self,
        x: float,
        y: float,
        offset: Offset,
        low: float,
        high: float | None = None,
    ) -> tuple[float, float]:
        return _clamp(x + offset.x, low, high), _clamp(y + offset.y, low, high)
