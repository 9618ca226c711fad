"""Baixo Padrão templates (feed + story)."""

from ..models.template import TemplateDescriptor
from ..models.tier import TemplateFormat, Tier
from .regions import STANDARD_REGIONS

BAIXO_FEED = TemplateDescriptor(
    name="template_baixo_feed",
    tier=Tier.LOW,
    format=TemplateFormat.FEED,
    resource="baixo_padrao_feed.psd",
    regions=dict(STANDARD_REGIONS),
)

BAIXO_STORY = TemplateDescriptor(
    name="template_baixo_story",
    tier=Tier.LOW,
    format=TemplateFormat.STORY,
    resource="baixo_padrao_story.psd",
    regions=dict(STANDARD_REGIONS),
)
