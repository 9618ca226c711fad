"""Médio Padrão templates (feed + story)."""

from ..models.template import TemplateDescriptor
from ..models.tier import TemplateFormat, Tier
from .regions import STANDARD_REGIONS

MEDIO_FEED = TemplateDescriptor(
    name="template_medio_feed",
    tier=Tier.MID,
    format=TemplateFormat.FEED,
    resource="medio_padrao_feed.psd",
    regions=dict(STANDARD_REGIONS),
)

MEDIO_STORY = TemplateDescriptor(
    name="template_medio_story",
    tier=Tier.MID,
    format=TemplateFormat.STORY,
    resource="medio_padrao_story.psd",
    regions=dict(STANDARD_REGIONS),
)
