"""Alto Padrão templates (feed + story)."""

from ..models.template import TemplateDescriptor
from ..models.tier import TemplateFormat, Tier
from .regions import STANDARD_REGIONS

ALTO_FEED = TemplateDescriptor(
    name="template_alto_feed",
    tier=Tier.HIGH,
    format=TemplateFormat.FEED,
    resource="alto_padrao_feed.psd",
    regions=dict(STANDARD_REGIONS),
)

ALTO_STORY = TemplateDescriptor(
    name="template_alto_story",
    tier=Tier.HIGH,
    format=TemplateFormat.STORY,
    resource="alto_padrao_story.psd",
    regions=dict(STANDARD_REGIONS),
)
