"""Template catalog. Order matters: feed before story within a tier."""

from ..models.template import TemplateDescriptor
from .alto import ALTO_FEED, ALTO_STORY
from .baixo import BAIXO_FEED, BAIXO_STORY
from .medio import MEDIO_FEED, MEDIO_STORY

TEMPLATES: list[TemplateDescriptor] = [
    BAIXO_FEED,
    BAIXO_STORY,
    MEDIO_FEED,
    MEDIO_STORY,
    ALTO_FEED,
    ALTO_STORY,
]


__all__ = ["TEMPLATES"]
