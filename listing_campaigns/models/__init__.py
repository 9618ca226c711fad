"""Data models."""

from .campaign import ChatRequest, ChatResponse, GeneratedImage, RenderResult
from .mutation import Position, RegionMutation, Shadow, Stroke
from .product import ProductInfo
from .region import RegionSnapshot
from .suggestion import (
    RGBA,
    ColorSuggestions,
    InvalidSuggestionError,
    LayoutStrategy,
    Offset,
    Positioning,
    SuggestionBundle,
    TextVariants,
    VisualEffects,
)
from .template import TemplateDescriptor
from .tier import TemplateFormat, Tier

__all__ = [
    "RGBA",
    "ChatRequest",
    "ChatResponse",
    "ColorSuggestions",
    "GeneratedImage",
    "InvalidSuggestionError",
    "LayoutStrategy",
    "Offset",
    "Position",
    "Positioning",
    "ProductInfo",
    "RegionMutation",
    "RegionSnapshot",
    "RenderResult",
    "Shadow",
    "Stroke",
    "SuggestionBundle",
    "TemplateDescriptor",
    "TemplateFormat",
    "TextVariants",
    "Tier",
    "VisualEffects",
]
