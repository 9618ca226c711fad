"""Campaign request/response models."""

from dataclasses import dataclass, field
from typing import Any

from .product import ProductInfo
from .suggestion import SuggestionBundle


@dataclass
class RenderResult:
    """Outcome of rendering one template."""

    template: str
    success: bool
    format: str | None = None  # "feed" | "story"
    output_path: str | None = None
    web_path: str | None = None
    message: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self.template,
            "success": self.success,
            "format": self.format,
            "outputPath": self.output_path,
            "webPath": self.web_path,
            "message": self.message,
            "error": self.error,
        }


@dataclass
class GeneratedImage:
    """A successfully rendered image as shown to the chat client."""

    url: str
    type: str      # "feed" | "story"
    format: str    # "square" | "portrait"
    template: str

    def to_dict(self) -> dict[str, str]:
        return {"url": self.url, "type": self.type, "format": self.format, "template": self.template}


@dataclass
class ChatRequest:
    message: str
    images: list[str] = field(default_factory=list)
    product_info: ProductInfo | None = None


@dataclass
class ChatResponse:
    success: bool
    message: str
    analysis: SuggestionBundle | None = None
    generated_images: list[GeneratedImage] = field(default_factory=list)
    results: list[RenderResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
            "generatedImages": [img.to_dict() for img in self.generated_images],
        }
        if self.analysis is not None:
            data["analysis"] = self.analysis.to_dict()
        return data
