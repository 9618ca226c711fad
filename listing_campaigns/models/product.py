"""Product model - user-supplied facts about a listing."""

from dataclasses import dataclass, field, asdict
from typing import Any


@dataclass(frozen=True)
class ProductInfo:
    """A listing to advertise. Created per request, never mutated."""

    description: str = ""
    target_audience: str = ""
    location: str = ""
    budget: str = ""
    duration: str = ""
    images: tuple[str, ...] = field(default_factory=tuple)  # paths, URLs or data URIs
    logo: str | None = None

    @property
    def has_basic_info(self) -> bool:
        return bool(self.description or self.target_audience or self.budget or self.location)

    @classmethod
    def from_dict(cls, data: dict[str, Any], images: list[str] | None = None) -> "ProductInfo":
        """Build from a request payload. Extra images (uploads) are appended."""
        all_images = list(data.get("images") or []) + list(images or [])
        return cls(
            description=str(data.get("description") or ""),
            target_audience=str(data.get("target_audience") or data.get("targetAudience") or ""),
            location=str(data.get("location") or ""),
            budget=str(data.get("budget") or ""),
            duration=str(data.get("duration") or ""),
            images=tuple(all_images),
            logo=data.get("logo") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["images"] = list(self.images)
        return data
