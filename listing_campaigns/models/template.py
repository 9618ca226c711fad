"""Template descriptor - one design resource per tier x format."""

from dataclasses import dataclass, field
from typing import Any

from .tier import TemplateFormat, Tier


@dataclass(frozen=True)
class TemplateDescriptor:
    """A named design template. Read-only configuration."""

    name: str
    tier: Tier
    format: TemplateFormat
    resource: str                                          # file name inside the templates directory
    regions: dict[str, str] = field(default_factory=dict)  # logical role -> physical region name

    @property
    def is_story(self) -> bool:
        return self.format is TemplateFormat.STORY

    def physical_to_logical(self) -> dict[str, str]:
        return {physical: logical for logical, physical in self.regions.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "profile": self.tier.value,
            "format": self.format.value,
            "resource": self.resource,
            "layers": dict(self.regions),
        }
