"""Template registry - catalog lookups and on-disk availability."""

import logging
from pathlib import Path

from ..config import TEMPLATES_PATH
from ..models.template import TemplateDescriptor
from ..models.tier import TemplateFormat, Tier
from ..templates import TEMPLATES
from ..templates.regions import CANVAS_SIZES

logger = logging.getLogger(__name__)

MANIFEST_NAME = "README.md"


class TemplateRegistry:
    """Static template catalog bound to a templates directory.

    Availability is checked against the filesystem on every call so files
    added or removed between requests are picked up.
    """

    def __init__(
        self,
        templates_dir: Path | str = TEMPLATES_PATH,
        templates: list[TemplateDescriptor] | None = None,
    ):
        self.templates_dir = Path(templates_dir)
        self.templates = list(TEMPLATES if templates is None else templates)
        logger.info(f"Loaded {len(self.templates)} template configurations")

    def by_tier(self, tier: Tier) -> list[TemplateDescriptor]:
        return [t for t in self.templates if t.tier is tier]

    def by_name(self, name: str) -> TemplateDescriptor | None:
        for template in self.templates:
            if template.name == name:
                return template
        return None

    def resource_path(self, descriptor: TemplateDescriptor) -> Path:
        return self.templates_dir / descriptor.resource

    def is_available(self, name: str) -> bool:
        descriptor = self.by_name(name)
        if descriptor is None:
            return False
        return self.resource_path(descriptor).is_file()

    def recommendations(self, tier: Tier) -> list[str]:
        """Names of the tier's templates whose resource exists right now."""
        return [t.name for t in self.by_tier(tier) if self.is_available(t.name)]

    def list_all(self) -> tuple[list[TemplateDescriptor], list[TemplateDescriptor]]:
        """Split the catalog into (available, missing)."""
        available = []
        missing = []
        for template in self.templates:
            if self.is_available(template.name):
                available.append(template)
            else:
                missing.append(template)
        return available, missing

    def bootstrap(self) -> list[str]:
        """
        Create placeholder resources and a manifest for missing templates.

        Existing files are never overwritten, so running this twice is a no-op.

        Returns:
            Names of the files created by this call.
        """
        created = []
        if not self.templates_dir.exists():
            self.templates_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created templates directory: {self.templates_dir}")

        for template in self.templates:
            path = self.resource_path(template)
            if not path.exists():
                path.touch()
                created.append(template.resource)
                logger.info(f"Created placeholder template: {template.resource}")

        manifest = self.templates_dir / MANIFEST_NAME
        if not manifest.exists():
            manifest.write_text(self._build_manifest(), encoding="utf-8")
            created.append(MANIFEST_NAME)
            logger.info(f"Created templates {MANIFEST_NAME}")

        return created

    def _build_manifest(self) -> str:
        lines = [
            "# Templates",
            "",
            "Design templates for each listing tier and placement format.",
            "",
            "## Expected files",
            "",
        ]
        for tier in Tier:
            lines.append(f"### {tier.label}")
            for template in self.by_tier(tier):
                size = CANVAS_SIZES[template.format.value]
                lines.append(f"- `{template.resource}` - {template.format.value}, {size}")
            lines.append("")

        lines.extend(["## Expected regions", ""])
        seen = set()
        for template in self.templates:
            for logical, physical in template.regions.items():
                if physical not in seen:
                    seen.add(physical)
                    lines.append(f"- `{physical}` - {logical}")
        lines.extend([
            "",
            "## Canvas",
            "",
            f"- **Feed**: {CANVAS_SIZES[TemplateFormat.FEED.value]}",
            f"- **Story**: {CANVAS_SIZES[TemplateFormat.STORY.value]}",
            "",
        ])
        return "\n".join(lines)
