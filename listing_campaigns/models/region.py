"""Region snapshot - what a render session reports for one named region."""

from dataclasses import dataclass

TEXT_KIND = "//ly.img.ubq/text"


@dataclass(frozen=True)
class RegionSnapshot:
    """Current state of a named region inside an open template."""

    name: str
    kind: str = ""
    x: float = 0.0
    y: float = 0.0
    font_size: float | None = None

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT_KIND or self.kind == "text"
