"""Region traits - what kind of element a region is.

The logical role from the template mapping wins; otherwise the physical
layer name is matched against Portuguese and English substrings.
"""

from dataclasses import dataclass

from ..models.region import RegionSnapshot

TEXT_ROLES = ("title", "subtitle", "cta", "price", "location", "description")

_SUBTITLE = ("subtitulo", "subtitle")
_TITLE = ("titulo", "title")
_MAIN_TITLE = ("titulo_principal", "title_main")
_CTA = ("cta", "botao", "button")
_PRICE = ("preco", "price")
_IMAGE = ("imagem", "image", "foto")
_LOGO = ("logo",)
_BACKGROUND = ("fundo", "background")
_LOCATION = ("localizacao", "location")
_GENERIC_TEXT = ("texto", "text")


def _has(name: str, needles: tuple[str, ...]) -> bool:
    return any(needle in name for needle in needles)


@dataclass(frozen=True)
class RegionTraits:
    """Flags derived from a region's logical role and physical name."""

    logical: str | None
    is_text: bool
    is_title: bool
    is_main_title: bool
    is_subtitle: bool
    is_cta: bool
    is_price: bool
    is_image: bool
    is_logo: bool
    is_background: bool
    is_location: bool
    is_generic_text: bool

    @property
    def is_cta_background(self) -> bool:
        """Decoration behind a CTA button (e.g. "fundo_cta")."""
        return self.is_background and self.is_cta


def classify(region: RegionSnapshot, logical: str | None) -> RegionTraits:
    name = region.name.lower()
    role = (logical or "").lower()

    is_subtitle = role == "subtitle" or (not role and _has(name, _SUBTITLE))
    is_title = role == "title" or (not role and not is_subtitle and _has(name, _TITLE))
    is_price = role == "price" or (not role and _has(name, _PRICE) and not is_title)

    return RegionTraits(
        logical=logical,
        is_text=region.is_text,
        is_title=is_title,
        is_main_title=role == "title" or (is_title and _has(name, _MAIN_TITLE)),
        is_subtitle=is_subtitle,
        is_cta=role == "cta" or _has(name, _CTA),
        is_price=is_price,
        is_image=role.startswith("image") or (not role and _has(name, _IMAGE)),
        is_logo=role.startswith("logo") or (not role and _has(name, _LOGO)),
        is_background=_has(name, _BACKGROUND) or role == "background",
        is_location=role == "location" or _has(name, _LOCATION),
        is_generic_text=_has(name, _GENERIC_TEXT),
    )
