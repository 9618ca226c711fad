"""Shared pytest fixtures for listing campaign tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from listing_campaigns.models import (
    ProductInfo,
    RegionSnapshot,
    SuggestionBundle,
    TextVariants,
    Tier,
)
from listing_campaigns.models.region import TEXT_KIND
from listing_campaigns.services.templates import TemplateRegistry
from listing_campaigns.templates import TEMPLATES


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Templates directory with every catalog resource present.

    Returns:
        Path to a populated templates directory
    """
    path = tmp_path / "templates"
    path.mkdir()
    for template in TEMPLATES:
        (path / template.resource).write_bytes(b"psd")
    return path


@pytest.fixture
def empty_templates_dir(tmp_path: Path) -> Path:
    path = tmp_path / "empty_templates"
    path.mkdir()
    return path


@pytest.fixture
def registry(templates_dir: Path) -> TemplateRegistry:
    return TemplateRegistry(templates_dir)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"


@pytest.fixture
def product() -> ProductInfo:
    """A mid-range listing with two photos and a logo."""
    return ProductInfo(
        description="Apartamento de 3 quartos com varanda gourmet",
        target_audience="Famílias de classe média",
        location="Moema, São Paulo",
        budget="R$ 500/dia",
        duration="30 dias",
        images=("https://img.example/a.jpg", "https://img.example/b.jpg"),
        logo="https://img.example/logo.png",
    )


@pytest.fixture
def bundle() -> SuggestionBundle:
    """Minimal bundle: copy only, no colors/effects/layout/positioning."""
    return SuggestionBundle(
        tier=Tier.MID,
        confidence=85,
        reasoning="Classe média",
        recommended_templates=["template_medio_feed", "template_medio_story"],
        text=TextVariants(
            feed_title="Viva Moema",
            feed_subtitle="3 quartos com varanda",
            feed_cta="Agende",
            story_title="Moema Story",
            story_subtitle="Story sub",
            story_cta="Fale Já",
            price="R$ 650.000",
        ),
    )


@pytest.fixture
def standard_regions() -> list[RegionSnapshot]:
    """Snapshot of a stock template: the six mapped regions."""
    return [
        RegionSnapshot(name="titulo_principal", kind=TEXT_KIND, x=100.0, y=200.0, font_size=40.0),
        RegionSnapshot(name="subtitulo", kind=TEXT_KIND, x=100.0, y=300.0, font_size=24.0),
        RegionSnapshot(name="preco", kind=TEXT_KIND, x=100.0, y=400.0, font_size=30.0),
        RegionSnapshot(name="botao_cta", kind=TEXT_KIND, x=300.0, y=900.0, font_size=20.0),
        RegionSnapshot(name="imagem_produto", kind="//ly.img.ubq/graphic", x=0.0, y=0.0),
        RegionSnapshot(name="logo_empresa", kind="//ly.img.ubq/graphic", x=900.0, y=50.0),
    ]


@pytest.fixture
def mock_llm() -> MagicMock:
    """LLMClient double; set `.call.return_value` or `.call.side_effect`."""
    return MagicMock()
