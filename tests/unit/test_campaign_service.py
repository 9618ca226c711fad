"""Unit tests for the campaign orchestrator."""

from unittest.mock import MagicMock

import pytest

from listing_campaigns.models import ChatRequest, ProductInfo, RenderResult, SuggestionBundle, Tier
from listing_campaigns.services.campaign import FAILURE_MESSAGE, CampaignService


@pytest.fixture
def resolver(bundle) -> MagicMock:
    resolver = MagicMock()
    resolver.resolve.return_value = bundle
    return resolver


@pytest.fixture
def renderer() -> MagicMock:
    renderer = MagicMock()
    renderer.render_campaign.return_value = [
        RenderResult(
            template="template_medio_feed",
            success=True,
            format="feed",
            output_path="/tmp/out/medio_template_medio_feed_1.png",
            web_path="/output/medio_template_medio_feed_1.png",
        ),
        RenderResult(template="template_medio_story", success=False, format="story", error="boom"),
    ]
    return renderer


@pytest.fixture
def chat() -> MagicMock:
    chat = MagicMock()
    chat.reply.return_value = "Vamos criar sua campanha!"
    return chat


@pytest.fixture
def service(resolver, renderer, chat, registry) -> CampaignService:
    return CampaignService(resolver, renderer, chat, registry)


class TestTriggerPolicy:
    """Tests for should_analyze."""

    def test_no_info_no_intent_no_images(self, service, resolver, renderer, chat):
        response = service.process_chat_message(ChatRequest(message="olá, tudo bem?"))

        resolver.resolve.assert_not_called()
        renderer.render_campaign.assert_not_called()
        assert response.success is True
        assert response.analysis is None
        assert response.message == "Vamos criar sua campanha!"

    def test_product_with_basic_info(self, service, product):
        assert service.should_analyze(ChatRequest(message="oi", product_info=product))

    def test_product_without_basic_info(self, service):
        assert not service.should_analyze(ChatRequest(message="oi", product_info=ProductInfo(duration="10 dias")))

    @pytest.mark.parametrize("message", ["Gere uma campanha", "quero um ANÚNCIO", "monte algo"])
    def test_intent_keyword(self, service, message):
        assert service.should_analyze(ChatRequest(message=message))

    def test_images(self, service):
        assert service.should_analyze(ChatRequest(message="oi", images=["data:image/png;base64,AAA"]))


class TestProcessChatMessage:
    """Tests for the full chat flow."""

    def test_default_product_from_message(self, service, resolver, renderer):
        service.process_chat_message(ChatRequest(message="criar campanha", images=["a.jpg"]))

        product = resolver.resolve.call_args.args[0]
        assert product.description == "criar campanha"
        assert product.target_audience == "Público em geral"
        assert product.location == "Não especificado"
        assert product.budget == "R$ 500/dia"
        assert product.duration == "15 dias"
        assert product.images == ("a.jpg",)
        assert renderer.render_campaign.call_args.args[0] is product

    def test_partial_success(self, service, product, chat):
        response = service.process_chat_message(ChatRequest(message="oi", product_info=product))

        assert response.success is True
        assert len(response.results) == 2
        assert len(response.generated_images) == 1
        image = response.generated_images[0]
        assert (image.url, image.type, image.format, image.template) == (
            "/output/medio_template_medio_feed_1.png", "feed", "square", "template_medio_feed",
        )
        assert "1/2 imagens geradas" in response.message
        assert "MEDIO padrão (85% de confiança)" in response.message
        assert "1 imagem(ns) não pôde(ram)" in response.message
        assert response.message.startswith("Vamos criar sua campanha!")
        chat.reply.assert_called_once_with("oi", product, [])

    def test_no_templates_available(self, service, resolver, renderer, product):
        resolver.resolve.return_value = SuggestionBundle(tier=Tier.LOW, confidence=70, reasoning="popular")

        response = service.process_chat_message(ChatRequest(message="oi", product_info=product))

        renderer.render_campaign.assert_not_called()
        assert response.generated_images == []
        assert "Recomendação" in response.message

    def test_unexpected_error(self, service, resolver, product):
        resolver.resolve.side_effect = RuntimeError("kaboom")

        response = service.process_chat_message(ChatRequest(message="oi", product_info=product))

        assert response.success is False
        assert response.message == FAILURE_MESSAGE
        assert response.analysis is None
        assert response.generated_images == []

    def test_to_dict(self, service, product):
        data = service.process_chat_message(ChatRequest(message="oi", product_info=product)).to_dict()
        assert data["analysis"]["profile"] == "medio"
        assert data["generatedImages"][0]["format"] == "square"


class TestStandaloneOperations:
    """Tests for analyze_only, generate_only and template management."""

    def test_analyze_only(self, service, resolver, product, bundle):
        assert service.analyze_only(product) is bundle
        resolver.resolve.assert_called_once_with(product)

    def test_generate_only_forced_tier(self, service, resolver, renderer, product, bundle):
        results = service.generate_only(product, Tier.HIGH)

        resolver.resolve.assert_called_once_with(product, Tier.HIGH)
        renderer.render_campaign.assert_called_once_with(product, bundle)
        assert len(results) == 2

    def test_template_status(self, service, templates_dir):
        (templates_dir / "alto_padrao_story.psd").unlink()

        status = service.template_status()

        assert status["available"] == 5
        assert status["missing"] == 1
        assert status["details"]["missing"][0]["name"] == "template_alto_story"

    def test_initialize_templates(self, service, templates_dir):
        assert service.initialize_templates() == ["README.md"]
