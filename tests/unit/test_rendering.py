"""Unit tests for RenderService."""

from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from listing_campaigns.clients.render import RenderClient, RenderError, RenderTimeoutError
from listing_campaigns.models import ProductInfo, SuggestionBundle, Tier
from listing_campaigns.models.region import TEXT_KIND
from listing_campaigns.services.rendering import RenderService


def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), (255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def session(standard_regions) -> MagicMock:
    session = MagicMock()
    session.snapshot.return_value = standard_regions
    session.export.return_value = png_bytes()
    return session


@pytest.fixture
def client(session) -> MagicMock:
    client = MagicMock()
    client.session.return_value.__enter__.return_value = session
    client.session.return_value.__exit__.return_value = False
    return client


@pytest.fixture
def service(client, registry, output_dir) -> RenderService:
    return RenderService(client, registry, output_dir=output_dir)


class TestRenderCampaign:
    """Tests for render_campaign."""

    def test_renders_every_template(self, service, client, session, bundle, product, output_dir, templates_dir):
        results = service.render_campaign(product, bundle)

        assert [r.success for r in results] == [True, True]
        assert [r.format for r in results] == ["feed", "story"]
        assert client.session.call_args_list[0].args[0] == templates_dir / "medio_padrao_feed.psd"
        for result in results:
            assert result.web_path == f"/output/{result.output_path.split('/')[-1]}"
            assert result.web_path.startswith("/output/medio_template_medio_")
            assert (output_dir / result.web_path.split("/")[-1]).read_bytes() == png_bytes()
        assert session.apply.call_count == 12

    def test_pins_one_image_per_template(self, service, session, bundle, product):
        service.render_campaign(product, bundle)

        applied = [
            dict(call.args[1]).get("fill/image/imageFileURI")
            for call in session.apply.call_args_list
            if call.args[0] == "imagem_produto"
        ]
        assert applied == ["https://img.example/a.jpg", "https://img.example/b.jpg"]

    def test_missing_file_is_failed_result(self, service, client, bundle, product, templates_dir):
        (templates_dir / "medio_padrao_story.psd").unlink()

        results = service.render_campaign(product, bundle)

        assert [r.success for r in results] == [True, False]
        assert "not found" in results[1].error
        assert client.session.call_count == 1

    def test_unknown_template_is_failed_result(self, service, bundle, product):
        bundle.recommended_templates = ["template_luxo_feed"]
        results = service.render_campaign(product, bundle)
        assert results[0].success is False
        assert results[0].template == "template_luxo_feed"

    def test_render_errors_do_not_stop_loop(self, service, session, bundle, product):
        session.export.side_effect = [RenderTimeoutError("export timed out"), png_bytes()]

        results = service.render_campaign(product, bundle)

        assert [r.success for r in results] == [False, True]
        assert "timed out" in results[0].error

    def test_unexpected_errors_do_not_stop_loop(self, service, session, bundle, product):
        session.snapshot.side_effect = [AttributeError("bad region payload"), session.snapshot.return_value]

        results = service.render_campaign(product, bundle)

        assert [r.success for r in results] == [False, True]
        assert results[0].format == "feed"
        assert "bad region payload" in results[0].error

    def test_malformed_region_listing_with_http_client(self, registry, output_dir, bundle, product):
        def fake_request(method, url, **kwargs):
            response = MagicMock()
            response.status_code = 200
            response.content = b""
            if method == "POST" and url.endswith("/sessions"):
                opened.append(f"s{len(opened) + 1}")
                response.json.return_value = {"session_id": opened[-1]}
            elif url.endswith("/sessions/s1/regions"):
                response.json.return_value = []
            elif url.endswith("/regions"):
                response.json.return_value = {"regions": [{"name": "titulo_principal", "type": TEXT_KIND}]}
            elif url.endswith("/properties/query"):
                response.json.return_value = {"values": {"position/x": 100, "position/y": 200, "text/fontSize": 40}}
            elif url.endswith("/export"):
                response.content = png_bytes()
            else:
                response.json.return_value = {}
            return response

        opened = []
        service = RenderService(RenderClient("http://render.local"), registry, output_dir=output_dir)
        with patch("listing_campaigns.clients.render.requests.request", side_effect=fake_request):
            results = service.render_campaign(product, bundle)

        assert [r.success for r in results] == [False, True]
        assert "unexpected payload" in results[0].error
        assert opened == ["s1", "s2"]

    def test_session_open_failure(self, service, client, bundle, product):
        client.session.side_effect = RenderError("connection refused")
        results = service.render_campaign(product, bundle)
        assert all(not r.success for r in results)

    def test_undecodable_export(self, service, session, bundle, product, output_dir):
        session.export.return_value = b"not a png"

        results = service.render_campaign(product, bundle)

        assert not any(r.success for r in results)
        assert "decoded" in results[0].error
        assert not output_dir.exists() or not any(output_dir.iterdir())

    def test_no_images(self, service, session, bundle):
        results = service.render_campaign(ProductInfo(description="x"), bundle)
        assert all(r.success for r in results)
        assert all(call.args[0] != "imagem_produto" for call in session.apply.call_args_list)

    def test_forced_high_tier_default_colors(self, service, session, product):
        bundle = SuggestionBundle(
            tier=Tier.HIGH,
            confidence=100,
            reasoning="Profile manually specified",
            recommended_templates=["template_alto_feed", "template_alto_story"],
        )

        service.render_campaign(product, bundle)

        colors = [
            dict(call.args[1]).get("fill/color/value")
            for call in session.apply.call_args_list
            if call.args[0] == "titulo_principal"
        ]
        assert [(c.r, c.g, c.b) for c in colors] == [(0.8, 0.6, 0.2), (0.6, 0.4, 0.1)]
