"""Unit tests for the Lambda API handler."""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest

from listing_campaigns.handlers import api
from listing_campaigns.models import ChatResponse, RenderResult, SuggestionBundle, Tier


def make_event(method, path, body=None, base64_body=False):
    event = {"httpMethod": method, "path": path}
    if body is not None:
        raw = body if isinstance(body, str) else json.dumps(body)
        if base64_body:
            raw = base64.b64encode(raw.encode("utf-8")).decode("ascii")
            event["isBase64Encoded"] = True
        event["body"] = raw
    return event


def body_of(response):
    return json.loads(response["body"])


@pytest.fixture
def service() -> MagicMock:
    service = MagicMock()
    service.process_chat_message.return_value = ChatResponse(success=True, message="Olá!")
    service.analyze_only.return_value = SuggestionBundle(tier=Tier.HIGH, confidence=90, reasoning="Luxo")
    service.generate_only.return_value = [
        RenderResult(template="template_alto_feed", success=True, format="feed"),
        RenderResult(template="template_alto_story", success=False, format="story", error="boom"),
    ]
    service.template_status.return_value = {"available": 4, "missing": 2, "details": {}}
    service.initialize_templates.return_value = ["README.md"]
    return service


@pytest.fixture(autouse=True)
def patched_service(service):
    with patch.object(api, "get_service", return_value=service):
        yield service


class TestRouting:
    """Tests for route dispatch and envelope."""

    def test_health(self):
        response = api.handler(make_event("GET", "/health"), None)
        body = body_of(response)

        assert response["statusCode"] == 200
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert "timestamp" in body

    def test_api_prefix_and_http_api_event(self):
        event = {"rawPath": "/api/health", "requestContext": {"http": {"method": "GET"}}}
        assert api.handler(event, None)["statusCode"] == 200

    def test_unknown_route(self):
        response = api.handler(make_event("GET", "/nope"), None)
        assert response["statusCode"] == 404
        assert body_of(response)["success"] is False

    def test_malformed_json(self):
        response = api.handler(make_event("POST", "/chat/message", "{not json"), None)
        assert response["statusCode"] == 400
        assert "Malformed JSON" in body_of(response)["error"]

    def test_malformed_base64_body(self, service):
        event = {"httpMethod": "POST", "path": "/chat/message", "body": "!!not-base64!!", "isBase64Encoded": True}
        response = api.handler(event, None)

        assert response["statusCode"] == 400
        assert "Malformed base64" in body_of(response)["error"]
        service.process_chat_message.assert_not_called()

    def test_base64_body_not_utf8(self):
        raw = base64.b64encode(b"\xff\xfe").decode("ascii")
        event = {"httpMethod": "POST", "path": "/chat/message", "body": raw, "isBase64Encoded": True}
        assert api.handler(event, None)["statusCode"] == 400

    def test_unexpected_error_is_500(self, service):
        service.template_status.side_effect = RuntimeError("disk gone")
        response = api.handler(make_event("GET", "/templates/status"), None)
        assert response["statusCode"] == 500
        assert body_of(response)["error"] == "disk gone"


class TestChatRoutes:
    """Tests for /chat/* routes."""

    def test_message_required(self, service):
        response = api.handler(make_event("POST", "/chat/message", {"message": "  "}), None)
        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "Message is required"
        service.process_chat_message.assert_not_called()

    def test_message(self, service):
        payload = {
            "message": "gere uma campanha",
            "productInfo": json.dumps({"description": "Casa", "budget": "R$ 200"}),
            "images": ["data:image/png;base64,AAA"],
        }
        response = api.handler(make_event("POST", "/chat/message", payload, base64_body=True), None)

        assert response["statusCode"] == 200
        assert body_of(response)["success"] is True
        assert body_of(response)["data"]["message"] == "Olá!"
        request = service.process_chat_message.call_args.args[0]
        assert request.product_info.description == "Casa"
        assert request.images == ["data:image/png;base64,AAA"]

    def test_message_failure_surfaces_success_flag(self, service):
        service.process_chat_message.return_value = ChatResponse(success=False, message="Desculpe")
        response = api.handler(make_event("POST", "/chat/message", {"message": "gere"}), None)
        body = body_of(response)

        assert response["statusCode"] == 200
        assert body["success"] is False
        assert body["data"] == {"success": False, "message": "Desculpe", "generatedImages": []}

    def test_analyze_requires_product(self):
        response = api.handler(make_event("POST", "/chat/analyze", {}), None)
        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "Product information is required"

    def test_analyze(self):
        response = api.handler(make_event("POST", "/chat/analyze", {"productInfo": {"description": "luxo"}}), None)
        body = body_of(response)
        assert body["data"]["profile"] == "alto"
        assert body["message"] == "Product classified as alto profile with 90% confidence"

    def test_generate_invalid_profile(self, service):
        payload = {"productInfo": {"description": "x"}, "profile": "premium"}
        response = api.handler(make_event("POST", "/chat/generate", payload), None)
        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "Profile must be one of: baixo, medio, alto"
        service.generate_only.assert_not_called()

    def test_generate(self, service):
        payload = {"productInfo": {"description": "x"}, "profile": "high"}
        body = body_of(api.handler(make_event("POST", "/chat/generate", payload), None))

        assert body["success"] is True
        assert body["message"] == "Generated 1/2 images successfully"
        assert service.generate_only.call_args.args[1] is Tier.HIGH

    def test_generate_without_profile(self, service):
        api.handler(make_event("POST", "/chat/generate", {"productInfo": {"description": "x"}}), None)
        assert service.generate_only.call_args.args[1] is None


class TestTemplateRoutes:
    """Tests for /templates/* routes."""

    def test_status(self):
        body = body_of(api.handler(make_event("GET", "/templates/status"), None))
        assert body["message"] == "4 templates available, 2 missing"

    def test_initialize(self):
        body = body_of(api.handler(make_event("POST", "/templates/initialize"), None))
        assert body["data"] == {"created": ["README.md"]}


class TestFileRoutes:
    """Tests for /output and /download."""

    @pytest.fixture(autouse=True)
    def output(self, tmp_path):
        (tmp_path / "alto_template_alto_feed_1.png").write_bytes(b"PNGDATA")
        with patch.object(api, "OUTPUT_PATH", tmp_path):
            yield tmp_path

    def test_output(self):
        response = api.handler(make_event("GET", "/output/alto_template_alto_feed_1.png"), None)
        assert response["statusCode"] == 200
        assert response["isBase64Encoded"] is True
        assert base64.b64decode(response["body"]) == b"PNGDATA"
        assert "Content-Disposition" not in response["headers"]

    def test_download(self):
        response = api.handler(make_event("GET", "/download/alto_template_alto_feed_1.png"), None)
        assert response["headers"]["Content-Disposition"] == 'attachment; filename="alto_template_alto_feed_1.png"'

    def test_missing_file(self):
        response = api.handler(make_event("GET", "/output/nope.png"), None)
        assert response["statusCode"] == 404

    @pytest.mark.parametrize("name", ["..%2Fsecret", ".env", "a..png"])
    def test_unsafe_name(self, name):
        response = api.handler(make_event("GET", f"/download/{name}"), None)
        assert response["statusCode"] == 400
