"""AWS Lambda handler for the campaign chat API."""

import base64
import binascii
import json
import logging
import re
from typing import Any

from ..clients import LLMClient, RenderClient
from ..config import (
    ADVISORY_TIMEOUT,
    APP_VERSION,
    LOG_LEVEL,
    OPENAI_API_KEY,
    OPENAI_MODEL,
    OPENAI_REASONING_EFFORT,
    OUTPUT_PATH,
    RENDER_API_TOKEN,
    RENDER_API_URL,
    RENDER_TIMEOUT,
    TEMPLATES_PATH,
)
from ..engine import RegionMappingEngine
from ..models import ChatRequest, ProductInfo, Tier
from ..services import (
    AdvisoryService,
    CampaignService,
    ChatService,
    HeuristicClassifier,
    RenderService,
    SuggestionResolver,
    TemplateRegistry,
)
from ..utils import now_iso

logger = logging.getLogger(__name__)
logging.getLogger().setLevel(LOG_LEVEL)

API_PREFIX = "/api"
SAFE_FILE_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

_service: CampaignService | None = None


class BadRequest(Exception):
    """Request body failed validation."""
    pass


def build_service() -> CampaignService:
    """Wire clients and services from configuration."""
    llm = LLMClient(
        api_key=OPENAI_API_KEY,
        model=OPENAI_MODEL,
        reasoning_effort=OPENAI_REASONING_EFFORT or None,
        timeout=ADVISORY_TIMEOUT,
    ) if OPENAI_API_KEY else None
    if llm is None:
        logger.warning("OPENAI_API_KEY not set, analysis will use heuristics only")

    registry = TemplateRegistry(TEMPLATES_PATH)
    render_client = RenderClient(RENDER_API_URL, RENDER_API_TOKEN, export_timeout=RENDER_TIMEOUT)
    resolver = SuggestionResolver(
        AdvisoryService(llm) if llm else None,
        registry,
        HeuristicClassifier(),
    )
    renderer = RenderService(render_client, registry, RegionMappingEngine(registry), OUTPUT_PATH)
    return CampaignService(resolver, renderer, ChatService(llm), registry)


def get_service() -> CampaignService:
    global _service
    if _service is None:
        _service = build_service()
    return _service


def _envelope(
    status_code: int,
    success: bool,
    data: Any = None,
    message: str | None = None,
    error: str | None = None,
) -> dict:
    body: dict[str, Any] = {"success": success}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if error is not None:
        body["error"] = error
    body["timestamp"] = now_iso()
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json", **CORS_HEADERS},
        "body": json.dumps(body, ensure_ascii=False),
    }


def _parse_body(event: dict) -> dict:
    body = event.get("body") or "{}"
    if event.get("body") and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise BadRequest(f"Malformed base64 body: {e}") from e
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise BadRequest(f"Malformed JSON body: {e}") from e
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def _parse_product(data: dict, images: list[str] | None = None) -> ProductInfo | None:
    raw = data.get("productInfo")
    if isinstance(raw, str):
        # Multipart clients send productInfo as a JSON string
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BadRequest(f"productInfo is not valid JSON: {e}") from e
    if not raw:
        return None
    if not isinstance(raw, dict):
        raise BadRequest("productInfo must be an object")
    return ProductInfo.from_dict(raw, images)


def _route(event: dict) -> tuple[str, str]:
    method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "GET")
    path = event.get("rawPath") or event.get("path") or "/"
    if path.startswith(API_PREFIX + "/"):
        path = path[len(API_PREFIX):]
    return method.upper(), path.rstrip("/") or "/"


# ===== Routes =====

def health() -> dict:
    return _envelope(200, True, data={
        "status": "healthy",
        "version": APP_VERSION,
        "services": {"api": True, "templates": True},
    })


def chat_message(event: dict) -> dict:
    data = _parse_body(event)
    message = str(data.get("message") or "")
    if not message.strip():
        return _envelope(400, False, message="Message is required")

    images = [str(img) for img in data.get("images") or []]
    request = ChatRequest(message=message, images=images, product_info=_parse_product(data))
    response = get_service().process_chat_message(request)
    message = "Chat processed successfully" if response.success else "Failed to process chat message"
    return _envelope(200, response.success, data=response.to_dict(), message=message)


def chat_analyze(event: dict) -> dict:
    product = _parse_product(_parse_body(event))
    if product is None:
        return _envelope(400, False, message="Product information is required")

    analysis = get_service().analyze_only(product)
    return _envelope(
        200,
        True,
        data=analysis.to_dict(),
        message=f"Product classified as {analysis.tier.value} profile with {analysis.confidence}% confidence",
    )


def chat_generate(event: dict) -> dict:
    data = _parse_body(event)
    product = _parse_product(data)
    if product is None:
        return _envelope(400, False, message="Product information is required")

    tier = None
    if data.get("profile"):
        try:
            tier = Tier.parse(data["profile"])
        except ValueError:
            return _envelope(400, False, message="Profile must be one of: baixo, medio, alto")

    results = get_service().generate_only(product, tier)
    succeeded = sum(1 for r in results if r.success)
    return _envelope(
        200,
        succeeded > 0,
        data=[r.to_dict() for r in results],
        message=f"Generated {succeeded}/{len(results)} images successfully",
    )


def templates_status() -> dict:
    status = get_service().template_status()
    return _envelope(
        200,
        True,
        data=status,
        message=f"{status['available']} templates available, {status['missing']} missing",
    )


def templates_initialize() -> dict:
    created = get_service().initialize_templates()
    return _envelope(200, True, data={"created": created}, message="Template system initialized successfully")


def serve_file(file_name: str, download: bool = False) -> dict:
    if not SAFE_FILE_NAME.match(file_name) or ".." in file_name:
        return _envelope(400, False, message="Invalid file name")

    path = OUTPUT_PATH / file_name
    if not path.is_file():
        return _envelope(404, False, message="File not found")

    headers = {"Content-Type": "image/png", **CORS_HEADERS}
    if download:
        headers["Content-Disposition"] = f'attachment; filename="{file_name}"'
    return {
        "statusCode": 200,
        "headers": headers,
        "body": base64.b64encode(path.read_bytes()).decode("ascii"),
        "isBase64Encoded": True,
    }


def handler(event, context):
    """
    AWS Lambda handler - API Gateway (REST or HTTP API) events.

    Routes:
        GET  /health
        POST /chat/message      {"message", "productInfo"?, "images"?}
        POST /chat/analyze      {"productInfo"}
        POST /chat/generate     {"productInfo", "profile"?}
        GET  /templates/status
        POST /templates/initialize
        GET  /output/{file}
        GET  /download/{file}
    """
    method, path = _route(event)
    logger.info(f"{method} {path}")

    try:
        if method == "GET" and path == "/health":
            return health()
        if method == "POST" and path == "/chat/message":
            return chat_message(event)
        if method == "POST" and path == "/chat/analyze":
            return chat_analyze(event)
        if method == "POST" and path == "/chat/generate":
            return chat_generate(event)
        if method == "GET" and path == "/templates/status":
            return templates_status()
        if method == "POST" and path == "/templates/initialize":
            return templates_initialize()
        if method == "GET" and path.startswith("/output/"):
            return serve_file(path[len("/output/"):])
        if method == "GET" and path.startswith("/download/"):
            return serve_file(path[len("/download/"):], download=True)
        return _envelope(404, False, message=f"Route not found: {method} {path}")

    except BadRequest as e:
        return _envelope(400, False, message="Invalid request", error=str(e))
    except Exception as e:
        logger.exception(f"Error handling {method} {path}")
        return _envelope(500, False, message="Failed to process request", error=str(e))


# Local testing
if __name__ == "__main__":
    import sys

    logging.basicConfig(level=LOG_LEVEL)

    if len(sys.argv) < 2:
        print("Usage: python -m listing_campaigns.handlers.api <message> [product_json] [profile]")
        print()
        print("Arguments:")
        print("  message      - Chat message, e.g. 'gere uma campanha'")
        print("  product_json - JSON object with description, target_audience, location, budget, duration, images")
        print("  profile      - baixo | medio | alto (runs /chat/generate instead of /chat/message)")
        print()
        print("Example:")
        print('  python -m listing_campaigns.handlers.api "gere uma campanha" \'{"description": "apartamento popular", "budget": "R$ 200"}\'')
        sys.exit(1)

    payload: dict[str, Any] = {"message": sys.argv[1]}
    if len(sys.argv) > 2:
        payload["productInfo"] = json.loads(sys.argv[2])

    route = "/chat/message"
    if len(sys.argv) > 3:
        payload["profile"] = sys.argv[3]
        route = "/chat/generate"

    print("Running with input:", flush=True)
    print(json.dumps(payload, indent=2, ensure_ascii=False), flush=True)
    print()

    result = handler({"httpMethod": "POST", "path": route, "body": json.dumps(payload)}, None)
    print("\nResult:", flush=True)
    print(json.dumps(json.loads(result["body"]), indent=2, ensure_ascii=False), flush=True)
