"""Campaign orchestrator - chat message to analysis, images and reply."""

import logging
from typing import Any

from ..models.campaign import ChatRequest, ChatResponse, GeneratedImage, RenderResult
from ..models.product import ProductInfo
from ..models.suggestion import SuggestionBundle
from ..models.tier import TemplateFormat, Tier
from .analysis import SuggestionResolver
from .chat import ChatService
from .rendering import RenderService
from .templates import TemplateRegistry

logger = logging.getLogger(__name__)

INTENT_KEYWORDS = ["gerar", "criar", "campanha", "anúncio", "template", "perfil", "análise", "gere", "monte"]

FAILURE_MESSAGE = (
    "Desculpe, ocorreu um erro ao processar sua mensagem. Por favor, tente novamente "
    "ou forneça mais informações sobre seu empreendimento."
)


def default_product(message: str, images: list[str] | None = None) -> ProductInfo:
    """Minimal listing built from a bare chat message."""
    return ProductInfo(
        description=message,
        target_audience="Público em geral",
        location="Não especificado",
        budget="R$ 500/dia",
        duration="15 dias",
        images=tuple(images or []),
    )


class CampaignService:
    """Coordinates resolver, renderer and chat reply for one request at a time."""

    def __init__(
        self,
        resolver: SuggestionResolver,
        renderer: RenderService,
        chat: ChatService,
        registry: TemplateRegistry,
    ):
        self.resolver = resolver
        self.renderer = renderer
        self.chat = chat
        self.registry = registry

    def process_chat_message(self, request: ChatRequest) -> ChatResponse:
        """
        Analyze and render when the request warrants it, then reply.

        Never raises: unexpected errors become an apology response.
        """
        logger.info(
            f"Processing chat message: images={len(request.images)}, "
            f"product_info={request.product_info is not None}, length={len(request.message)}"
        )
        try:
            analysis = None
            results: list[RenderResult] = []

            if self.should_analyze(request):
                product = request.product_info or default_product(request.message, request.images)
                analysis = self.resolver.resolve(product)
                if analysis.recommended_templates:
                    logger.info(f"Generating campaign images using {len(analysis.recommended_templates)} templates")
                    results = self.renderer.render_campaign(product, analysis)
                else:
                    logger.warning(f"No templates available for profile: {analysis.tier.value}")

            reply = self.chat.reply(request.message, request.product_info, request.images)

            message = reply
            if analysis is not None:
                message = self.enhance_message(reply, analysis, results)

            generated = [self._to_generated_image(r) for r in results if r.success]
            logger.info(f"Chat processing completed: analysis={analysis is not None}, generated={len(generated)}")

            return ChatResponse(
                success=bool(generated) or analysis is not None or bool(reply),
                message=message,
                analysis=analysis,
                generated_images=generated,
                results=results,
            )
        except Exception:
            logger.exception("Error processing chat message")
            return ChatResponse(success=False, message=FAILURE_MESSAGE)

    def should_analyze(self, request: ChatRequest) -> bool:
        if request.product_info is not None and request.product_info.has_basic_info:
            logger.info("Analysis triggered: ProductInfo with basic information found")
            return True

        text = request.message.lower()
        if any(keyword in text for keyword in INTENT_KEYWORDS):
            logger.info("Analysis triggered: User intent detected with keywords")
            return True

        if request.images:
            logger.info("Analysis triggered: Images uploaded")
            return True

        logger.info("Analysis not triggered: Insufficient information")
        return False

    def enhance_message(
        self,
        reply: str,
        analysis: SuggestionBundle,
        results: list[RenderResult],
    ) -> str:
        """Append analysis summary and generation outcome to the chat reply."""
        succeeded = [r for r in results if r.success]
        failed = [r for r in results if not r.success]

        parts = [
            reply,
            "",
            f"🎯 **Análise do Perfil:** {analysis.tier.label} padrão ({analysis.confidence}% de confiança)",
            f"📝 **Justificativa:** {analysis.reasoning}",
        ]

        if results:
            parts.extend(["", f"📊 **Resultado:** {len(succeeded)}/{len(results)} imagens geradas com sucesso"])

        if succeeded:
            parts.append(f"✅ **Imagens Geradas:** {len(succeeded)} peça(s) criada(s) com sucesso")
            for index, result in enumerate(succeeded, start=1):
                kind = (result.format or TemplateFormat.FEED.value).capitalize()
                parts.append(f"  • {kind} {index}")
            parts.extend(["", "As imagens estão prontas para download e uso em suas campanhas! 🚀"])

        if failed:
            parts.extend(["", f"⚠️ **Atenção:** {len(failed)} imagem(ns) não pôde(ram) ser gerada(s)."])

        if not analysis.recommended_templates:
            parts.extend([
                "",
                "📋 **Recomendação:** Para gerar imagens personalizadas, certifique-se de que os "
                f"templates estão disponíveis para o perfil {analysis.tier.value}.",
            ])

        return "\n".join(parts)

    def analyze_only(self, product: ProductInfo) -> SuggestionBundle:
        logger.info("Performing standalone product analysis")
        return self.resolver.resolve(product)

    def generate_only(self, product: ProductInfo, tier: Tier | None = None) -> list[RenderResult]:
        logger.info("Performing standalone image generation")
        bundle = self.resolver.resolve(product, tier)
        return self.renderer.render_campaign(product, bundle)

    def template_status(self) -> dict[str, Any]:
        available, missing = self.registry.list_all()
        return {
            "available": len(available),
            "missing": len(missing),
            "details": {
                "available": [t.to_dict() for t in available],
                "missing": [t.to_dict() for t in missing],
            },
        }

    def initialize_templates(self) -> list[str]:
        logger.info("Initializing template system")
        return self.registry.bootstrap()

    def _to_generated_image(self, result: RenderResult) -> GeneratedImage:
        fmt = TemplateFormat(result.format or TemplateFormat.FEED.value)
        return GeneratedImage(
            url=result.web_path or result.output_path or "",
            type=fmt.value,
            format=fmt.canvas_shape,
            template=result.template,
        )
