"""Chat reply service - conversational answer about a listing."""

import base64
import logging
import re
from pathlib import Path

from ..clients.llm import LLMClient
from ..models.product import ProductInfo

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

APOLOGY = (
    "Desculpe, ocorreu um erro ao processar sua mensagem. "
    "Tente novamente ou forneça mais detalhes sobre seu empreendimento."
)

DATA_URI_RE = re.compile(r"^data:(image/(?:png|jpeg|gif|webp|svg\+xml|bmp));base64,(.*)$", re.DOTALL)
MIME_BY_EXTENSION = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".bmp": "image/bmp",
}


class ChatService:
    """Marketing-assistant replies. Falls back to a fixed apology on any error."""

    def __init__(self, llm: LLMClient | None):
        self.llm = llm

    def reply(
        self,
        message: str,
        product: ProductInfo | None = None,
        images: list[str] | None = None,
    ) -> str:
        if self.llm is None:
            return APOLOGY
        try:
            content = self._build_content(message, product, images or [])
            response = self.llm.call(self._load_prompt(), content, label="CHAT")
            if not response:
                raise ValueError("No response from chat model")
            return response
        except Exception as e:
            logger.error(f"Error generating chat response: {e}")
            return APOLOGY

    def _build_content(
        self,
        message: str,
        product: ProductInfo | None,
        images: list[str],
    ) -> list[dict]:
        """User message as Responses API content parts (text + images)."""
        content = [{"type": "input_text", "text": f"Mensagem do usuário: {message}"}]

        if product is not None:
            lines = ["Informações do produto:"]
            fields = [
                ("Descrição", product.description),
                ("Público-alvo", product.target_audience),
                ("Localização", product.location),
                ("Orçamento", product.budget),
                ("Duração", product.duration),
            ]
            lines.extend(f"{label}: {value}" for label, value in fields if value)
            content.append({"type": "input_text", "text": "\n".join(lines)})

        if images:
            content.append({
                "type": "input_text",
                "text": (
                    f"O usuário enviou {len(images)} imagem(ns) do empreendimento. "
                    "Analise-as para criar um layout profissional."
                ),
            })
            for image in images:
                url = self._to_data_uri(image)
                if url:
                    content.append({"type": "input_image", "image_url": url})

        return content

    def _to_data_uri(self, image: str) -> str | None:
        if image.startswith("data:"):
            if DATA_URI_RE.match(image):
                return image
            logger.warning(f"Invalid data URI format for image: {image[:50]}...")
            return None

        if image.startswith(("http://", "https://")):
            return image

        try:
            data = Path(image).read_bytes()
        except OSError as e:
            logger.error(f"Error reading image file {image}: {e}")
            return None
        mime_type = MIME_BY_EXTENSION.get(Path(image).suffix.lower(), "image/png")
        return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"

    def _load_prompt(self) -> str:
        path = PROMPTS_DIR / "chat_system.txt"
        if not path.exists():
            raise FileNotFoundError(f"Prompt file not found: {path}")
        return path.read_text(encoding="utf-8").strip()
