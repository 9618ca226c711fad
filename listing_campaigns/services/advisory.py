"""Advisory service - ask the LLM for a creative plan as JSON."""

import json
import logging
from pathlib import Path
from typing import Any

from ..clients.llm import LLMClient
from ..models.product import ProductInfo
from ..utils import strip_code_fence

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"
NOT_INFORMED = "Não informado"


class AdvisoryError(Exception):
    """Advisory model returned nothing usable."""
    pass


class AdvisoryService:
    """One advisory call per `suggest()`. Retries belong to the caller."""

    def __init__(self, llm: LLMClient):
        self.llm = llm
        self._system_prompt: str | None = None

    def suggest(self, product: ProductInfo) -> dict[str, Any]:
        """
        Request a suggestion payload for a listing.

        Raises:
            AdvisoryError: empty output or output that is not a JSON object.
        """
        output = self.llm.call(self._load_prompt(), self._build_user_message(product), label="ANALYSIS")
        if not output:
            raise AdvisoryError("Empty response from advisory model")

        try:
            data = json.loads(strip_code_fence(output))
        except json.JSONDecodeError as e:
            raise AdvisoryError(f"Advisory output is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise AdvisoryError(f"Expected JSON object, got {type(data).__name__}")
        return data

    def _build_user_message(self, product: ProductInfo) -> str:
        lines = [
            "Analise o seguinte produto imobiliário e crie uma estratégia completa de comunicação visual:",
            "",
            f"DESCRIÇÃO: {product.description or NOT_INFORMED}",
            f"PÚBLICO-ALVO: {product.target_audience or NOT_INFORMED}",
            f"LOCALIZAÇÃO: {product.location or NOT_INFORMED}",
            f"ORÇAMENTO: {product.budget or NOT_INFORMED}",
            f"DURAÇÃO: {product.duration or NOT_INFORMED}",
            f"NÚMERO DE IMAGENS: {len(product.images)}",
        ]
        return "\n".join(lines)

    def _load_prompt(self) -> str:
        if self._system_prompt is None:
            path = PROMPTS_DIR / "analysis_system.txt"
            if not path.exists():
                raise FileNotFoundError(f"Prompt file not found: {path}")
            self._system_prompt = path.read_text(encoding="utf-8").strip()
        return self._system_prompt
