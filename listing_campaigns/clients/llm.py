"""Generic LLM client with provider-agnostic interface."""

import logging

from openai import OpenAI

logger = logging.getLogger(__name__)


class LLMClient:
    """Generic LLM client. Currently uses OpenAI, interface is provider-agnostic."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-5.2",
        reasoning_effort: str | None = "medium",
        timeout: float = 60.0,
    ):
        self._client = OpenAI(api_key=api_key, timeout=timeout)
        self.model = model
        self.reasoning_effort = reasoning_effort

    def call(
        self,
        system_prompt: str,
        user_message: str | list[dict],
        label: str = "",
    ) -> str:
        """Make LLM call and return response text.

        Args:
            system_prompt: System/developer prompt.
            user_message: User message, either plain text or a list of
                content parts (input_text / input_image).
            label: Optional label for logging token usage.

        Returns:
            Response text content.
        """
        kwargs = {}
        if self.reasoning_effort:
            kwargs["reasoning"] = {"effort": self.reasoning_effort}

        response = self._client.responses.create(
            model=self.model,
            input=[
                {"role": "developer", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            **kwargs,
        )

        usage = response.usage
        if usage is not None and label:
            logger.info(f"{label}: input={usage.input_tokens}, output={usage.output_tokens}")

        return (response.output_text or "").strip()
