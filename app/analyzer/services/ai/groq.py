"""
Text completion with Groq through its OpenAI-compatible API.

Unlike contract analysis, failures here never propagate: every error is
logged and replaced by a fixed apology string so the endpoint still
answers 200.
"""

import logging
from typing import Any

from .exceptions import AIServiceError

logger = logging.getLogger(__name__)

LAW_COMPARISON_SUFFIX = (
    "Compare it with new Indian laws and highlight what are added or removed (changes)."
)

NO_RESPONSE_TEXT = "No response from Groq."
TEXT_ERROR_TEXT = "Error processing text with Groq."
NO_RESPONSE_QUERY = "No response"
QUERY_ERROR_TEXT = "Error processing query with Groq."


def build_comparison_prompt(pdf_content: str) -> str:
    """Wrap extracted document text in the law comparison instruction."""
    return f"{pdf_content}\n\n{LAW_COMPARISON_SUFFIX}"


def _first_choice_content(completion: Any) -> str | None:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


class GroqService:
    """
    Text completion provider backed by Groq.

    Uses ``openai.AsyncOpenAI`` pointed at Groq's base URL.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "llama-3.3-70b-versatile",
        base_url: str = "https://api.groq.com/openai/v1",
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self._client = client

    @property
    def client(self):
        """Lazy-load the async OpenAI client for Groq."""
        if self._client is None:
            if not self.api_key:
                raise AIServiceError(
                    "Groq API key not provided. Set GROQ_API_KEY environment variable."
                )
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        return self._client

    async def _complete(self, content: str) -> str | None:
        completion = await self.client.chat.completions.create(
            messages=[{"role": "user", "content": content}],
            model=self.model,
        )
        return _first_choice_content(completion)

    async def compare_with_new_laws(self, pdf_content: str) -> str:
        """
        Ask Groq what changed in the document relative to new laws.

        Args:
            pdf_content: Plain text extracted from the uploaded PDF.

        Returns:
            The first choice's content, or a fallback string on an empty
            response or any error.
        """
        try:
            logger.info("Sending document text to Groq (%d characters)", len(pdf_content))
            content = await self._complete(build_comparison_prompt(pdf_content))
        except Exception:
            logger.exception("Groq API error")
            return TEXT_ERROR_TEXT
        return content or NO_RESPONSE_TEXT

    async def answer_query(self, query: str) -> str:
        """
        Send a free-text query to Groq verbatim.

        Args:
            query: Caller-supplied question.

        Returns:
            The first choice's content, or a fallback string on an empty
            response or any error.
        """
        try:
            logger.info("Sending query to Groq (%d characters)", len(query))
            content = await self._complete(query)
        except Exception:
            logger.exception("Groq API query error")
            return QUERY_ERROR_TEXT
        return content or NO_RESPONSE_QUERY


# Singleton instance for convenience
_groq_service: GroqService | None = None


def get_groq_service() -> GroqService:
    """Get or create the Groq service singleton."""
    global _groq_service
    if _groq_service is None:
        from ...config import get_settings

        settings = get_settings()
        _groq_service = GroqService(
            api_key=settings.groq_api_key,
            model=settings.groq_model,
            base_url=settings.groq_base_url,
        )
    return _groq_service
