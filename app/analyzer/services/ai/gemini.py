"""
Contract analysis with Google Gemini.

The staged PDF is sent inline alongside a fixed review instruction. Any
failure is raised as AnalysisError; there are no retries.
"""

import logging
from pathlib import Path
from typing import Any

from fastapi.concurrency import run_in_threadpool

from .exceptions import AIServiceError, AnalysisError, InvalidProviderResponseError

logger = logging.getLogger(__name__)

CONTRACT_ANALYSIS_PROMPT = (
    "Analyze this contract for 3 high-risk clauses, 2-3 compliance issues, "
    "and suggest 2-3 alternatives."
)

PDF_MIME_TYPE = "application/pdf"


def strip_emphasis(text: str) -> str:
    """Remove markdown emphasis markers (``*``) from provider output."""
    return text.replace("*", "")


def _pdf_part(pdf_bytes: bytes) -> Any:
    """Wrap PDF bytes as an inline data part (base64-encoded by the SDK on the wire)."""
    from google.genai import types

    return types.Part.from_bytes(data=pdf_bytes, mime_type=PDF_MIME_TYPE)


class GeminiService:
    """
    Document analysis provider backed by Google Gemini.

    The SDK client is created lazily once and reused for the process lifetime.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-1.5-flash",
        client: Any = None,
    ):
        """
        Initialize the Gemini service.

        Args:
            api_key: Google API key.
            model: Gemini model that accepts inline PDF input.
            client: Pre-built ``genai.Client``; mainly for tests.
        """
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self):
        """Lazy-load the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise AIServiceError(
                    "Google API key not provided. Set GOOGLE_API_KEY environment variable."
                )
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def analyze_contract(self, file_path: Path | str) -> str:
        """
        Analyze a staged contract PDF.

        Args:
            file_path: Path of the disk-staged PDF.

        Returns:
            Analysis text with emphasis markers stripped.

        Raises:
            AnalysisError: If reading the file or the provider call fails, or
                the provider returns no text.
        """
        try:
            pdf_bytes = await run_in_threadpool(Path(file_path).read_bytes)

            logger.info(
                "Sending contract to Gemini (%s, %d bytes)", self.model, len(pdf_bytes)
            )
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[_pdf_part(pdf_bytes), CONTRACT_ANALYSIS_PROMPT],
            )

            text = getattr(response, "text", None) if response is not None else None
            if not text:
                raise InvalidProviderResponseError("Invalid response from Gemini API")

            logger.info("Response received from Gemini (%d characters)", len(text))
            return strip_emphasis(text)

        except Exception as e:
            logger.exception("Contract analysis failed")
            raise AnalysisError(f"Failed to analyze contract. Details: {e}") from e


# Singleton instance for convenience
_gemini_service: GeminiService | None = None


def get_gemini_service() -> GeminiService:
    """Get or create the Gemini service singleton."""
    global _gemini_service
    if _gemini_service is None:
        from ...config import get_settings

        settings = get_settings()
        _gemini_service = GeminiService(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
        )
    return _gemini_service
