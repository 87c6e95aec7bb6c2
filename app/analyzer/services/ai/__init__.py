"""
AI provider package.

- gemini: contract analysis on the raw PDF (raises on failure)
- groq: text completion for extracted text and free-text queries
  (degrades to a fixed string on failure)
"""

from .exceptions import AIServiceError, AnalysisError, InvalidProviderResponseError
from .gemini import GeminiService, get_gemini_service, strip_emphasis
from .groq import GroqService, build_comparison_prompt, get_groq_service

__all__ = [
    "AIServiceError",
    "AnalysisError",
    "InvalidProviderResponseError",
    "GeminiService",
    "GroqService",
    "build_comparison_prompt",
    "get_gemini_service",
    "get_groq_service",
    "strip_emphasis",
]
