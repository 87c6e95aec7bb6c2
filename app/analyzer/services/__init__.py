"""
Services package for the contract analyzer.

Contains:
- staging: disk and memory staging of uploads
- pdf_service: PDF to text extraction
- ai: Gemini and Groq provider adapters
"""

from .ai import GeminiService, GroqService
from .pdf_service import PDFService

__all__ = ["PDFService", "GeminiService", "GroqService"]
