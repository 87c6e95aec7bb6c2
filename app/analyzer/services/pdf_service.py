"""
PDF text extraction service using pypdf.

Handles conversion of uploaded PDF documents to plain text for the
text-completion provider.
"""

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO

from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)


class PDFExtractionError(Exception):
    """Raised when PDF text extraction fails."""

    pass


@dataclass
class ExtractedDocument:
    """Plain text of a PDF plus the metadata pypdf exposes cheaply."""

    text: str
    page_count: int


class PDFService:
    """
    Service for PDF text extraction.

    Uses pypdf to read the document and join the text of every page.
    """

    def __init__(self, page_separator: str = "\n"):
        """
        Initialize the PDF service.

        Args:
            page_separator: String inserted between the text of consecutive pages.
        """
        self.page_separator = page_separator

    def extract_text(self, file_bytes: bytes | BinaryIO) -> ExtractedDocument:
        """
        Extract plain text from a PDF.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            ExtractedDocument with the joined page text and page count.

        Raises:
            PDFExtractionError: If the input is empty, not a PDF, or unreadable.
        """
        # Ensure we have bytes
        if hasattr(file_bytes, "read"):
            pdf_bytes = file_bytes.read()
        else:
            pdf_bytes = file_bytes

        if not pdf_bytes:
            raise PDFExtractionError("Empty PDF file provided")

        # The header may sit anywhere in the first 1024 bytes
        if b"%PDF" not in pdf_bytes[:1024]:
            raise PDFExtractionError(
                "Invalid PDF file: no PDF header in the first 1024 bytes"
            )

        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
            pages = [page.extract_text() or "" for page in reader.pages]
        except PdfReadError as e:
            logger.error("PDF read error: %s", e)
            raise PDFExtractionError(f"Invalid or corrupted PDF file: {e}") from e
        except Exception as e:
            logger.exception("Unexpected error during PDF text extraction")
            raise PDFExtractionError(f"PDF text extraction failed: {e}") from e

        logger.info(
            "Extracted %d characters from %d page(s)",
            sum(len(p) for p in pages),
            len(pages),
        )
        return ExtractedDocument(
            text=self.page_separator.join(pages),
            page_count=len(pages),
        )


# Singleton instance for convenience
_pdf_service: PDFService | None = None


def get_pdf_service() -> PDFService:
    """Get or create the PDF service singleton."""
    global _pdf_service
    if _pdf_service is None:
        _pdf_service = PDFService()
    return _pdf_service
