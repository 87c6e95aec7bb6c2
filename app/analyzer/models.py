"""
Pydantic models for the analyzer HTTP surface.

Field names follow the JSON keys the frontend already consumes
(``pdfContent``, ``groqResponse``), exposed through serialization aliases.
"""

from typing import Any

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Free-text query submitted to POST /analyze."""

    query: Any = Field(
        default=None,
        description=(
            "Question forwarded verbatim to the text-completion provider; "
            "non-string values are sent as their string form"
        ),
        examples=["define force majeure"],
    )


class AnalysisResponse(BaseModel):
    """Response for contract analysis and free-text queries."""

    analysis: str = Field(..., description="Provider response text")


class PDFAnalysisResponse(BaseModel):
    """Response for POST /analyzepdf."""

    pdf_content: str = Field(
        ...,
        serialization_alias="pdfContent",
        description="Plain text extracted from the uploaded PDF",
    )
    groq_response: str = Field(
        ...,
        serialization_alias="groqResponse",
        description="Comparison of the document against new laws",
    )


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
