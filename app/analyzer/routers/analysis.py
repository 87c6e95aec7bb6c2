"""
Router for contract, PDF and query analysis endpoints.

Handles:
- Contract review with Gemini on the raw PDF (disk-staged upload)
- PDF text extraction plus law comparison with Groq (in-memory upload)
- Free-text legal queries with Groq
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ..config import Settings, get_settings
from ..models import AnalysisResponse, ErrorResponse, PDFAnalysisResponse, QueryRequest
from ..services.ai import (
    AnalysisError,
    GeminiService,
    GroqService,
    get_gemini_service,
    get_groq_service,
)
from ..services.pdf_service import PDFService, get_pdf_service
from ..services.staging import MissingInputError, stage_to_disk, stage_to_memory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["analysis"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post(
    "/analyzecontract",
    response_model=AnalysisResponse,
    responses=ERROR_RESPONSES,
)
async def analyze_contract(
    gemini: Annotated[GeminiService, Depends(get_gemini_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    contract: Annotated[UploadFile | None, File(description="Contract PDF")] = None,
) -> AnalysisResponse:
    """
    Analyze a contract PDF for risky clauses and compliance issues.

    The upload is written to the upload directory for the duration of the
    request and removed afterwards, including when analysis fails.
    """
    try:
        async with stage_to_disk(contract, "contract", settings.upload_dir) as artifact:
            analysis = await gemini.analyze_contract(artifact.path)
    except MissingInputError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )
    except AnalysisError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )
    except Exception as e:
        logger.exception("Unexpected error analyzing contract")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    return AnalysisResponse(analysis=analysis)


@router.post(
    "/analyzepdf",
    response_model=PDFAnalysisResponse,
    responses=ERROR_RESPONSES,
)
async def analyze_pdf(
    groq: Annotated[GroqService, Depends(get_groq_service)],
    pdf_service: Annotated[PDFService, Depends(get_pdf_service)],
    pdf: Annotated[UploadFile | None, File(description="PDF to compare against new laws")] = None,
) -> PDFAnalysisResponse:
    """
    Extract the text of a PDF and ask Groq what changed under new laws.

    Groq failures do not fail the request; they come back as an apology
    string in ``groqResponse``.
    """
    try:
        artifact = await stage_to_memory(pdf, "pdf")
    except MissingInputError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="PDF file is required.",
        )

    try:
        document = await run_in_threadpool(pdf_service.extract_text, artifact.buffer)
        logger.info(
            "Extracted %d page(s) from %s", document.page_count, artifact.filename
        )
        groq_response = await groq.compare_with_new_laws(document.text)
    except Exception:
        logger.exception("Error processing PDF")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error analyzing the PDF.",
        )

    return PDFAnalysisResponse(pdf_content=document.text, groq_response=groq_response)


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses=ERROR_RESPONSES,
)
async def analyze_query(
    groq: Annotated[GroqService, Depends(get_groq_service)],
    payload: Annotated[QueryRequest | None, Body()] = None,
) -> AnalysisResponse:
    """Answer a free-text legal query with Groq."""
    query = payload.query if payload is not None else None
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query text is required.",
        )

    try:
        if not isinstance(query, str):
            query = str(query)
        analysis = await groq.answer_query(query)
    except Exception:
        logger.exception("Error fetching AI analysis")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch AI insights",
        )

    return AnalysisResponse(analysis=analysis)
