"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.analyzer.config import Settings, get_settings
from app.analyzer.main import app
from app.analyzer.services.ai import AnalysisError, get_gemini_service, get_groq_service


class FakeGeminiService:
    """Stand-in for GeminiService that records the staged paths it saw."""

    def __init__(self, analysis: str = "Risk: unlimited liability", error: Exception | None = None):
        self.analysis = analysis
        self.error = error
        self.calls: list[Path] = []
        self.existed_during_call: list[bool] = []

    async def analyze_contract(self, file_path) -> str:
        path = Path(file_path)
        self.calls.append(path)
        self.existed_during_call.append(path.exists())
        if self.error is not None:
            raise self.error
        return self.analysis


class FakeGroqService:
    """Stand-in for GroqService that records prompts."""

    def __init__(self, reply: str = "Section 3 was removed."):
        self.reply = reply
        self.compared: list[str] = []
        self.queries: list[str] = []

    async def compare_with_new_laws(self, pdf_content: str) -> str:
        self.compared.append(pdf_content)
        return self.reply

    async def answer_query(self, query: str) -> str:
        self.queries.append(query)
        return self.reply


def build_pdf(text: str = "Test Contract") -> bytes:
    """Build a one-page PDF with a correct xref table showing ``text``."""
    stream = f"BT /F1 12 Tf 100 700 Td ({text}) Tj ET".encode()
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """A minimal valid single-page PDF containing the text 'Test Contract'."""
    return build_pdf("Test Contract")


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Upload directory used by disk staging during a test."""
    return tmp_path / "uploads"


@pytest.fixture
def fake_gemini() -> FakeGeminiService:
    return FakeGeminiService()


@pytest.fixture
def fake_groq() -> FakeGroqService:
    return FakeGroqService()


@pytest.fixture
def client(
    upload_dir: Path,
    fake_gemini: FakeGeminiService,
    fake_groq: FakeGroqService,
) -> Generator[TestClient, None, None]:
    """Create a test client with fake providers and a temporary upload dir."""
    app.dependency_overrides[get_settings] = lambda: Settings(upload_dir=upload_dir)
    app.dependency_overrides[get_gemini_service] = lambda: fake_gemini
    app.dependency_overrides[get_groq_service] = lambda: fake_groq
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def failing_gemini(fake_gemini: FakeGeminiService) -> FakeGeminiService:
    """Make the fake Gemini service fail like a provider outage."""
    fake_gemini.error = AnalysisError("Failed to analyze contract. Details: quota exceeded")
    return fake_gemini
