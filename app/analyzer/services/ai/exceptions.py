"""
Shared exceptions for AI provider modules.
"""


class AIServiceError(Exception):
    """Raised when AI service operations fail."""

    pass


class InvalidProviderResponseError(AIServiceError):
    """Raised when a provider answers with an empty or malformed response."""

    pass


class AnalysisError(AIServiceError):
    """Raised when contract analysis fails; carries the underlying error detail."""

    pass
