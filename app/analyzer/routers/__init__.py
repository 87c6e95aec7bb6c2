"""
Routers package for FastAPI endpoints.

- analysis: contract, PDF and free-text query analysis
"""

from . import analysis

__all__ = ["analysis"]
