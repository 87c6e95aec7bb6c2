"""
Contract Analyzer Backend Application.

A small FastAPI relay that forwards uploaded contracts and free-text
legal queries to Google Gemini and Groq.
"""

__version__ = "1.0.0"
