"""
Core data models for the Market Analysis Extractor.
"""

from .schemas import (
    Competitor,
    Application,
    CustomerPersona,
    RawData,
    AnalysisResult,
)

__all__ = [
    "Competitor",
    "Application",
    "CustomerPersona",
    "RawData",
    "AnalysisResult",
]
