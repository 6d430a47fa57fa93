"""
Pipeline runner — wires the two agents together and returns an AnalysisResult.

Architecture:
  ReportGenerationAgent → ReportExtractionAgent

Everything a run needs (product, location, backend) is passed in; nothing is
kept between calls. A run either returns a complete AnalysisResult or raises
an AnalysisError with a message fit for the user.
"""

from __future__ import annotations

import logging
from typing import Optional

from agents.base import Orchestrator
from agents.extractor import ReportExtractionAgent, extract_analysis
from agents.generator import AnalysisRequest, BaseGenerator, ReportGenerationAgent
from models.schemas import AnalysisResult
from utils.errors import AnalysisError, InvalidInputError

logger = logging.getLogger(__name__)


def validate_request(product_name: Optional[str], location: Optional[str]) -> None:
    if not (product_name or "").strip():
        raise InvalidInputError("Please enter a product name")
    if not (location or "").strip():
        raise InvalidInputError("Please enter a location")


def run_analysis(
    product_name: str,
    location: str,
    backend: Optional[str] = None,
    generator: Optional[BaseGenerator] = None,
) -> AnalysisResult:
    """
    End-to-end analysis: generate the report, then extract it.

    Parameters
    ----------
    product_name, location : str
        Non-empty; location only shapes the prompt.
    backend : str, optional
        "openai" | "mock"; defaults to settings.GENERATION_BACKEND.
    generator : BaseGenerator, optional
        Pre-built generator (tests, custom clients). Overrides `backend`.
    """
    validate_request(product_name, location)
    request = AnalysisRequest(
        product_name=product_name.strip(),
        location=location.strip(),
        backend=backend,
    )

    pipeline = Orchestrator(
        [ReportGenerationAgent(generator=generator), ReportExtractionAgent()],
        stop_on_failure=True,
    )
    result = pipeline.execute(request)
    logger.info(pipeline.summary())

    if not result.success:
        if isinstance(result.exception, AnalysisError):
            raise result.exception
        raise AnalysisError(result.error or "An unexpected error occurred")
    return result.data


def parse_report(response: str, product_name: str, prompt: str = "") -> AnalysisResult:
    """Run only the extraction core on an already-obtained response."""
    if not (product_name or "").strip():
        raise InvalidInputError("Please enter a product name")
    if not (response or "").strip():
        raise InvalidInputError("Report text is empty")
    return extract_analysis(response, product_name.strip(), prompt)
