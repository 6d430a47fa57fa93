"""
FastAPI Route Handlers
Market Analysis Extractor
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException

from api.schemas import (
    RunAnalysisRequest, ParseReportRequest, AnalysisResponse,
    EmailTemplatesResponse, HealthResponse,
)
from config.settings import settings
from models.schemas import AnalysisResult
from utils.errors import AnalysisError
from utils.pipeline import run_analysis, parse_report

logger = logging.getLogger(__name__)

router = APIRouter()

# Last completed result in this process (last write wins; production: use Redis)
_last_result: Optional[AnalysisResult] = None


def _store(result: AnalysisResult) -> AnalysisResponse:
    global _last_result
    _last_result = result
    return AnalysisResponse(**result.to_dict())


def _require_last_result() -> AnalysisResult:
    if _last_result is None:
        raise HTTPException(
            status_code=404,
            detail="No analysis results available. Run /analysis/run first.",
        )
    return _last_result


# ─── Health ──────────────────────────────────────────────────────────────────

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    return HealthResponse(
        status="ok",
        version=settings.APP_VERSION,
        backend=settings.GENERATION_BACKEND,
        timestamp=datetime.utcnow(),
    )


# ─── Analysis ────────────────────────────────────────────────────────────────

@router.post("/analysis/run", response_model=AnalysisResponse, tags=["Analysis"])
def run_market_analysis(request: RunAnalysisRequest):
    """
    Generate a market report for a product/location and extract it:
    Generate → Split → Parse → Build → Cross-reference → Render emails
    """
    try:
        result = run_analysis(
            product_name=request.product_name,
            location=request.location,
            backend=request.backend,
        )
    except AnalysisError as e:
        logger.error(f"Analysis failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return _store(result)


@router.post("/analysis/parse", response_model=AnalysisResponse, tags=["Analysis"])
def parse_market_report(request: ParseReportRequest):
    """Extract an already-generated report (no call to the generation service)."""
    try:
        result = parse_report(
            response=request.response,
            product_name=request.product_name,
            prompt=request.prompt,
        )
    except AnalysisError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return _store(result)


@router.get("/analysis/latest", response_model=AnalysisResponse, tags=["Analysis"])
async def get_latest_analysis():
    return AnalysisResponse(**_require_last_result().to_dict())


@router.get(
    "/analysis/latest/personas/{index}/emails",
    response_model=EmailTemplatesResponse,
    tags=["Analysis"],
)
async def get_persona_emails(index: int):
    """The sales and discovery emails rendered for one persona."""
    personas = _require_last_result().customer_personas
    if not 0 <= index < len(personas):
        raise HTTPException(status_code=404, detail=f"Persona {index} not found.")

    persona = personas[index]
    return EmailTemplatesResponse(
        persona=persona.name,
        salesEmail=persona.sales_email or "",
        discoveryEmail=persona.discovery_email or "",
    )
