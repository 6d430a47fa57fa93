"""
Pydantic schemas for API request/response validation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


# ─── Request Schemas ─────────────────────────────────────────────────────────

class RunAnalysisRequest(BaseModel):
    product_name: str = Field(..., description="Product to analyze")
    location: str = Field(..., description="Target market, e.g. 'Germany'")
    backend: Optional[str] = Field(None, description="openai | mock")


class ParseReportRequest(BaseModel):
    response: str = Field(..., description="Raw report text from the generation service")
    product_name: str
    prompt: str = ""


# ─── Response Schemas ────────────────────────────────────────────────────────
# Field names follow the camelCase JSON shape of AnalysisResult.to_dict().

class CompetitorResponse(BaseModel):
    name: str
    description: str
    headquarters: str
    revenue: str


class ApplicationResponse(BaseModel):
    name: str
    description: str
    marketSize: str
    growthRate: str


class CustomerPersonaResponse(BaseModel):
    name: str
    description: str
    caresMostAbout: str
    caresLeastAbout: str
    potentialCustomers: List[str]
    salesEmail: Optional[str] = None
    discoveryEmail: Optional[str] = None


class RawDataResponse(BaseModel):
    prompt: str
    response: str


class AnalysisResponse(BaseModel):
    competitors: List[CompetitorResponse]
    applications: List[ApplicationResponse]
    customerPersonas: List[CustomerPersonaResponse]
    rawData: RawDataResponse


class EmailTemplatesResponse(BaseModel):
    persona: str
    salesEmail: str
    discoveryEmail: str


class HealthResponse(BaseModel):
    status: str
    version: str
    backend: str
    timestamp: datetime
