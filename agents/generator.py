"""
Report Generation Agent
------------------------
Obtains the raw market-analysis report from a text-generation service.

Supported backends:
  - OpenAI chat completions ("openai")
  - Canned demo report ("mock"), no network or credentials needed

Architecture:
  ReportGenerationAgent.run(AnalysisRequest) -> GeneratedReport
"""

import time
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Type

import httpx
from openai import (
    OpenAI, APIError, APIConnectionError, APITimeoutError,
    InternalServerError, RateLimitError,
)

from agents.base import Agent
from config.settings import settings
from utils.errors import ConfigurationError, EmptyResponseError, GenerationError

logger = logging.getLogger(__name__)

# Worth another attempt; any other APIError (400, 401, 404, ...) fails at once.
_TRANSIENT_ERRORS = (
    APIConnectionError, APITimeoutError, RateLimitError, InternalServerError,
)


SYSTEM_PROMPT = (
    "You are a market research expert who provides detailed, structured analysis. "
    "Always format your responses exactly as requested, with clear section numbering "
    "and consistent labeling. Focus on providing location-specific insights and data."
)


# ─── Data Structures ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AnalysisRequest:
    """One product / market to analyze."""
    product_name: str
    location: str
    backend: Optional[str] = None     # "openai" | "mock"; None → settings


@dataclass(frozen=True)
class GeneratedReport:
    """Verbatim prompt and model response for one request."""
    product_name: str
    location: str
    prompt: str
    response: str
    backend: str


# ─── Prompt ──────────────────────────────────────────────────────────────────


def build_prompt(product_name: str, location: str) -> str:
    return f"""Analyze the following product and provide a detailed market analysis specific to the {location} market.

Product: {product_name}
Location: {location}

Please consider local market conditions, regional competitors, and specific opportunities in {location}. Include information about:
- Local market dynamics
- Regional pricing strategies
- Local customer preferences
- Cultural considerations that might affect product adoption
- Local regulations or compliance requirements

Format your response EXACTLY as follows:

1. Competitors:

1. Name: [Company Name]
Description: [Brief description with focus on {location} presence]
Headquarters: [City, Country]
Revenue: [Annual revenue in USD]

2. Name: [Company Name]
Description: [Brief description with focus on {location} presence]
Headquarters: [City, Country]
Revenue: [Annual revenue in USD]

[Continue for at least 7 competitors with presence or impact in {location}...]

2. Product Applications:

1. Name: [Application Name]
Description: [Detailed description with {location}-specific use cases]
Market Size: [Total addressable market size in USD for {location}]
Growth Rate: [Annual growth rate as percentage in {location}]

[Continue for at least 5 applications relevant to {location}...]

3. Customer Personas:

1. Name: [Persona Name/Title]
Description: [Detailed description focused on {location} market]
Cares Most About: [Top priorities specific to {location}]
Cares Least About: [Lower priorities in {location} context]

[Continue for at least 5 personas common in {location}...]

4. Potential Customers:

1. [Specific role/title] at [{location}-based Company] - [Detailed explanation of fit and benefits]
2. [Specific role/title] at [{location}-based Company] - [Detailed explanation of fit and benefits]
[Continue for at least 10 specific roles from {location}-based organizations...]"""


# ─── Per-Backend Generators ──────────────────────────────────────────────────


class BaseGenerator:
    name = "base"

    def generate(self, prompt: str, request: AnalysisRequest) -> str:
        raise NotImplementedError


class OpenAIGenerator(BaseGenerator):
    """Chat completions call with retry + exponential backoff on transient errors."""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[OpenAI] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        api_key = api_key or settings.OPENAI_API_KEY
        if client is None and not api_key:
            raise ConfigurationError("OpenAI API key is not configured")
        # max_retries=0: attempts are counted here, not inside the SDK
        self.client = client or OpenAI(
            api_key=api_key,
            timeout=settings.REQUEST_TIMEOUT,
            max_retries=0,
            http_client=http_client,
        )

    def generate(self, prompt: str, request: AnalysisRequest) -> str:
        wait = settings.RETRY_BACKOFF_SECONDS
        max_attempts = max(1, settings.MAX_RETRIES)
        for attempt in range(1, max_attempts + 1):
            try:
                completion = self.client.chat.completions.create(
                    model=settings.OPENAI_MODEL,
                    messages=[
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    temperature=settings.OPENAI_TEMPERATURE,
                    max_tokens=settings.OPENAI_MAX_TOKENS,
                )
            except _TRANSIENT_ERRORS as e:
                if attempt == max_attempts:
                    raise GenerationError(
                        f"OpenAI request failed after {attempt} attempts: {e}"
                    ) from e
                logger.warning(
                    f"Attempt {attempt} failed for '{request.product_name}': {e}. "
                    f"Retrying in {wait:.1f}s"
                )
                time.sleep(wait)
                wait *= 2
                continue
            except APIError as e:
                raise GenerationError(f"OpenAI request failed: {e}") from e

            if not completion.choices:
                return ""
            return completion.choices[0].message.content or ""


class MockGenerator(BaseGenerator):
    """
    Canned report for development/demo.
    Follows the requested format but carries the usual model noise:
    an incomplete competitor, commentary lines and a closing remark.
    """

    name = "mock"

    def generate(self, prompt: str, request: AnalysisRequest) -> str:
        product, location = request.product_name, request.location
        return f"""Here is a market analysis for {product} in {location}.

1. Competitors:

1. Name: Northwind Analytics
Description: Regional leader in {product.lower()}-adjacent tooling with offices across {location}
Headquarters: Seattle, USA
Revenue: $1.2B (FY2023: audited)

2. Name: Contoso Systems
Description: Enterprise vendor expanding aggressively into {location}
Headquarters: London, UK
Revenue: $640M

3. Name: Fabrikam Labs
Description: Venture-backed startup, recently opened a {location} office
Headquarters: Berlin, Germany
Note: revenue not publicly disclosed

2. Product Applications:

1. Name: Retail Operations
Description: Store-level forecasting and replenishment for {location} chains
Market Size: $450M
Growth Rate: 12% annually

2. Name: Field Services
Description: Scheduling and dispatch for service technicians
Market Size: $210M
Growth Rate: 8.5%

3. Customer Personas:

1. Name: Operations Manager
Description: Runs day-to-day operations at mid-sized companies in {location}
Cares Most About: efficiency, cost control, reliable reporting
Cares Least About: cutting-edge features

2. Name: IT Director
Description: Owns the software portfolio and vendor relationships
Cares Most About: security, integration with existing systems
Cares Least About: visual design

4. Potential Customers:

1. Operations Manager at Harbor Logistics - consolidating three legacy tools
2. IT Director at Summit Health - evaluating vendors this quarter
3. Regional Operations Manager at Pine Retail - expanding to 40 new stores
4. Procurement Lead at Atlas Foods - budget approved for next year

Let me know if you would like a deeper dive into any segment."""


_GENERATOR_MAP: Dict[str, Type[BaseGenerator]] = {
    "openai": OpenAIGenerator,
    "mock": MockGenerator,
}


def get_generator(backend: Optional[str] = None) -> BaseGenerator:
    backend = (backend or settings.GENERATION_BACKEND).lower()
    cls = _GENERATOR_MAP.get(backend)
    if cls is None:
        raise ConfigurationError(
            f"Unknown generation backend '{backend}'. "
            f"Expected one of: {', '.join(sorted(_GENERATOR_MAP))}"
        )
    return cls()


# ─── Main Agent ──────────────────────────────────────────────────────────────


class ReportGenerationAgent(Agent):
    """
    Agent 1: Report Generation

    Input:  AnalysisRequest
    Output: GeneratedReport  (non-empty response guaranteed)
    """

    def __init__(self, generator: Optional[BaseGenerator] = None):
        super().__init__(name="ReportGenerationAgent")
        self._generator = generator

    def run(self, request: AnalysisRequest) -> GeneratedReport:
        generator = self._generator or get_generator(request.backend)
        prompt = build_prompt(request.product_name, request.location)

        self.logger.info(
            f"Generating [{generator.name}] report for '{request.product_name}' "
            f"in {request.location}"
        )
        response = generator.generate(prompt, request)
        if not response or not response.strip():
            raise EmptyResponseError("No response received from OpenAI")

        self.logger.info(f"  → {len(response)} characters received")
        return GeneratedReport(
            product_name=request.product_name,
            location=request.location,
            prompt=prompt,
            response=response,
            backend=generator.name,
        )
