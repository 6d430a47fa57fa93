"""
Report Extraction Agent
------------------------
Turns one generated market-analysis report into an AnalysisResult:

  split sections → parse records → build entities
    → cross-reference customers → render emails

Pure and synchronous: no I/O, no shared state, no exceptions for malformed
input. Records that cannot be completed are dropped.

Input:  GeneratedReport
Output: AnalysisResult
"""

import logging

from agents.base import Agent
from agents.builders import build_applications, build_competitors, build_personas
from agents.cross_reference import attach_customers
from agents.generator import GeneratedReport
from agents.sections import split_sections
from agents.templates import apply_templates
from models.schemas import AnalysisResult, RawData

logger = logging.getLogger(__name__)


def extract_analysis(response: str, product_name: str, prompt: str = "") -> AnalysisResult:
    sections = split_sections(response)

    competitors = build_competitors(sections.competitors)
    applications = build_applications(sections.applications)
    personas = attach_customers(build_personas(sections.personas), sections.customers)
    personas = [apply_templates(p, product_name) for p in personas]

    result = AnalysisResult(
        competitors=tuple(competitors),
        applications=tuple(applications),
        customer_personas=tuple(personas),
        raw_data=RawData(prompt=prompt, response=response),
    )
    logger.info(f"Extracted {result.summary()}")
    return result


class ReportExtractionAgent(Agent):
    """
    Agent 2: Report Extraction

    Input:  GeneratedReport
    Output: AnalysisResult
    """

    def __init__(self):
        super().__init__(name="ReportExtractionAgent")

    def run(self, report: GeneratedReport) -> AnalysisResult:
        return extract_analysis(
            response=report.response,
            product_name=report.product_name,
            prompt=report.prompt,
        )
