from .base import Agent, AgentResult, Orchestrator
from .generator import ReportGenerationAgent
from .extractor import ReportExtractionAgent, extract_analysis

__all__ = [
    "Agent", "AgentResult", "Orchestrator",
    "ReportGenerationAgent", "ReportExtractionAgent",
    "extract_analysis",
]
