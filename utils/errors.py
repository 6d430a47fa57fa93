"""
Caller-side failures of an analysis run.

Each carries a single human-readable message that the API / CLI surface
shows as-is. The extraction core never raises these; they are raised before
it is invoked.
"""


class AnalysisError(Exception):
    """Base class for terminal failures of one analysis invocation."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(AnalysisError):
    """Empty product name / location."""
    status_code = 400


class ConfigurationError(AnalysisError):
    """Missing service credentials or unknown backend."""
    status_code = 500


class GenerationError(AnalysisError):
    """The external generation call failed."""
    status_code = 502


class EmptyResponseError(GenerationError):
    """The external generation call returned no text."""
