"""LLM-backed analysis of content against the NCI criteria."""

from analysis.client import AnalysisClient, parse_analysis_response, resolve_api_key

__all__ = [
    "AnalysisClient",
    "parse_analysis_response",
    "resolve_api_key",
]
