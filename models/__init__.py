"""Data models for the NCI scoring tool.

Shared by ingestion, analysis, and the scoring session.
"""

from models.analysis import AnalysisResponse, AnalysisResult, AttachedFile, CriterionVerdict
from models.config import ScorerConfig
from models.criteria import (
    CRITERION_IDS,
    NCI_CRITERIA,
    SCORE_RANGES,
    Criterion,
    RiskLevel,
    ScoreRange,
    resolve_risk_tier,
)
from models.session import Notice, SessionSnapshot

__all__ = [
    # analysis
    "AnalysisResponse",
    "AnalysisResult",
    "AttachedFile",
    "CriterionVerdict",
    # config
    "ScorerConfig",
    # criteria
    "CRITERION_IDS",
    "NCI_CRITERIA",
    "SCORE_RANGES",
    "Criterion",
    "RiskLevel",
    "ScoreRange",
    "resolve_risk_tier",
    # session
    "Notice",
    "SessionSnapshot",
]
