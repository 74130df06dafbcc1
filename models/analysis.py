"""Analysis input/output models: AttachedFile, CriterionVerdict, AnalysisResponse, AnalysisResult."""

from pydantic import BaseModel, ConfigDict, Field


class AttachedFile(BaseModel):
    """Binary document forwarded to the analysis model as base64.

    Serialised with the camelCase ``mimeType`` key used by saved snapshots.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    mime_type: str = Field(alias="mimeType")
    data: str  # base64, no data-URL prefix


class CriterionVerdict(BaseModel):
    """One element of the model's ``analysis`` array."""

    id: int = Field(description="The criteria ID (1-20)")
    score: int = Field(description="Score from 1 to 5")
    reasoning: str = Field(description="Brief justification for the score")


class AnalysisResponse(BaseModel):
    """Top-level reply object: ``{"analysis": [...]}``."""

    analysis: list[CriterionVerdict]


class AnalysisResult(BaseModel):
    """Per-criterion scores and justifications keyed by criterion id."""

    scores: dict[int, int]
    reasoning: dict[int, str] = {}
