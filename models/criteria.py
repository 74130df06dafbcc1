"""Criteria catalog: the 20 NCI criteria and the four threat-level buckets.

These are static, shared data contracts. The catalog is defined once at
import time and never mutated; every other component reads from here.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    """Threat tier of an aggregate score."""

    LOW = "Low likelihood of a PSYOP"
    MODERATE = "Moderate likelihood—look deeper"
    HIGH = "Strong likelihood—manipulation likely"
    EXTREME = "Overwhelming signs of a PSYOP"


class Criterion(BaseModel):
    """Single manipulation-indicator criterion."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=20)
    category: str
    question: str
    example: str


class ScoreRange(BaseModel):
    """Closed score interval ``[min, max]`` mapped to a risk level."""

    model_config = ConfigDict(frozen=True)

    min: int
    max: int
    level: RiskLevel
    color: str = Field(description="Display colour as a hex token, e.g. '#10B981'.")
    headline: str = Field(description="Gauge headline shown above the level label.")
    short_label: str = Field(description="Abbreviated legend label.")

    def contains(self, total: int) -> bool:
        return self.min <= total <= self.max


NCI_CRITERIA: tuple[Criterion, ...] = (
    Criterion(id=1, category="Timing", question="Does the timing feel suspicious or coincidental with other events?", example="A story about water contamination surfaces during a corporate scandal."),
    Criterion(id=2, category="Emotional Manipulation", question="Does it provoke fear, outrage, or guilt without solid evidence?", example="Reports show crying children and dying wildlife but avoid causes."),
    Criterion(id=3, category="Uniform Messaging", question="Are key phrases or ideas repeated across media?", example="All outlets use terms like “unprecedented” and “avoidable tragedy.”"),
    Criterion(id=4, category="Missing Information", question="Are alternative views or critical details excluded?", example="Few sources discuss the timeline or other possible contributors."),
    Criterion(id=5, category="Simplistic Narratives", question="Is the story reduced to “good vs. evil” frameworks?", example="Blames one company entirely while ignoring systemic issues."),
    Criterion(id=6, category="Tribal Division", question="Does it create an “us vs. them” dynamic?", example="Locals are victims, while outsiders are blamed."),
    Criterion(id=7, category="Authority Overload", question="Are questionable “experts” driving the narrative?", example="Non-environmental experts dominate airtime to support policies."),
    Criterion(id=8, category="Call for Urgent Action", question="Does it demand immediate decisions without reflection?", example="Campaigns push for immediate donations and rapid policy changes."),
    Criterion(id=9, category="Overuse of Novelty", question="Is the event framed as shocking or unprecedented?", example="Media emphasizes how “shocking” and “once-in-a-lifetime” the crisis is."),
    Criterion(id=10, category="Financial/Political Gain", question="Do powerful groups benefit disproportionately?", example="A company offering cleanup services lobbies for government contracts."),
    Criterion(id=11, category="Suppression of Dissent", question="Are critics silenced or labeled negatively?", example="Opponents dismissed as “deniers” or ignored."),
    Criterion(id=12, category="False Dilemmas", question="Are only two extreme options presented?", example="“Either you support this policy, or you don’t care about the environment.”"),
    Criterion(id=13, category="Bandwagon Effect", question="Is there pressure to conform because “everyone is doing it”?", example="Social media influencers post identical hashtags, urging followers to join in."),
    Criterion(id=14, category="Emotional Repetition", question="Are the same emotional triggers repeated excessively?", example="Destruction and suffering imagery looped endlessly on TV and online."),
    Criterion(id=15, category="Cherry-Picked Data", question="Are statistics presented selectively or out of context?", example="Dramatic figures shared without explaining how they were calculated."),
    Criterion(id=16, category="Logical Fallacies", question="Are flawed arguments used to dismiss critics?", example="Critics labeled “out-of-touch elites” without addressing their points."),
    Criterion(id=17, category="Manufactured Outrage", question="Does outrage seem sudden or disconnected from facts?", example="Viral memes escalate anger quickly with little context provided."),
    Criterion(id=18, category="Framing Techniques", question="Is the story shaped to control how you perceive it?", example="The crisis is framed as entirely preventable, ignoring systemic factors."),
    Criterion(id=19, category="Rapid Behavior Shifts", question="Are groups adopting symbols or actions without clear reasoning?", example="Social media suddenly fills with users adding water droplet emojis to their profiles."),
    Criterion(id=20, category="Historical Parallels", question="Does the story mirror manipulative past events?", example="Past environmental crises were similarly used to pass sweeping, controversial legislation."),
)

CRITERION_IDS: tuple[int, ...] = tuple(c.id for c in NCI_CRITERIA)

# Category 4: the omission itself counts as evidence of manipulation.
MISSING_INFORMATION_ID = 4

MIN_SCORE = 1
MAX_SCORE = 5

# Buckets start at 0 although the lowest reachable total is 20 (20 criteria
# floored at 1). Published boundaries are kept as-is.
SCORE_RANGES: tuple[ScoreRange, ...] = (
    ScoreRange(min=0, max=25, level=RiskLevel.LOW, color="#10B981", headline="LOW PROBABILITY", short_label="LOW"),
    ScoreRange(min=26, max=50, level=RiskLevel.MODERATE, color="#F59E0B", headline="MODERATE PROBABILITY", short_label="MOD"),
    ScoreRange(min=51, max=75, level=RiskLevel.HIGH, color="#F97316", headline="HIGH PROBABILITY", short_label="HIGH"),
    ScoreRange(min=76, max=100, level=RiskLevel.EXTREME, color="#EF4444", headline="PSYOP CONFIRMED", short_label="EXT"),
)


def get_criterion(criterion_id: int) -> Criterion:
    """Return the criterion with *criterion_id*.

    Raises ``KeyError`` if the id is not one of the 20 catalog ids.
    """
    for criterion in NCI_CRITERIA:
        if criterion.id == criterion_id:
            return criterion
    raise KeyError(criterion_id)


def default_scores() -> dict[int, int]:
    """Fresh score map with every criterion at the minimum score."""
    return {cid: MIN_SCORE for cid in CRITERION_IDS}


def resolve_risk_tier(total: int) -> ScoreRange:
    """Map an aggregate score onto its threat bucket.

    Linear scan, first closed range containing *total* wins. Totals outside
    every bucket (negative, or above 100 from a corrupted load) fall back to
    the lowest bucket.
    """
    for score_range in SCORE_RANGES:
        if score_range.contains(total):
            return score_range
    return SCORE_RANGES[0]
