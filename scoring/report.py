"""Plain-text rendering of a scoring session: threat gauge and score cards."""

from __future__ import annotations

from models.criteria import NCI_CRITERIA, SCORE_RANGES, Criterion
from scoring.session import ScoreSession

_GAUGE_WIDTH = 40


def render_gauge(total: int, width: int = _GAUGE_WIDTH) -> str:
    """Horizontal bar over the 0-100 gauge domain."""
    filled = max(0, min(width, round(total / 100 * width)))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_dashboard(session: ScoreSession) -> str:
    total = session.compute_total()
    current = session.current_range
    legend = "  ".join(
        f"{r.min}-{r.max} {r.short_label}" if r is not SCORE_RANGES[-1] else f"{r.min}+ {r.short_label}"
        for r in SCORE_RANGES
    )
    lines = [
        "THREAT LEVEL",
        render_gauge(total),
        f"Total Score: {total}",
        f"{current.headline} ({current.color})",
        current.level.value,
        legend,
    ]
    return "\n".join(lines)


def render_score_card(criterion: Criterion, score: int, reasoning: str | None = None) -> str:
    lines = [
        f"#{criterion.id:02d} {criterion.category}",
        f"  {criterion.question}",
        f"  Ex: {criterion.example}",
    ]
    if reasoning:
        lines.append(f"  AI NOTE: {reasoning}")
    lines.append(f"  Score: {score}")
    return "\n".join(lines)


def render_session(session: ScoreSession) -> str:
    """Dashboard, any pending notices, then every criterion card."""
    parts = [render_dashboard(session)]
    for notice in (session.error, session.notification):
        if notice is not None:
            parts.append(f"[{notice.level.upper()}] {notice.message}")
    if session.attached_file is not None:
        parts.append(f"Attached: {session.attached_file.name}")
    parts.append("Assessment Criteria")
    parts.extend(
        render_score_card(c, session.scores[c.id], session.reasoning.get(c.id))
        for c in NCI_CRITERIA
    )
    return "\n\n".join(parts)
