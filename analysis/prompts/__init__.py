"""Prompt templates for the analysis model.

Templates live next to this ``__init__.py`` and are rendered with Jinja2.
``StrictUndefined`` makes a missing variable fail loudly instead of
rendering an empty string into the prompt.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from models.criteria import (
    CRITERION_IDS,
    MAX_SCORE,
    MIN_SCORE,
    MISSING_INFORMATION_ID,
    NCI_CRITERIA,
    Criterion,
)

_TEMPLATE_DIR = Path(__file__).resolve().parent
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def build_system_instruction(criteria: tuple[Criterion, ...] = NCI_CRITERIA) -> str:
    """System instruction embedding every criterion, the rubric, and the output contract."""
    rubric = _env.get_template("analysis_system.jinja").render(
        criteria=criteria,
        min_score=MIN_SCORE,
        max_score=MAX_SCORE,
        missing_information_id=MISSING_INFORMATION_ID,
    )
    output_format = _env.get_template("json_output_instructions.jinja").render(
        criterion_ids=[c.id for c in criteria] or list(CRITERION_IDS),
        min_score=MIN_SCORE,
        max_score=MAX_SCORE,
    )
    return f"{rubric}\n{output_format}"
