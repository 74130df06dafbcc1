"""Scorer configuration model, loaded from YAML.

Shared by the analysis client, the session store, and the CLI.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DEFAULT_STORAGE_KEY = "nci_analysis_v1"


class ScorerConfig(BaseModel):
    """Top-level configuration for a scoring session."""

    llm_provider: str = Field(
        default="google",
        description="LLM provider identifier, e.g. 'google', 'openai'.",
    )
    llm_model: str = Field(
        default="gemini-2.5-flash",
        description="Model name, e.g. 'gemini-2.5-flash', 'gpt-4o-mini'.",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for the analysis model.",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Seconds to wait for the analysis model before giving up.",
    )
    storage_dir: str = Field(
        default=".nci_storage",
        description="Directory backing the local key-value store.",
    )
    storage_key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Fixed key the session snapshot is saved under (used as a file name).",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ScorerConfig:
        """Load and validate a ``ScorerConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a valid YAML mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)
