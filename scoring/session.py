"""Score session: the single owner of all mutable scoring state.

Holds the 20 current scores, the AI justifications, the input text, the
attached document, the busy flag, and the current notices. Presentation
code reads these attributes directly; every mutation goes through a method
here.

Error handling
--------------
Lower layers raise ``ScoringError`` subclasses. The session recovers at the
point of occurrence: it logs the failure, records an error ``Notice`` and
leaves the prior state untouched. Nothing is retried.

Analysis supersession
---------------------
``run_analysis`` captures an epoch token before awaiting the analysis
client. On completion the result (or failure) is applied only if that token
is still current. Starting another analysis or calling ``reset`` advances
the epoch, so the earlier call's eventual completion becomes a no-op.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from analysis.client import AnalysisClient
from ingestion.file_loader import IngestResult, ingest_file, ingest_path
from models.analysis import AttachedFile
from models.config import DEFAULT_STORAGE_KEY, ScorerConfig
from models.criteria import (
    CRITERION_IDS,
    MAX_SCORE,
    MIN_SCORE,
    ScoreRange,
    default_scores,
    resolve_risk_tier,
)
from models.session import Notice, SessionSnapshot
from scoring.epoch import EpochCounter
from scoring.errors import ScoringError, UnknownCriterionError
from scoring.store import LocalStore, read_snapshot, write_snapshot

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "Analysis failed. Please ensure a valid API key is set in the environment or try again."
)
SAVE_FAILED_MESSAGE = "Failed to save analysis to local storage."
RESET_MESSAGE = "All fields reset."
SAVED_MESSAGE = "Analysis saved successfully."


def clamp_score(value: int) -> int:
    """Clamp *value* into the 1-5 score range."""
    return max(MIN_SCORE, min(MAX_SCORE, value))


class ScoreSession:
    """Coordinator for one scoring session."""

    def __init__(
        self,
        client: Any | None = None,
        store: LocalStore | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._client = client if client is not None else AnalysisClient()
        self._store = store if store is not None else LocalStore(ScorerConfig().storage_dir)
        self._storage_key = storage_key
        self._epoch = EpochCounter()

        self.scores: dict[int, int] = default_scores()
        self.reasoning: dict[int, str] = {}
        self.input_text: str = ""
        self.attached_file: AttachedFile | None = None
        self.is_analyzing: bool = False
        self.error: Notice | None = None
        self.notification: Notice | None = None

    @classmethod
    def from_config(cls, config: ScorerConfig, api_key: str | None = None) -> ScoreSession:
        """Build a session wired to the configured analysis model and store."""
        return cls(
            client=AnalysisClient(config, api_key=api_key),
            store=LocalStore(config.storage_dir),
            storage_key=config.storage_key,
        )

    # ------------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------------

    def set_score(self, criterion_id: int, value: int) -> None:
        """Set one criterion's score, clamped into 1-5.

        Raises ``UnknownCriterionError`` for ids outside the catalog and
        ``ValueError`` for non-integer values.
        """
        if criterion_id not in CRITERION_IDS:
            raise UnknownCriterionError(criterion_id)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Score must be an integer, got {value!r}.")
        self.scores[criterion_id] = clamp_score(value)

    def compute_total(self) -> int:
        return sum(self.scores.values())

    def resolve_risk_tier(self, total: int | None = None) -> ScoreRange:
        """Threat bucket for *total* (defaults to the current total)."""
        return resolve_risk_tier(self.compute_total() if total is None else total)

    @property
    def current_range(self) -> ScoreRange:
        return self.resolve_risk_tier()

    @property
    def gauge_fraction(self) -> float:
        """Fill of the 0-100 threat gauge, in [0, 1]."""
        return max(0.0, min(1.0, self.compute_total() / 100.0))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_input_text(self, text: str) -> None:
        self.input_text = text

    def remove_attached_file(self) -> None:
        self.attached_file = None

    def ingest_file(self, filename: str, payload: bytes) -> bool:
        """Ingest an uploaded file. Returns False (with an error notice) on failure."""
        self.error = None
        try:
            result = ingest_file(filename, payload)
        except ScoringError as exc:
            logger.warning("Ingestion of '%s' failed: %s", filename, exc)
            self.error = Notice(level="error", message=str(exc))
            return False
        self._apply_ingest(result)
        return True

    def ingest_path(self, path: str | Path) -> bool:
        """Ingest a file from disk. Returns False (with an error notice) on failure."""
        self.error = None
        try:
            result = ingest_path(path)
        except ScoringError as exc:
            logger.warning("Ingestion of '%s' failed: %s", path, exc)
            self.error = Notice(level="error", message=str(exc))
            return False
        except OSError as exc:
            logger.warning("Could not read '%s': %s", path, exc)
            self.error = Notice(level="error", message=f"Could not read file: {path}")
            return False
        self._apply_ingest(result)
        return True

    def _apply_ingest(self, result: IngestResult) -> None:
        if result.text is not None:
            self.input_text = result.text
            self.attached_file = None
        elif result.attachment is not None:
            self.attached_file = result.attachment

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    @property
    def has_content(self) -> bool:
        return bool(self.input_text.strip()) or self.attached_file is not None

    @property
    def can_analyze(self) -> bool:
        """Gate for the analyze control: idle and something to analyse."""
        return not self.is_analyzing and self.has_content

    async def run_analysis(self) -> bool:
        """Analyse the current text/attachment and merge the result.

        Returns True only when the result was applied. Returns False when
        there is nothing to analyse, when the call failed, or when it was
        superseded by a newer analysis or a reset while in flight.
        """
        if not self.has_content:
            return False

        token = self._epoch.advance()
        self.is_analyzing = True
        self.error = None
        self.notification = None

        try:
            result = await self._client.analyze(self.input_text, self.attached_file)
        except Exception:
            if self._epoch.is_current(token):
                logger.exception("Analysis %d failed", token)
                self.error = Notice(level="error", message=ANALYSIS_FAILED_MESSAGE)
            else:
                logger.info("Ignoring failure of superseded analysis %d", token)
            return False
        finally:
            if self._epoch.is_current(token):
                self.is_analyzing = False

        if not self._epoch.is_current(token):
            logger.info(
                "Discarding result of superseded analysis %d (current %d)",
                token,
                self._epoch.current,
            )
            return False

        for cid in CRITERION_IDS:
            if cid in result.scores:
                self.scores[cid] = clamp_score(int(result.scores[cid]))
        self.reasoning = {
            cid: text for cid, text in result.reasoning.items() if cid in CRITERION_IDS
        }
        logger.info("Applied analysis %d: total=%d", token, self.compute_total())
        return True

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Return to a blank session and invalidate any in-flight analysis."""
        self._epoch.advance()
        self.scores = default_scores()
        self.reasoning = {}
        self.input_text = ""
        self.attached_file = None
        self.error = None
        self.is_analyzing = False
        self.notification = Notice(level="info", message=RESET_MESSAGE)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            scores=dict(self.scores),
            input_text=self.input_text,
            attached_file=self.attached_file,
            ai_reasoning=dict(self.reasoning),
            timestamp=datetime.now(timezone.utc),
        )

    def apply_snapshot(self, snapshot: SessionSnapshot) -> None:
        """Merge the fields present in *snapshot* into the current state.

        Fields missing from an old or partial snapshot keep their current
        values. Scores are merged per id and clamped; unknown ids are dropped.
        """
        present = snapshot.model_fields_set

        if "scores" in present and snapshot.scores is not None:
            for cid, value in snapshot.scores.items():
                if cid in CRITERION_IDS:
                    self.scores[cid] = clamp_score(value)
        if "input_text" in present:
            self.input_text = snapshot.input_text or ""
        if "attached_file" in present:
            self.attached_file = snapshot.attached_file
        if "ai_reasoning" in present and snapshot.ai_reasoning is not None:
            self.reasoning = {
                cid: text for cid, text in snapshot.ai_reasoning.items() if cid in CRITERION_IDS
            }

    def save(self) -> bool:
        """Write the whole session under the storage key."""
        try:
            write_snapshot(self._store, self._storage_key, self.snapshot())
        except ScoringError as exc:
            logger.error("Save failed: %s", exc)
            self.error = Notice(level="error", message=SAVE_FAILED_MESSAGE)
            return False
        self.notification = Notice(level="info", message=SAVED_MESSAGE)
        self.error = None
        return True

    def load(self) -> bool:
        """Restore the saved session, merging only the fields it contains."""
        try:
            snapshot = read_snapshot(self._store, self._storage_key)
        except ScoringError as exc:
            logger.warning("Load failed: %s", exc)
            self.error = Notice(level="error", message=str(exc))
            return False

        self.apply_snapshot(snapshot)
        saved_on = snapshot.timestamp.date().isoformat() if snapshot.timestamp else "an unknown date"
        self.notification = Notice(level="info", message=f"Loaded analysis from {saved_on}")
        self.error = None
        return True

    def dismiss_notice(self) -> None:
        self.error = None
        self.notification = None
