"""Exception taxonomy for the scoring tool.

Lower layers (ingestion, analysis client, store) raise these; the
``ScoreSession`` coordinator catches them at the point of occurrence and
turns them into a user-facing ``Notice``.
"""

from __future__ import annotations


class ScoringError(Exception):
    """Base class for every recoverable scoring-tool failure."""


class MissingCredentialError(ScoringError):
    """No API key is configured for the analysis model."""


class EmptyContentError(ScoringError):
    """Analysis requested with neither text nor an attached file."""


class UnsupportedFileTypeError(ScoringError):
    """Uploaded file has an extension the ingester does not handle."""


class ExtractionError(ScoringError):
    """Text extraction from a document failed or the extractor is unavailable."""


class AnalysisResponseError(ScoringError):
    """The analysis model returned malformed or incomplete output."""


class StorageError(ScoringError):
    """The local store could not be read or written."""


class SnapshotNotFoundError(ScoringError):
    """No snapshot has been saved under the storage key."""


class SnapshotCorruptError(ScoringError):
    """The saved snapshot could not be parsed."""


class UnknownCriterionError(ScoringError, KeyError):
    """Score set for an id outside the 20-criterion catalog."""

    def __init__(self, criterion_id: object) -> None:
        super().__init__(criterion_id)
        self.criterion_id = criterion_id

    def __str__(self) -> str:
        return f"Unknown criterion id {self.criterion_id!r}; expected 1-20."
