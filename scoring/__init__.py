"""Score-state management, persistence, and reporting for the NCI scoring tool.

``ScoreSession`` lives in ``scoring.session`` and is not re-exported here:
ingestion and analysis import ``scoring.errors``, and the session imports
both of them.
"""

from scoring.epoch import EpochCounter
from scoring.errors import (
    AnalysisResponseError,
    EmptyContentError,
    ExtractionError,
    MissingCredentialError,
    ScoringError,
    SnapshotCorruptError,
    SnapshotNotFoundError,
    StorageError,
    UnknownCriterionError,
    UnsupportedFileTypeError,
)
from scoring.store import LocalStore, read_snapshot, write_snapshot

__all__ = [
    "EpochCounter",
    "LocalStore",
    "read_snapshot",
    "write_snapshot",
    # errors
    "AnalysisResponseError",
    "EmptyContentError",
    "ExtractionError",
    "MissingCredentialError",
    "ScoringError",
    "SnapshotCorruptError",
    "SnapshotNotFoundError",
    "StorageError",
    "UnknownCriterionError",
    "UnsupportedFileTypeError",
]
