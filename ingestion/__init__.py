"""Document ingestion for the scoring tool."""

from ingestion.file_loader import (
    SUPPORTED_EXTENSIONS,
    IngestResult,
    extract_docx_text,
    ingest_file,
    ingest_path,
)

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "IngestResult",
    "extract_docx_text",
    "ingest_file",
    "ingest_path",
]
