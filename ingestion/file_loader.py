"""Uploaded-document ingestion: extension dispatch to text or attachment.

Supported formats
-----------------
* ``.txt`` / ``.md``: decoded as UTF-8 into plain input text.
* ``.pdf``: kept as a base64 ``AttachedFile``; no local text extraction, the
  analysis model parses the PDF natively.
* ``.docx``: converted to plain text with python-docx.

Anything else is rejected with ``UnsupportedFileTypeError``. Ingestion is a
pure function of the file name and bytes; applying the result to a session
is the caller's job, so a failure here never touches session state.
"""

from __future__ import annotations

import base64
import io
import logging
from dataclasses import dataclass
from pathlib import Path

from models.analysis import AttachedFile
from scoring.errors import ExtractionError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
SUPPORTED_EXTENSIONS = ("pdf", "docx", "txt", "md")

UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file format. Please use PDF, DOCX, TXT, or MD."


@dataclass(frozen=True)
class IngestResult:
    """Outcome of ingesting one file.

    Exactly one of ``text`` or ``attachment`` is set. A text result replaces
    the session's input text and clears any attachment; an attachment result
    replaces the attachment and leaves the text alone.
    """

    text: str | None = None
    attachment: AttachedFile | None = None


def file_extension(filename: str) -> str:
    """Lower-cased extension after the last dot, or '' if there is none."""
    name = Path(filename).name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def ingest_file(filename: str, payload: bytes) -> IngestResult:
    """Turn an uploaded file into input text or a binary attachment."""
    extension = file_extension(filename)

    if extension == "pdf":
        data = base64.b64encode(payload).decode("ascii")
        logger.info("Attached PDF '%s' (%d bytes)", filename, len(payload))
        return IngestResult(
            attachment=AttachedFile(name=filename, mime_type=PDF_MIME_TYPE, data=data)
        )

    if extension == "docx":
        text = extract_docx_text(payload)
        logger.info("Extracted %d chars of text from '%s'", len(text), filename)
        return IngestResult(text=text)

    if extension in ("txt", "md"):
        return IngestResult(text=payload.decode("utf-8", errors="replace"))

    logger.warning("Rejected '%s': unsupported extension '%s'", filename, extension)
    raise UnsupportedFileTypeError(UNSUPPORTED_FORMAT_MESSAGE)


def ingest_path(path: str | Path) -> IngestResult:
    """Read *path* from disk and ingest it.

    The extension is checked before the file is read, so unsupported files
    are rejected without I/O.
    """
    path = Path(path)
    if file_extension(path.name) not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(UNSUPPORTED_FORMAT_MESSAGE)
    return ingest_file(path.name, path.read_bytes())


def extract_docx_text(payload: bytes) -> str:
    """Extract raw paragraph text from a .docx document.

    Raises ``ExtractionError`` if python-docx is unavailable or the bytes
    are not a readable Word document.
    """
    try:
        import docx
    except ImportError as exc:
        raise ExtractionError("Docx parser not loaded.") from exc

    try:
        document = docx.Document(io.BytesIO(payload))
    except Exception as exc:
        logger.warning("python-docx could not open document: %s", exc)
        raise ExtractionError("Failed to parse .docx file.") from exc

    return "\n".join(paragraph.text for paragraph in document.paragraphs)
