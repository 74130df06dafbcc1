"""Session models: the persisted snapshot and user-facing notices.

``SessionSnapshot`` is the wire format written to the local store. Field
aliases keep the camelCase keys (``inputText``, ``attachedFile``,
``aiReasoning``) so snapshots stay readable by earlier versions of the tool.
Every field is optional on read; ``model_fields_set`` tells the loader which
ones were actually present.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.analysis import AttachedFile


class SessionSnapshot(BaseModel):
    """Serializable union of the session state."""

    model_config = ConfigDict(populate_by_name=True)

    scores: dict[int, int] | None = None
    input_text: str | None = Field(default=None, alias="inputText")
    attached_file: AttachedFile | None = Field(default=None, alias="attachedFile")
    ai_reasoning: dict[int, str] | None = Field(default=None, alias="aiReasoning")
    timestamp: datetime | None = None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class Notice(BaseModel):
    """Transient, dismissable message for the user."""

    level: Literal["error", "info"]
    message: str
