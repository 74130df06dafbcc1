"""Analysis client: asks an LLM to score content against the 20 NCI criteria.

Request construction
--------------------
One chat call per analysis. The system message embeds every criterion
verbatim, the 1-5 rubric, and the JSON output contract (see
``analysis/prompts``). The user message carries the content parts: the
binary document first (if any), then the plain text (if any). Both providers
are asked for structured output matching ``ANALYSIS_RESPONSE_SCHEMA``.

Response handling
-----------------
The model's reply is parsed as JSON (markdown code fences are tolerated) and
every entry is validated. A reply that is malformed, or that does not score
each of the 20 criteria exactly once within 1-5, raises
``AnalysisResponseError``; a partial result never reaches the session.

The client does not retry. Whether a result is still wanted when it arrives
is the caller's concern (see ``scoring.session``).
"""

from __future__ import annotations

import copy
import json
import logging
import os
import re
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from analysis.prompts import build_system_instruction
from models.analysis import AnalysisResponse, AnalysisResult, AttachedFile, CriterionVerdict
from models.config import ScorerConfig
from models.criteria import CRITERION_IDS, MAX_SCORE, MIN_SCORE
from scoring.errors import AnalysisResponseError, EmptyContentError, MissingCredentialError

logger = logging.getLogger(__name__)

# Checked in order; the generic name wins so one variable works for any provider.
_API_KEY_ENV_VARS: dict[str, tuple[str, ...]] = {
    "google": ("API_KEY", "GOOGLE_API_KEY"),
    "openai": ("API_KEY", "OPENAI_API_KEY"),
}


def resolve_api_key(provider: str, api_key: str | None = None) -> str:
    """Return the API key for *provider*, explicit value first, then the environment.

    Raises ``MissingCredentialError`` when nothing is configured.
    """
    if api_key:
        return api_key
    for name in _API_KEY_ENV_VARS.get(provider.lower(), ("API_KEY",)):
        value = os.environ.get(name)
        if value:
            return value
    raise MissingCredentialError("API Key is missing")


# Structured-output contract sent with every request. Mirrors
# ``models.analysis.AnalysisResponse``; written out by hand because Gemini's
# schema dialect does not resolve ``$ref``.
ANALYSIS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "analysis": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer", "description": "The criteria ID (1-20)"},
                    "score": {"type": "integer", "description": "Score from 1 to 5"},
                    "reasoning": {
                        "type": "string",
                        "description": "Brief justification for the score",
                    },
                },
                "required": ["id", "score", "reasoning"],
            },
        },
    },
    "required": ["analysis"],
}


def _strict_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Copy of *schema* with ``additionalProperties: false`` on every object.

    OpenAI strict mode rejects object schemas without it.
    """
    strict = copy.deepcopy(schema)
    stack = [strict]
    while stack:
        node = stack.pop()
        if node.get("type") == "object":
            node["additionalProperties"] = False
            stack.extend(node.get("properties", {}).values())
        elif node.get("type") == "array":
            stack.append(node["items"])
    return strict


def _create_llm(config: ScorerConfig, api_key: str):
    """Instantiate the LangChain chat model for the configured provider."""
    provider = config.llm_provider.lower()

    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=config.llm_model,
            temperature=config.temperature,
            google_api_key=api_key,
            timeout=config.request_timeout,
            max_retries=0,
            response_mime_type="application/json",
            response_schema=ANALYSIS_RESPONSE_SCHEMA,
        )
    elif provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=config.llm_model,
            temperature=config.temperature,
            api_key=api_key,
            timeout=config.request_timeout,
            max_retries=0,
            model_kwargs={
                "response_format": {
                    "type": "json_schema",
                    "json_schema": {
                        "name": "nci_analysis",
                        "strict": True,
                        "schema": _strict_schema(ANALYSIS_RESPONSE_SCHEMA),
                    },
                },
            },
        )
    else:
        raise ValueError(
            f"Unsupported LLM provider '{provider}'. "
            f"Supported: 'google', 'openai'."
        )


def build_content_parts(text: str, attachment: AttachedFile | None = None) -> list[dict[str, Any]]:
    """User-message content blocks: binary document first, then text."""
    parts: list[dict[str, Any]] = []

    if attachment is not None:
        parts.append({
            "type": "file",
            "source_type": "base64",
            "mime_type": attachment.mime_type,
            "data": attachment.data,
            "filename": attachment.name,
        })

    if text and text.strip():
        parts.append({"type": "text", "text": text})

    return parts


class AnalysisClient:
    """Scores text and/or a document against the NCI criteria via an LLM.

    The chat model is built lazily on the first ``analyze`` call so that a
    missing API key is reported before any client object or network call
    exists. Tests may pass a ready-made *llm*.
    """

    def __init__(
        self,
        config: ScorerConfig | None = None,
        api_key: str | None = None,
        llm: Any | None = None,
    ) -> None:
        self._config = config or ScorerConfig()
        self._api_key = api_key
        self._llm = llm
        self._system_instruction = build_system_instruction()

    @property
    def system_instruction(self) -> str:
        return self._system_instruction

    async def analyze(
        self,
        text: str,
        attachment: AttachedFile | None = None,
    ) -> AnalysisResult:
        """Run one analysis and return validated scores and reasoning.

        The credential is checked before the content, then the chat model is
        built on first use.
        """
        api_key = None
        if self._llm is None:
            api_key = resolve_api_key(self._config.llm_provider, self._api_key)

        parts = build_content_parts(text, attachment)
        if not parts:
            raise EmptyContentError("No content provided for analysis")

        if self._llm is None:
            self._llm = _create_llm(self._config, api_key)
        llm = self._llm

        messages = [
            SystemMessage(content=self._system_instruction),
            HumanMessage(content=parts),
        ]

        logger.info(
            "Requesting analysis from %s/%s (%d chars of text, attachment=%s)",
            self._config.llm_provider,
            self._config.llm_model,
            len(text or ""),
            attachment.name if attachment else None,
        )
        response = await llm.ainvoke(messages)

        raw = _message_text(response)
        logger.debug("Raw analysis response: %s", raw)
        return parse_analysis_response(raw)


# ------------------------------------------------------------------
# Response parsing
# ------------------------------------------------------------------

def parse_analysis_response(raw: str) -> AnalysisResult:
    """Parse and validate the model's JSON reply.

    Accepts ``{"analysis": [...]}`` or a bare array of
    ``{"id", "score", "reasoning"}`` objects.
    """
    if not raw or not raw.strip():
        raise AnalysisResponseError("No response from analysis model")

    data = _parse_json(raw)

    if isinstance(data, dict):
        items = data.get("analysis")
    else:
        items = data
    if not isinstance(items, list):
        raise AnalysisResponseError(
            "Failed to parse analysis results: expected an 'analysis' array."
        )

    try:
        verdicts = AnalysisResponse.model_validate({"analysis": items}).analysis
    except ValidationError as exc:
        raise AnalysisResponseError(f"Failed to parse analysis results: {exc}") from exc

    validate_verdicts(verdicts)

    return AnalysisResult(
        scores={v.id: v.score for v in verdicts},
        reasoning={v.id: v.reasoning for v in verdicts},
    )


def validate_verdicts(verdicts: list[CriterionVerdict]) -> None:
    """Require exactly one in-range verdict for every catalog criterion."""
    known = set(CRITERION_IDS)
    seen: set[int] = set()
    problems: list[str] = []

    for verdict in verdicts:
        if verdict.id not in known:
            problems.append(f"unknown id {verdict.id}")
        elif verdict.id in seen:
            problems.append(f"duplicate id {verdict.id}")
        seen.add(verdict.id)
        if not MIN_SCORE <= verdict.score <= MAX_SCORE:
            problems.append(f"score {verdict.score} out of range for id {verdict.id}")

    missing = sorted(known - seen)
    if missing:
        problems.append(f"missing ids {missing}")

    if problems:
        logger.warning("Rejected analysis response: %s", "; ".join(problems))
        raise AnalysisResponseError(
            "Incomplete or invalid analysis results: " + "; ".join(problems)
        )


def _parse_json(text: str) -> Any:
    """Parse JSON from an LLM response, handling markdown code blocks."""
    match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    json_str = match.group(1) if match else text
    try:
        return json.loads(json_str.strip())
    except json.JSONDecodeError as exc:
        raise AnalysisResponseError("Failed to parse analysis results") from exc


def _message_text(message: Any) -> str:
    """Flatten a chat model reply into plain text."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        chunks = []
        for block in content:
            if isinstance(block, str):
                chunks.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                chunks.append(block.get("text", ""))
        return "".join(chunks)
    return ""
