#!/usr/bin/env python3
"""CLI entrypoint for the NCI engineered-reality scoring tool.

Usage::

    python run_scoring.py analyze --file article.pdf --save
    python run_scoring.py analyze --text "Everyone is talking about it..."
    python run_scoring.py show
    python run_scoring.py set 4 3
    python run_scoring.py reset

``show``, ``set`` and ``reset`` work on the session saved in the local
store configured by ``--config`` (default ``config/default.yaml`` when
present). ``analyze`` starts from a blank session and ignores the saved one;
with ``--save`` its result replaces what was stored. ``analyze``
needs an API key in the environment (``API_KEY``, or ``GOOGLE_API_KEY`` /
``OPENAI_API_KEY`` for the chosen provider); a ``.env`` file is honoured.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from models.config import ScorerConfig
from scoring.report import render_session
from scoring.session import ScoreSession

_DEFAULT_CONFIG = Path(__file__).resolve().parent / "config" / "default.yaml"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Score content against the 20 NCI manipulation criteria.",
    )
    parser.add_argument(
        "--config",
        default=None,
        type=str,
        help="Path to the YAML configuration file (default: config/default.yaml).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Run AI analysis on text and/or a document.")
    analyze.add_argument("--text", default=None, help="Text to analyse.")
    analyze.add_argument("--file", default=None, help="Document to analyse (.pdf, .docx, .txt, .md).")
    analyze.add_argument(
        "--save", action="store_true", help="Save the session to the local store afterwards."
    )

    sub.add_parser("show", help="Print the saved session.")

    set_score = sub.add_parser("set", help="Set one criterion's score in the saved session.")
    set_score.add_argument("criterion_id", type=int, help="Criterion id (1-20).")
    set_score.add_argument("value", type=int, help="Score (1-5).")

    sub.add_parser("reset", help="Reset every score and save the blank session.")

    return parser.parse_args(argv)


def _setup_logging(level: str) -> None:
    """Configure root logger with a clean format."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_config(path: str | None) -> ScorerConfig:
    if path is not None:
        return ScorerConfig.from_yaml(path)
    if _DEFAULT_CONFIG.exists():
        return ScorerConfig.from_yaml(_DEFAULT_CONFIG)
    return ScorerConfig()


async def _analyze(session: ScoreSession, args: argparse.Namespace) -> None:
    if args.file and not session.ingest_path(args.file):
        return
    if args.text is not None:
        session.set_input_text(args.text)
    if not session.has_content:
        session.error = None
        print("Nothing to analyse: pass --text and/or --file.", file=sys.stderr)
        return
    if await session.run_analysis() and args.save:
        session.save()


def run(args: argparse.Namespace, session: ScoreSession) -> int:
    """Execute one CLI command against *session*. Returns the exit status."""
    logger = logging.getLogger(__name__)

    if args.command == "analyze":
        asyncio.run(_analyze(session, args))
        if not session.has_content and session.error is None:
            return 1
    elif args.command == "show":
        session.load()
    elif args.command == "set":
        session.load()
        session.error = None
        try:
            session.set_score(args.criterion_id, args.value)
        except KeyError as exc:
            logger.error("%s", exc)
            print(str(exc), file=sys.stderr)
            return 1
        session.save()
    elif args.command == "reset":
        session.reset()
        session.save()

    print(render_session(session))
    return 1 if session.error is not None else 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()  # auto-load .env file if present
    args = _parse_args(argv)
    _setup_logging(args.log_level)

    config = load_config(args.config)
    logging.getLogger(__name__).info(
        "Using %s/%s, store at '%s'", config.llm_provider, config.llm_model, config.storage_dir
    )
    return run(args, ScoreSession.from_config(config))


if __name__ == "__main__":
    sys.exit(main())
