"""Tests for the command-line front-end."""

from __future__ import annotations

import pytest

from models.analysis import AnalysisResult
from models.config import ScorerConfig
from models.criteria import CRITERION_IDS
from run_scoring import _parse_args, load_config, run
from scoring.session import ScoreSession
from scoring.store import LocalStore


class _FakeClient:
    def __init__(self, score: int = 3):
        self.score = score
        self.calls = []

    async def analyze(self, text, attachment=None):
        self.calls.append((text, attachment))
        return AnalysisResult(
            scores={cid: self.score for cid in CRITERION_IDS},
            reasoning={cid: "cli" for cid in CRITERION_IDS},
        )


def _session(tmp_path, client=None) -> ScoreSession:
    return ScoreSession(client=client or _FakeClient(), store=LocalStore(tmp_path))


class TestParseArgs:
    def test_requires_command(self):
        with pytest.raises(SystemExit):
            _parse_args([])

    def test_set_arguments(self):
        args = _parse_args(["set", "4", "3"])
        assert (args.command, args.criterion_id, args.value) == ("set", 4, 3)

    def test_analyze_arguments(self):
        args = _parse_args(["--log-level", "DEBUG", "analyze", "--text", "hi", "--save"])
        assert args.text == "hi" and args.save and args.file is None


class TestRun:
    def test_analyze_text_and_save(self, tmp_path, capsys):
        client = _FakeClient(score=4)
        status = run(_parse_args(["analyze", "--text", "hello", "--save"]), _session(tmp_path, client))
        assert status == 0
        assert client.calls == [("hello", None)]
        assert "Total Score: 80" in capsys.readouterr().out

        restored = _session(tmp_path)
        assert restored.load()
        assert restored.compute_total() == 80

    def test_analyze_starts_blank_and_save_replaces_stored_session(self, tmp_path):
        run(_parse_args(["set", "7", "5"]), _session(tmp_path))
        stored = _session(tmp_path)
        stored.load()
        stored.input_text = "old text"
        stored.save()

        client = _FakeClient(score=2)
        assert run(_parse_args(["analyze", "--text", "new", "--save"]), _session(tmp_path, client)) == 0
        assert client.calls == [("new", None)]

        restored = _session(tmp_path)
        restored.load()
        assert restored.scores[7] == 2
        assert restored.input_text == "new"

    def test_analyze_file(self, tmp_path):
        doc = tmp_path / "story.md"
        doc.write_text("# Headline", encoding="utf-8")
        client = _FakeClient()
        assert run(_parse_args(["analyze", "--file", str(doc)]), _session(tmp_path, client)) == 0
        assert client.calls == [("# Headline", None)]

    def test_analyze_unsupported_file(self, tmp_path, capsys):
        client = _FakeClient()
        status = run(_parse_args(["analyze", "--file", "setup.exe"]), _session(tmp_path, client))
        assert status == 1
        assert client.calls == []
        assert "Unsupported file format" in capsys.readouterr().out

    def test_analyze_nothing(self, tmp_path):
        client = _FakeClient()
        assert run(_parse_args(["analyze"]), _session(tmp_path, client)) == 1
        assert client.calls == []

    def test_set_then_show(self, tmp_path, capsys):
        assert run(_parse_args(["set", "4", "5"]), _session(tmp_path)) == 0
        capsys.readouterr()
        assert run(_parse_args(["show"]), _session(tmp_path)) == 0
        out = capsys.readouterr().out
        assert "Total Score: 24" in out

    def test_set_unknown_id(self, tmp_path):
        assert run(_parse_args(["set", "21", "5"]), _session(tmp_path)) == 1

    def test_show_nothing_saved(self, tmp_path, capsys):
        assert run(_parse_args(["show"]), _session(tmp_path)) == 1
        assert "No saved analysis found." in capsys.readouterr().out

    def test_reset_saves_blank_session(self, tmp_path):
        run(_parse_args(["set", "1", "5"]), _session(tmp_path))
        assert run(_parse_args(["reset"]), _session(tmp_path)) == 0
        restored = _session(tmp_path)
        restored.load()
        assert restored.compute_total() == 20


def test_load_config_explicit(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("storage_dir: elsewhere\n")
    assert load_config(str(path)).storage_dir == "elsewhere"


def test_load_config_default_file():
    assert isinstance(load_config(None), ScorerConfig)
