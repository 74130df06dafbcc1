"""Tests for plain-text session rendering."""

from __future__ import annotations

from models.analysis import AttachedFile
from models.criteria import CRITERION_IDS, get_criterion
from scoring.report import render_dashboard, render_gauge, render_score_card, render_session
from scoring.session import ScoreSession
from scoring.store import LocalStore


class _NoClient:
    async def analyze(self, text, attachment=None):
        raise AssertionError("not expected")


def _session(tmp_path) -> ScoreSession:
    return ScoreSession(client=_NoClient(), store=LocalStore(tmp_path))


def test_gauge_fill():
    assert render_gauge(0, width=10) == "[----------]"
    assert render_gauge(50, width=10) == "[#####-----]"
    assert render_gauge(100, width=10) == "[##########]"


def test_dashboard_low(tmp_path):
    text = render_dashboard(_session(tmp_path))
    assert "THREAT LEVEL" in text
    assert "Total Score: 20" in text
    assert "LOW PROBABILITY" in text
    assert "76+ EXT" in text


def test_dashboard_extreme(tmp_path):
    session = _session(tmp_path)
    for cid in CRITERION_IDS:
        session.set_score(cid, 4)
    text = render_dashboard(session)
    assert "Total Score: 80" in text
    assert "PSYOP CONFIRMED" in text
    assert "Overwhelming signs of a PSYOP" in text


def test_dashboard_shows_gauge_not_percentage(tmp_path):
    session = _session(tmp_path)
    for cid in CRITERION_IDS:
        session.set_score(cid, 2)
    lines = render_dashboard(session).splitlines()
    assert lines[1] == render_gauge(40)
    assert session.gauge_fraction == 0.4
    assert not any("%" in line for line in lines)


def test_score_card_with_reasoning():
    card = render_score_card(get_criterion(4), 3, "Timeline omitted.")
    assert card.startswith("#04 Missing Information")
    assert "AI NOTE: Timeline omitted." in card
    assert card.endswith("Score: 3")


def test_score_card_without_reasoning():
    assert "AI NOTE" not in render_score_card(get_criterion(1), 1)


def test_session_lists_every_card_and_notices(tmp_path):
    session = _session(tmp_path)
    session.attached_file = AttachedFile(name="doc.pdf", mime_type="application/pdf", data="")
    session.load()
    text = render_session(session)
    assert "[ERROR] No saved analysis found." in text
    assert "Attached: doc.pdf" in text
    for cid in CRITERION_IDS:
        assert f"#{cid:02d} " in text
