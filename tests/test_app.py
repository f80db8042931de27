"""Tests for the Streamlit front end, driven headless with AppTest."""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import engine

APP = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def counted_runs(monkeypatch):
    """Count calls to the comparison helpers the app imports from engine."""
    calls = {"compare_algorithms": 0, "fault_curve": 0}

    def counting(name, func):
        def wrapper(*args, **kwargs):
            calls[name] += 1
            return func(*args, **kwargs)
        return wrapper

    for name in calls:
        monkeypatch.setattr(engine, name, counting(name, getattr(engine, name)))
    return calls


def _run_app():
    at = AppTest.from_file(APP, default_timeout=30)
    at.run()
    at.button(key="run").click().run()
    return at


class TestSimulatorPage:
    """Replay behaviour of the simulator view."""

    def test_run_stores_simulation_and_comparisons(self, counted_runs) -> None:
        at = _run_app()
        assert not at.exception
        assert at.session_state["simulator"].get_statistics().fault_count == 15
        assert at.session_state["comparison"]["lru"].fault_count == 12
        assert at.session_state["fault_curve"][2] == (3, 15)
        assert counted_runs == {"compare_algorithms": 1, "fault_curve": 1}

    def test_stepping_does_not_rerun_comparisons(self, counted_runs) -> None:
        at = _run_app()
        at.slider(key="step").set_value(3).run()
        at.slider(key="step").set_value(7).run()
        assert not at.exception
        assert at.session_state["step"] == 7
        assert counted_runs == {"compare_algorithms": 1, "fault_curve": 1}

    def test_reset_clears_cached_results(self) -> None:
        at = _run_app()
        at.button(key="reset").click().run()
        for name in ("simulator", "comparison", "fault_curve"):
            assert name not in at.session_state

    def test_invalid_reference_string_shows_sidebar_error(self) -> None:
        at = AppTest.from_file(APP, default_timeout=30)
        at.run()
        at.sidebar.text_area[0].input("1,x,3").run()
        at.button(key="run").click().run()
        assert "Invalid page reference 'x'" in at.sidebar.error[0].value
        assert "simulator" not in at.session_state
