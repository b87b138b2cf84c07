"""Tests for the Streamlit page and the helpers behind it."""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from digitguard import app_streamlit
from digitguard.app_streamlit import outcome_chart, parse_weights_input, results_frame
from digitguard.checks import run_batch, run_checks

APP_SCRIPT = Path(__file__).resolve().parents[1] / "streamlit_app.py"


def test_results_frame_one_row_per_line() -> None:
    results = run_checks("2363", algorithms=["verhoeff", "luhn"])
    results += run_checks("4111111111111111", algorithms=["verhoeff", "luhn"])

    df = results_frame(results)

    assert list(df["Digit string"]) == ["2363", "4111111111111111"]
    assert list(df["Verhoeff"]) == [True, False]
    assert list(df["Luhn (MOD 10)"]) == [False, True]


def test_outcome_chart_data() -> None:
    results = run_checks("2363", algorithms=["verhoeff", "luhn"])
    chart = outcome_chart(results)
    assert set(chart.data["Outcome"]) == {"Passed", "Failed"}


def test_parse_weights_input() -> None:
    assert parse_weights_input("1, 2,3,") == [1, 2, 3]
    with pytest.raises(ValueError):
        parse_weights_input("1, x")


def test_results_frame_masks_values() -> None:
    df = results_frame(run_checks("4111111111111111", algorithms=["luhn"]), mask=True)
    assert list(df["Digit string"]) == ["••••••••••••1111"]


def test_results_frame_keeps_duplicate_lines() -> None:
    results, errors = run_batch(["2363", "2363"], algorithms=["verhoeff"])

    df = results_frame(results)

    assert errors == []
    assert len(df) == len(results) == 2
    assert list(df["Verhoeff"]) == [True, True]


def test_results_frame_duplicate_lines_with_several_algorithms() -> None:
    results, _ = run_batch(["2363", "2364", "2363"], algorithms=["verhoeff", "luhn"])

    df = results_frame(results)

    assert list(df["Digit string"]) == ["2363", "2364", "2363"]
    assert list(df["Verhoeff"]) == [True, False, True]


def test_failed_run_is_not_recorded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_batch(lines, *, algorithms=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(app_streamlit, "run_batch", failing_batch)
    monkeypatch.setattr(app_streamlit, "REPORTS_DIR", tmp_path)

    at = AppTest.from_file(str(APP_SCRIPT), default_timeout=30).run()
    at.text_area[0].input("2363")
    at.button(key="btn_run").click().run()

    assert [e.value for e in at.error] == ["Check run failed: boom"]
    assert len(at.tabs) == 0
    assert list(tmp_path.iterdir()) == []
