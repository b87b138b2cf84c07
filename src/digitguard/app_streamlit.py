"""Digitguard Streamlit App (local check-digit validation UI)."""

from __future__ import annotations

import time
from collections import Counter
from pathlib import Path

import altair as alt
import pandas as pd
import streamlit as stream

from digitguard.checks import ALGORITHM_LABELS, DEFAULT_ALGORITHMS, CheckResult, run_batch
from digitguard.reporting import human_summary, to_json
from digitguard.utils import get_logger, mask_digits, safe_filename
from digitguard.validators import reverse_multiply_and_sum

MAX_INPUT_LINES = 1000
REPORTS_DIR = Path("data/reports")

# --- Caching Functions ---


@stream.cache_resource
def get_cached_logger(name: str):
    """Initializes and caches the logger."""
    return get_logger(name)


def results_frame(results: list[CheckResult], *, mask: bool = False) -> pd.DataFrame:
    """Return one row per checked line and one boolean column per algorithm.

    run_checks emits each algorithm once per line, so a new row starts when the
    value changes or an algorithm repeats. Duplicate lines keep their own rows.
    """
    rows: list[dict[str, object]] = []
    current: dict[str, object] | None = None
    current_value: str | None = None
    for r in results:
        column = ALGORITHM_LABELS.get(r.algorithm, r.algorithm)
        if current is None or r.value != current_value or column in current:
            current = {"Digit string": mask_digits(r.value) if mask else r.value}
            current_value = r.value
            rows.append(current)
        current[column] = r.valid
    return pd.DataFrame(rows)


def outcome_chart(results: list[CheckResult]) -> alt.Chart:
    """Stacked bar chart of passed/failed counts per algorithm."""
    counts = Counter((r.algorithm, r.valid) for r in results)
    data = [
        {
            "Algorithm": ALGORITHM_LABELS.get(algorithm, algorithm),
            "Outcome": "Passed" if valid else "Failed",
            "Count": count,
        }
        for (algorithm, valid), count in counts.items()
    ]
    df = pd.DataFrame(data)

    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("Algorithm", title=None),
            y=alt.Y("Count", stack=True),
            color=alt.Color(
                "Outcome",
                scale=alt.Scale(domain=["Passed", "Failed"], range=["#21c354", "#ff4b4b"]),
                legend=alt.Legend(title="Outcome", orient="right"),
            ),
            tooltip=["Algorithm", "Outcome", "Count"],
        )
    )


def parse_weights_input(text: str) -> list[int]:
    """Parse comma-separated integers for the weighted-sum panel."""
    return [int(part) for part in text.split(",") if part.strip()]


# --- Main Application Logic Wrapped in a Function ---


def main():
    # 1. Page Config
    stream.set_page_config(
        page_title="Digitguard - Check Digit Validator",
        page_icon="🔢",
        layout="wide",
    )

    # 2. Logger
    log = get_cached_logger("digitguard")

    stream.title("Digitguard 🔢 Check Digit Validator")
    stream.caption("Luhn · Verhoeff · ISO 7064 (MOD 11,10)")

    # 3. Sidebar Recent Runs
    with stream.sidebar:
        stream.header("Your Session")
        recent_runs = stream.session_state.get("recent_runs", [])

        if not recent_runs:
            stream.caption("No checks run yet.")
        else:
            stream.caption(f"Total Runs: {len(recent_runs)}")
            for run_entry in recent_runs[-5:][::-1]:
                with stream.container(border=True):
                    stream.markdown(f"**{run_entry['name']}**")
                    stream.markdown(
                        f"⏱️ {run_entry['elapsed']:.3f}s | "
                        f"✅ {run_entry['passed']} / {run_entry['total']} passed"
                    )

    # 4. Check Options
    options = stream.session_state.setdefault(
        "options",
        {"algorithms": list(DEFAULT_ALGORITHMS), "mask": True},
    )

    with stream.expander("Check options ⚙️"):
        stream.caption("Pick the algorithms to run on every digit string.")
        options["algorithms"] = stream.multiselect(
            "Algorithms",
            options=list(DEFAULT_ALGORITHMS),
            default=options["algorithms"],
            format_func=lambda name: ALGORITHM_LABELS.get(name, name),
            key="opt_algorithms",
        )
        options["mask"] = stream.toggle(
            "Mask digit strings in results",
            value=options["mask"],
            key="opt_mask",
        )
    selected = options["algorithms"]

    # 5. Input
    with stream.container(border=True):
        stream.markdown("### Digit strings")
        stream.caption("One digit string per line, check digit last. Nothing leaves your device.")
        raw_input = stream.text_area(
            "Digit strings",
            height=180,
            placeholder="4111111111111111\n2363\n86095742719",
            label_visibility="collapsed",
        )
        run_name = stream.text_input("Report name", value="check")
        run_clicked = stream.button("Run Checks", type="primary", key="btn_run")

    # 6. Check Logic
    if run_clicked:
        lines = raw_input.splitlines()
        if len(lines) > MAX_INPUT_LINES:
            stream.error(f"Too many lines (>{MAX_INPUT_LINES}).")
            stream.stop()
        if not selected:
            stream.warning("Select at least one algorithm.")
            stream.stop()

        report_name = safe_filename(run_name, suffix=".json")

        start_time = time.perf_counter()
        try:
            check_results, line_errors = run_batch(lines, algorithms=selected)
        except Exception as e:
            log.exception("Check run failed")
            stream.error(f"Check run failed: {e}")
            stream.stop()
        elapsed_seconds = time.perf_counter() - start_time

        report_path = REPORTS_DIR / report_name
        to_json(check_results, report_path)

        recent = stream.session_state.setdefault("recent_runs", [])
        recent.append(
            {
                "name": report_name,
                "elapsed": elapsed_seconds,
                "passed": sum(r.valid for r in check_results),
                "total": len(check_results),
            }
        )
        if len(recent) > 10:
            del recent[:-10]

        for line_no, message in line_errors:
            stream.error(f"Line {line_no}: {message}")

        # 7. Results Display
        tab_res, tab_table, tab_rep = stream.tabs(["Overview 📊", "Results 🔍", "JSON Report 📥"])

        with tab_res:
            col_m1, col_m2, col_m3 = stream.columns(3)
            col_m1.metric("Checks Run", len(check_results))
            col_m2.metric("Malformed Lines", len(line_errors))
            col_m3.metric("Run Time", f"{elapsed_seconds:.3f}s")

            if check_results:
                stream.altair_chart(outcome_chart(check_results), use_container_width=True)
                stream.text(human_summary(check_results))
            else:
                stream.info("No valid digit strings to check.")

        with tab_table:
            if check_results:
                stream.dataframe(
                    results_frame(check_results, mask=options["mask"]),
                    use_container_width=True,
                )
            else:
                stream.info("No results to list.")

        with tab_rep:
            if check_results:
                stream.download_button(
                    "⬇️ Download Full JSON Report",
                    data=report_path.read_bytes(),
                    file_name=report_name,
                    mime="application/json",
                    use_container_width=True,
                )
                preview = [r.to_dict() for r in check_results]
                if options["mask"]:
                    for item in preview:
                        item["value"] = mask_digits(str(item["value"]))
                stream.json(preview)
            else:
                stream.info("No report generated.")

    # 8. Weighted Sum Helper
    with stream.expander("Weighted sum helper 🧮"):
        stream.caption("Computes Σ digits[i] × (base − i) for positional check-digit schemes.")
        col_w1, col_w2 = stream.columns([3, 1])
        with col_w1:
            weights_text = stream.text_input("Digits (comma-separated)", value="1, 2, 3")
        with col_w2:
            base = stream.number_input("Base", value=5, step=1)

        try:
            digits = parse_weights_input(weights_text)
        except ValueError:
            stream.error("Digits must be comma-separated integers.")
        else:
            total = reverse_multiply_and_sum(digits, int(base))
            stream.metric("Weighted Sum", total)
            stream.caption(f"mod 11 = {total % 11} · mod 10 = {total % 10}")


if __name__ == "__main__":
    main()
