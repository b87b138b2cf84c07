"""Report generation utilities."""

from __future__ import annotations

import json
from pathlib import Path

from .checks import CheckResult


def to_json(results: list[CheckResult], outfile: Path, return_as_string: bool = False) -> str | None:
    payload = [r.to_dict() for r in results]
    json_str = json.dumps(payload, indent=2)

    if return_as_string:
        return json_str

    outfile.parent.mkdir(parents=True, exist_ok=True)
    outfile.write_text(json_str, encoding="utf-8")
    return None


def human_summary(results: list[CheckResult]) -> str:
    counts: dict[str, list[int]] = {}
    for result in results:
        passed_failed = counts.setdefault(result.algorithm, [0, 0])
        passed_failed[0 if result.valid else 1] += 1

    if not counts:
        return "Check Summary:\n- No checks run"

    lines = [
        f"- {algorithm}: {passed} passed, {failed} failed"
        for algorithm, (passed, failed) in sorted(counts.items())
    ]
    return "Check Summary:\n" + "\n".join(lines)
