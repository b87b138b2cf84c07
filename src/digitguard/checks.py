"""Run named check-digit algorithms over a digit string with explainable results."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass

from .utils import get_logger
from .validators import (
    InvalidDigitStringError,
    iso7064_check,
    luhn_check,
    parse_digits,
    verhoeff_check,
)

log = get_logger(__name__)

ALGORITHMS: dict[str, Callable[[str], bool]] = {
    "iso7064": iso7064_check,
    "luhn": luhn_check,
    "verhoeff": verhoeff_check,
}

DEFAULT_ALGORITHMS: tuple[str, ...] = ("luhn", "verhoeff", "iso7064")

ALGORITHM_LABELS: dict[str, str] = {
    "iso7064": "ISO 7064 (MOD 11,10)",
    "luhn": "Luhn (MOD 10)",
    "verhoeff": "Verhoeff",
}


@dataclass(slots=True)
class CheckResult:
    """Outcome of one algorithm over one digit string."""

    algorithm: str
    value: str
    valid: bool
    why: str

    def to_dict(self) -> dict[str, object]:
        """Return a stable, serializable representation of this result."""
        return asdict(self)


def _explain(algorithm: str, valid: bool) -> str:
    label = ALGORITHM_LABELS.get(algorithm, algorithm)
    if valid:
        return f"Verified: check digit matches the {label} checksum."
    return f"Rejected: check digit does not match the {label} checksum."


def resolve_algorithms(algorithms: Iterable[str] | None = None) -> list[str]:
    """Return the algorithm names to run, raising ValueError on unknown names."""
    names = list(DEFAULT_ALGORITHMS if algorithms is None else algorithms)
    unknown = [name for name in names if name not in ALGORITHMS]
    if unknown:
        raise ValueError(f"Unknown algorithm(s): {', '.join(unknown)}")
    return names


def run_checks(value: str, *, algorithms: Iterable[str] | None = None) -> list[CheckResult]:
    """Run each requested checker on value and return one CheckResult per algorithm."""
    names = resolve_algorithms(algorithms)
    # Malformed input raises before any checker runs.
    parse_digits(value)

    results: list[CheckResult] = []
    for name in names:
        valid = ALGORITHMS[name](value)
        results.append(
            CheckResult(
                algorithm=name,
                value=value,
                valid=valid,
                why=_explain(name, valid),
            )
        )

    log.debug(
        "Ran %d check(s) on a %d-digit string: %d passed",
        len(results),
        len(value),
        sum(r.valid for r in results),
    )
    return results


def run_batch(
    lines: Iterable[str],
    *,
    algorithms: Iterable[str] | None = None,
) -> tuple[list[CheckResult], list[tuple[int, str]]]:
    """Run checks over many digit strings, one per line.

    Lines are stripped and blank ones skipped. Malformed lines are collected as
    (line_number, message) pairs so the caller can report them.
    """
    names = resolve_algorithms(algorithms)
    results: list[CheckResult] = []
    errors: list[tuple[int, str]] = []

    for line_no, raw in enumerate(lines, start=1):
        value = raw.strip()
        if not value:
            continue
        try:
            results.extend(run_checks(value, algorithms=names))
        except InvalidDigitStringError as exc:
            errors.append((line_no, str(exc)))

    if errors:
        log.info("Skipped %d malformed line(s)", len(errors))
    return results, errors
