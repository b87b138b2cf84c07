import pytest

from digitguard.checks import ALGORITHMS, DEFAULT_ALGORITHMS, run_batch, run_checks
from digitguard.validators import InvalidDigitStringError


def test_run_checks_default_order() -> None:
    results = run_checks("4111111111111111")
    assert [r.algorithm for r in results] == list(DEFAULT_ALGORITHMS)
    assert all(r.value == "4111111111111111" for r in results)


def test_run_checks_luhn_valid_card() -> None:
    (result,) = run_checks("4111111111111111", algorithms=["luhn"])
    assert result.valid is True
    assert result.why.startswith("Verified")


def test_run_checks_verhoeff_invalid() -> None:
    (result,) = run_checks("2364", algorithms=["verhoeff"])
    assert result.valid is False
    assert result.why.startswith("Rejected")


def test_run_checks_unknown_algorithm() -> None:
    with pytest.raises(ValueError, match="damm"):
        run_checks("2363", algorithms=["verhoeff", "damm"])


def test_run_checks_malformed_input_propagates() -> None:
    with pytest.raises(InvalidDigitStringError):
        run_checks("")


def test_registry_covers_defaults() -> None:
    assert set(DEFAULT_ALGORITHMS) == set(ALGORITHMS)


def test_result_to_dict_keys() -> None:
    (result,) = run_checks("86095742719", algorithms=["iso7064"])
    assert result.to_dict() == {
        "algorithm": "iso7064",
        "value": "86095742719",
        "valid": True,
        "why": result.why,
    }


def test_run_batch_collects_malformed_lines() -> None:
    lines = ["2363", "", "  123451  ", "12x3", "2364"]
    results, errors = run_batch(lines, algorithms=["verhoeff"])

    assert [(r.value, r.valid) for r in results] == [
        ("2363", True),
        ("123451", True),
        ("2364", False),
    ]
    assert [line_no for line_no, _ in errors] == [4]


def test_run_batch_empty_input() -> None:
    assert run_batch([]) == ([], [])
