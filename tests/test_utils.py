import logging

from digitguard.utils import get_logger, mask_digits, safe_filename


def test_get_logger_adds_single_handler() -> None:
    first = get_logger("digitguard.test")
    second = get_logger("digitguard.test", level=logging.DEBUG)

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG


def test_mask_digits() -> None:
    assert mask_digits("4111111111111111") == "••••••••••••1111"
    assert mask_digits("236") == "236"
    assert mask_digits("2363", visible=0, mask_char="*") == "****"


def test_safe_filename() -> None:
    assert safe_filename("../run 1/*") == ".._run_1"
    assert safe_filename("///") == "report"


def test_safe_filename_suffix() -> None:
    assert safe_filename("cards", suffix=".json") == "cards.json"
    assert safe_filename("cards.json", suffix=".json") == "cards.json"
