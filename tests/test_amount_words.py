# tests/test_amount_words.py
import pytest

from pharmacy_pos.documents.words import amount_in_words, number_to_words


@pytest.mark.parametrize(
    "n, words",
    [
        (0, "Zero"),
        (7, "Seven"),
        (13, "Thirteen"),
        (40, "Forty"),
        (58, "Fifty Eight"),
        (100, "One Hundred"),
        (305, "Three Hundred Five"),
        (1000, "One Thousand"),
        (1250, "One Thousand Two Hundred Fifty"),
        (20019, "Twenty Thousand Nineteen"),
        (1_000_001, "One Million One"),
        (3_400_000_000, "Three Billion Four Hundred Million"),
    ],
)
def test_number_to_words(n, words):
    assert number_to_words(n) == words


def test_amount_in_words_appends_only():
    assert amount_in_words(1250) == "One Thousand Two Hundred Fifty Only"


def test_paise_are_dropped_not_rounded():
    assert amount_in_words(1250.99) == "One Thousand Two Hundred Fifty Only"
    assert amount_in_words(0.4) == "Zero Only"
