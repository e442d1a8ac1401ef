import pytest

from splitshare.utils.money import format_cents, parse_euro_to_cents


def test_format_cents():
    assert format_cents(0) == "0,00 €"
    assert format_cents(5) == "0,05 €"
    assert format_cents(123456) == "1.234,56 €"
    assert format_cents(-123456) == "-1.234,56 €"
    assert format_cents(100000000, "EUR") == "1.000.000,00 EUR"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("12", 1200),
        ("12,3", 1230),
        ("12,30", 1230),
        (" 1.234,56 ", 123456),
        ("12.30", 1230),
        ("12.3", 1230),
        ("0,05", 5),
    ],
)
def test_parse_euro_to_cents(text, expected):
    assert parse_euro_to_cents(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1,234", "-5", "12,", "1,2,3"])
def test_parse_euro_to_cents_rejects(text):
    with pytest.raises(ValueError):
        parse_euro_to_cents(text)
