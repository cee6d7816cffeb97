import pytest

from kpi_dashboard.ui.components.formatting import format_percent


@pytest.mark.parametrize(
    "value, expected",
    [
        (80, "80%"),
        (80.0, "80%"),
        (80.5, "80.5%"),
        (0, "0%"),
        (91.6666667, "91.6666667%"),
        (1234567.5, "1234567.5%"),
        (None, "–"),
        ("abc", "–"),
        (float("nan"), "nan%"),
    ],
)
def test_format_percent(value, expected):
    assert format_percent(value) == expected


def test_format_percent_fixed_decimals():
    assert format_percent(80, decimals=1) == "80.0%"
