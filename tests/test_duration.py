import pytest

from apigen.duration import format_duration, parse_duration

NS, US, MS, S, M, H = 1, 1000, 1000**2, 1000**3, 60 * 1000**3, 3600 * 1000**3


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0s"),
        (10, "10ns"),
        (NS, "1ns"),
        (US, "1µs"),
        (MS, "1ms"),
        (S, "1s"),
        (M, "1m0s"),
        (H, "1h0m0s"),
        (NS + US + MS + S + M + H, "1h1m1.001001001s"),
        (1100 * NS, "1.1µs"),
        (2200 * US, "2.2ms"),
        (3300 * MS, "3.3s"),
        (4 * M + 5 * S, "4m5s"),
        (4 * M + 5001 * MS, "4m5.001s"),
        (5 * H + 6 * M + 7001 * MS, "5h6m7.001s"),
        (8 * M + NS, "8m0.000000001s"),
        ((1 << 63) - 1, "2562047h47m16.854775807s"),
        (-(1 << 63), "-2562047h47m16.854775808s"),
    ],
)
def test_format_duration(value, expected):
    assert format_duration(value) == expected


@pytest.mark.parametrize("value", [0, 10, 1100, 3300 * MS, 5 * H + 6 * M + 7001 * MS, -(4 * M)])
def test_round_trip(value):
    assert parse_duration(format_duration(value)) == value


@pytest.mark.parametrize("text", ["", "abc", "5", "1x", "-", "."])
def test_parse_errors(text):
    with pytest.raises(ValueError):
        parse_duration(text)