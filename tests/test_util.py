from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from abscan.util import (
    EPSILON,
    ZERO_TIME,
    decimal_equal,
    format_decimal,
    format_time,
    parse_time,
    truncate_to_max_chars,
)


def test_decimal_equal_within_epsilon():
    assert decimal_equal(Decimal("1"), Decimal("1") + EPSILON / 2)


def test_decimal_equal_at_boundary():
    assert decimal_equal(Decimal("5"), Decimal("5") + EPSILON)


def test_decimal_not_equal_beyond_epsilon():
    assert not decimal_equal(Decimal("1"), Decimal("1") + EPSILON * 10)


def test_decimal_equal_is_symmetric():
    a, b = Decimal("2.5"), Decimal("2.6")
    assert decimal_equal(a, b) == decimal_equal(b, a)
    assert decimal_equal(a, b) is False


def test_truncate_shorter_text_unchanged():
    assert truncate_to_max_chars("abc", 10) == "abc"


def test_truncate_counts_characters():
    text = "ééééé"
    result = truncate_to_max_chars(text, 3)
    assert len(result) == 3
    assert text.startswith(result)


def test_truncate_negative_raises():
    with pytest.raises(ValueError):
        truncate_to_max_chars("abc", -1)


def test_format_decimal_strips_trailing_zeros():
    assert format_decimal(Decimal("1.500")) == "1.5"


def test_format_decimal_zero_with_exponent():
    assert format_decimal(Decimal("0E-18")) == "0"


def test_format_decimal_keeps_integer_zeros():
    assert format_decimal(Decimal("1E+2")) == "100"


def test_format_time_none_is_zero_time():
    assert format_time(None) == ZERO_TIME
    assert parse_time(ZERO_TIME) is None


def test_time_round_trip_utc():
    moment = datetime(2024, 3, 1, 12, 30, 5, 123456, tzinfo=timezone.utc)
    text = format_time(moment)
    assert text.endswith("Z")
    assert parse_time(text) == moment


def test_time_round_trip_offset():
    moment = datetime(2024, 3, 1, 12, 30, 5, tzinfo=timezone(timedelta(hours=8)))
    assert parse_time(format_time(moment)) == moment


def test_parse_time_nanosecond_fraction():
    parsed = parse_time("1970-01-01T00:16:40.000000001Z")
    assert parsed == datetime.fromtimestamp(1000, tz=timezone.utc)