"""Tests for value predicates and coercions."""

from datetime import date, datetime, timedelta, timezone

import pytest

from form_schema.rules.values import (
    as_text,
    is_accepted,
    is_declined,
    is_empty,
    is_numeric,
    loose_equals,
    measure,
    normalize_list,
    strict_in,
    to_datetime,
    to_number,
    to_timestamp,
)

NOW = datetime(2024, 5, 10, 15, 30, tzinfo=timezone.utc)


class TestEmptiness:
    """Tests for is_empty."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\n", [], ()])
    def test_empty(self, value):
        """Test values that count as empty."""
        assert is_empty(value)

    @pytest.mark.parametrize("value", [0, 0.0, False, "0", " a ", ["a"], {}, {"a": 1}])
    def test_not_empty(self, value):
        """Test falsy values that still count as present."""
        assert not is_empty(value)


class TestNumbers:
    """Tests for numeric helpers."""

    @pytest.mark.parametrize("value", [0, 2.5, -3, "12", " 7 ", "-1.5", ".5", "1e3", "+4"])
    def test_numeric(self, value):
        """Test numbers and numeric strings."""
        assert is_numeric(value)

    @pytest.mark.parametrize(
        "value",
        [True, False, None, "", "abc", "1,5", "0x1A", ["1"], "1e400", "-1e400", "inf", "nan", 10**400, float("inf")],
    )
    def test_not_numeric(self, value):
        """Test that booleans, non-numeric strings and values overflowing a float are not numeric."""
        assert not is_numeric(value)

    def test_to_number(self):
        """Test conversion to float."""
        assert to_number("12") == 12.0
        assert to_number(" 2.5 ") == 2.5
        assert to_number(3) == 3.0
        assert to_number("abc") is None
        assert to_number("") is None
        assert to_number(True) is None
        assert to_number("1e400") is None
        assert to_number(10**400) is None

    def test_measure(self):
        """Test size measurement of numbers, lists and text."""
        assert measure(5) == 5.0
        assert measure("12") == 12.0
        assert measure("abc") == 3.0
        assert measure(["a", "b"]) == 2.0
        assert measure({"a": 1}) == 1.0
        assert measure(True) == 1.0
        assert measure("1e400") == 5.0
        assert measure(10**400) == 401.0

    def test_as_text(self):
        """Test rendering scalars as submitted text."""
        assert as_text(None) == ""
        assert as_text(True) == "1"
        assert as_text(False) == ""
        assert as_text(5.0) == "5"
        assert as_text(2.5) == "2.5"
        assert as_text("x") == "x"


class TestLists:
    """Tests for list helpers."""

    def test_normalize_list(self):
        """Test trimming, blank removal and de-duplication."""
        assert normalize_list(" a, b ,a,,") == ["a", "b"]
        assert normalize_list(["X.com", " x.com", 5, ""], lower=True) == ["x.com"]
        assert normalize_list(None) == []
        assert normalize_list(42) == []

    def test_strict_in(self):
        """Test type-aware membership."""
        assert strict_in("a", ["a", "b"])
        assert not strict_in(1, ["1"])
        assert not strict_in(True, [1])
        assert not strict_in(1, [True])
        assert strict_in(1, [1])

    def test_accepted_and_declined(self):
        """Test the accepted and declined value sets."""
        assert is_accepted("yes")
        assert is_accepted(1)
        assert not is_accepted("Yes")
        assert not is_accepted(1.0)
        assert is_declined("off")
        assert is_declined(False)
        assert not is_declined(None)


class TestLooseEquals:
    """Tests for loose equality."""

    @pytest.mark.parametrize(
        "left,right",
        [
            (1, "1"),
            ("1.0", "1"),
            (2, 2.0),
            (None, ""),
            (None, 0),
            (None, False),
            (None, None),
            (True, "1"),
            (True, "2"),
            (False, "0"),
            (False, ""),
            (False, 0),
            (True, 5),
            ("abc", "abc"),
            (["1", 2], [1, "2"]),
            ({"a": "1"}, {"a": 1}),
        ],
    )
    def test_equal(self, left, right):
        """Test pairs that compare equal."""
        assert loose_equals(left, right)
        assert loose_equals(right, left)

    @pytest.mark.parametrize(
        "left,right",
        [
            (True, "yes"),
            (False, "no"),
            (None, "0"),
            (None, "a"),
            (1, "abc"),
            ("abc", "abd"),
            (True, False),
            ("a", ["a"]),
            ([1], [1, 2]),
        ],
    )
    def test_not_equal(self, left, right):
        """Test pairs that compare unequal."""
        assert not loose_equals(left, right)
        assert not loose_equals(right, left)

    def test_huge_numbers(self):
        """Test integers too large for a float."""
        assert not loose_equals(10**400, 1)
        assert not loose_equals(10**400, "1")
        assert loose_equals(10**400, 10**400)
        assert loose_equals(10**400, "1" + "0" * 400)


class TestDates:
    """Tests for calendar parsing."""

    def test_iso_date_and_datetime(self):
        """Test ISO 8601 dates and datetimes."""
        assert to_datetime("2024-01-02") == datetime(2024, 1, 2, tzinfo=timezone.utc)
        assert to_datetime("2024-01-02T03:04:05") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        offset = to_datetime("2024-01-02T03:04:05+02:00")
        assert offset == datetime(2024, 1, 2, 1, 4, 5, tzinfo=timezone.utc)

    def test_date_objects(self):
        """Test date and datetime objects."""
        assert to_datetime(date(2024, 1, 2)) == datetime(2024, 1, 2, tzinfo=timezone.utc)
        assert to_datetime(NOW) == NOW

    def test_unix_timestamp(self):
        """Test numeric timestamps."""
        assert to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert to_timestamp(86400) == 86400.0

    def test_keywords(self):
        """Test now/today/tomorrow/yesterday."""
        midnight = datetime(2024, 5, 10, tzinfo=timezone.utc)
        assert to_datetime("now", NOW) == NOW
        assert to_datetime("Today", NOW) == midnight
        assert to_datetime("tomorrow", NOW) == midnight + timedelta(days=1)
        assert to_datetime("yesterday", NOW) == midnight - timedelta(days=1)

    def test_relative_offsets(self):
        """Test relative offsets from now."""
        assert to_datetime("+3 days", NOW) == NOW + timedelta(days=3)
        assert to_datetime("-1 week", NOW) == NOW - timedelta(weeks=1)
        assert to_datetime("2 hours", NOW) == NOW + timedelta(hours=2)

    @pytest.mark.parametrize("value", [None, "", "soon", "5", "1e400", True, ["2024-01-01"]])
    def test_unparsable(self, value):
        """Test values that are not dates."""
        assert to_datetime(value, NOW) is None
        assert to_timestamp(value, NOW) is None

    def test_free_form_dates(self):
        """Test non-ISO date text."""
        assert to_datetime("01/15/2024", NOW) == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert to_datetime("15 January 2024", NOW) == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert to_datetime("Jan 15, 2024 10:30", NOW) == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_numeric_strings_are_not_timestamps(self):
        """Test that numeric text is not read as a unix timestamp."""
        assert to_datetime("5", NOW) is None
        assert to_datetime("1700000000", NOW) is None
        assert to_datetime(5, NOW) == datetime(1970, 1, 1, 0, 0, 5, tzinfo=timezone.utc)

    def test_out_of_range(self):
        """Test values outside the representable calendar range."""
        assert to_datetime(10**400, NOW) is None
        assert to_datetime(1e300, NOW) is None
        assert to_datetime("+99999999999 weeks", NOW) is None
