"""Tests for 'd.m.Y H:i' style pattern rendering."""

from datetime import datetime

import pytest
import pytz

from dater.utils.patterns import format_datetime


@pytest.fixture
def friday(berlin):
    return berlin.localize(datetime(2021, 4, 16, 9, 5, 7, 123456))


class TestFormatDatetime:
    @pytest.mark.parametrize(
        "pattern, expected",
        [
            ("d.m.Y H:i", "16.04.2021 09:05"),
            ("Y-m-d H:i:s", "2021-04-16 09:05:07"),
            ("j.n.y", "16.4.21"),
            ("D, d M Y", "Fri, 16 Apr 2021"),
            ("l jS F", "Friday 16th April"),
            ("N w z t L", "5 5 105 30 0"),
            ("g:i a / h A / G", "9:05 am / 09 AM / 9"),
            ("u v", "123456 123"),
            ("e T O P", "Europe/Berlin CEST +0200 +02:00"),
            ("W o", "15 2021"),
        ],
    )
    def test_fields(self, friday, pattern, expected):
        assert format_datetime(friday, pattern) == expected

    def test_backslash_escapes(self, friday):
        assert format_datetime(friday, "\\Y\\e\\a\\r: Y") == "Year: 2021"

    def test_unknown_characters_are_literal(self, friday):
        assert format_datetime(friday, "Y/m/d @ H") == "2021/04/16 @ 09"

    def test_ordinal_suffixes(self):
        suffixes = [
            format_datetime(datetime(2021, 1, day, tzinfo=pytz.utc), "jS")
            for day in (1, 2, 3, 4, 11, 12, 13, 21, 22, 23)
        ]
        assert suffixes == ["1st", "2nd", "3rd", "4th", "11th", "12th", "13th",
                            "21st", "22nd", "23rd"]

    def test_utc_offsets(self):
        dt = datetime(2021, 1, 1, 12, 0, tzinfo=pytz.utc)
        assert format_datetime(dt, "p Z I") == "Z 0 0"

    def test_iso_and_rfc(self, friday):
        assert format_datetime(friday, "c") == "2021-04-16T09:05:07+02:00"
        assert format_datetime(friday, "r") == "Fri, 16 Apr 2021 09:05:07 +0200"

    def test_unix_timestamp(self):
        dt = datetime(2024, 2, 23, 17, 13, 19, tzinfo=pytz.utc)
        assert format_datetime(dt, "U") == "1708708399"
