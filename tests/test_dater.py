"""Tests for the immutable and mutable point-in-time values."""

from datetime import datetime

import pytest
import pytz
from dateutil.relativedelta import relativedelta

from dater.models.base import DaterInterface
from dater.models.dater import Dater, DaterMutable
from dater.utils.exceptions import DateParseError, TimezoneError

VARIANTS = [Dater, DaterMutable]


@pytest.mark.parametrize("cls", VARIANTS)
class TestArithmetic:
    def test_is_dater_interface(self, cls):
        assert isinstance(cls(timezone="UTC"), DaterInterface)

    def test_add_minutes(self, cls):
        d = cls("2021-05-23 13:20:34", "UTC")
        assert d.add_minutes(10).format("Y-m-d H:i:s") == "2021-05-23 13:30:34"

    def test_sub_minutes(self, cls):
        d = cls("2021-05-23 13:20:34", "UTC")
        assert d.sub_minutes(10).format("Y-m-d H:i:s") == "2021-05-23 13:10:34"

    def test_add_days(self, cls):
        d = cls("2021-05-23 13:20:34", "UTC")
        assert d.add_days(5).format("Y-m-d H:i:s") == "2021-05-28 13:20:34"

    def test_sub_days(self, cls):
        d = cls("2021-05-23 13:20:34", "UTC")
        assert d.sub_days(5).format("Y-m-d H:i:s") == "2021-05-18 13:20:34"

    def test_minutes_round_trip(self, cls):
        d = cls("2021-05-23 13:20:34", "Europe/Berlin")
        original = d.to_datetime()
        assert d.add_minutes(10).sub_minutes(10).to_datetime() == original

    def test_add_days_keeps_local_time_across_dst(self, cls):
        d = cls("2021-03-27 12:00", "Europe/Berlin")
        assert d.add_days(1).format("Y-m-d H:i T") == "2021-03-28 12:00 CEST"

    def test_add_minutes_moves_instant_across_dst(self, cls):
        d = cls("2021-03-27 12:00", "Europe/Berlin")
        assert d.add_minutes(24 * 60).format("Y-m-d H:i T") == "2021-03-28 13:00 CEST"

    def test_set_date_normalizes(self, cls):
        d = cls("2021-01-31 10:00", "UTC")
        assert d.set_date(2021, 2, 31).format("Y-m-d H:i") == "2021-03-03 10:00"

    def test_modify(self, cls):
        d = cls("2021-05-23 13:20:34", "UTC")
        assert d.modify("+1 week -2 hours").format("Y-m-d H:i:s") == "2021-05-30 11:20:34"

    def test_fields(self, cls):
        d = cls("2021-05-23 13:20:34", "Europe/Berlin")
        assert (d.year, d.month, d.day) == (2021, 5, 23)
        assert (d.hour, d.minute, d.second) == (13, 20, 34)
        assert d.weekday == 7
        assert d.timezone_name == "Europe/Berlin"

    def test_timestamp(self, cls):
        assert cls(1708708399, "UTC").timestamp == 1708708399

    def test_comparison_across_variants(self, cls):
        earlier = cls("2021-05-23 13:00", "UTC")
        same = DaterMutable("2021-05-23 15:00", "Europe/Berlin")
        later = Dater("2021-05-23 13:01", "UTC")
        assert earlier == same
        assert earlier <= same
        assert earlier < later
        assert later > earlier
        assert earlier == datetime(2021, 5, 23, 13, 0, tzinfo=pytz.utc)

    def test_diff(self, cls):
        d = cls("2021-01-01", "UTC")
        assert d.diff(Dater("2021-03-15 12:00", "UTC")) == relativedelta(
            months=2, days=14, hours=12
        )

    def test_invalid_timezone_raises(self, cls):
        with pytest.raises(TimezoneError):
            cls("2021-01-01", "Bar/Foo")

    def test_invalid_value_raises(self, cls):
        with pytest.raises(DateParseError):
            cls("a-06-24", "UTC")


class TestDater:
    def test_operations_return_new_value(self):
        d = Dater("2021-05-23 13:20:34", "UTC")
        changed = d.add_minutes(10)
        assert changed is not d
        assert d.format("H:i") == "13:20"
        assert changed.format("H:i") == "13:30"

    def test_every_operation_leaves_receiver_untouched(self):
        d = Dater("2021-05-23 13:20:34", "UTC")
        d.sub_minutes(5)
        d.add_days(1)
        d.sub_days(1)
        d.set_date(2000, 1, 1)
        d.modify("+1 year")
        assert d.format("Y-m-d H:i:s") == "2021-05-23 13:20:34"

    def test_is_hashable(self):
        assert len({Dater("2021-05-23", "UTC"), Dater("2021-05-23", "UTC")}) == 1

    def test_to_mutable_is_a_snapshot(self):
        d = Dater("2021-05-23 13:20:34", "UTC")
        mutable = d.to_mutable()
        assert isinstance(mutable, DaterMutable)
        mutable.add_days(1)
        assert d.day == 23
        assert mutable.day == 24


class TestDaterMutable:
    def test_operations_return_same_object(self):
        d = DaterMutable("2021-05-23 13:20:34", "UTC")
        assert d.add_minutes(10) is d
        assert d.format("H:i") == "13:30"

    def test_chaining_changes_receiver(self):
        d = DaterMutable("2021-05-23 13:20:34", "UTC")
        d.add_days(2).sub_minutes(20)
        assert d.format("Y-m-d H:i") == "2021-05-25 13:00"

    def test_is_not_hashable(self):
        with pytest.raises(TypeError):
            hash(DaterMutable("2021-05-23", "UTC"))

    def test_to_immutable_is_a_snapshot(self):
        d = DaterMutable("2021-05-23 13:20:34", "UTC")
        frozen = d.to_immutable()
        assert isinstance(frozen, Dater)
        d.add_days(1)
        assert frozen.day == 23

    def test_to_mutable_copies(self):
        d = DaterMutable("2021-05-23", "UTC")
        copy = d.to_mutable()
        assert copy is not d
        copy.add_days(1)
        assert d.day == 23
