"""Tests for timezone resolution and local projection."""

import pytest
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from dailyfocus.engine.clock import AmbiguousTimezone, local_date, local_hhmm, local_weekday, resolve_timezone, to_local


class TestResolveTimezone:
    def test_known_zone(self):
        assert resolve_timezone("Europe/Lisbon") == ZoneInfo("Europe/Lisbon")

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_missing_falls_back_to_default(self, name):
        assert resolve_timezone(name) == ZoneInfo("America/Sao_Paulo")
        assert resolve_timezone(name, default="UTC") == ZoneInfo("UTC")

    @pytest.mark.parametrize("name", ["Mars/Olympus_Mons", "GMT+25", "../etc/passwd"])
    def test_unknown_zone_raises(self, name):
        with pytest.raises(AmbiguousTimezone) as exc:
            resolve_timezone(name)
        assert exc.value.name == name
        assert isinstance(exc.value, ValueError)


class TestLocalProjection:
    def test_utc_to_sao_paulo(self, sao_paulo):
        local = to_local(datetime(2024, 3, 16, 2, 30, tzinfo=timezone.utc), sao_paulo)
        assert local_date(local, sao_paulo) == date(2024, 3, 15)
        assert local_hhmm(local) == "23:30"
        assert local_weekday(local) == 5  # Friday

    def test_naive_is_utc(self, sao_paulo):
        assert local_hhmm(to_local(datetime(2024, 3, 15, 12, 5), sao_paulo)) == "09:05"

    def test_dst_zone_offsets(self):
        new_york = ZoneInfo("America/New_York")
        # Before and after the 2024-03-10 spring-forward transition
        assert local_hhmm(to_local(datetime(2024, 3, 9, 14, 0, tzinfo=timezone.utc), new_york)) == "09:00"
        assert local_hhmm(to_local(datetime(2024, 3, 11, 13, 0, tzinfo=timezone.utc), new_york)) == "09:00"
