"""Tests for notification trigger evaluation and quiet hours."""

import pytest
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from dailyfocus.engine.notifications import (
    in_quiet_window,
    is_quiet,
    matches_trigger,
    select_due_rules,
    should_fire,
)
from dailyfocus.models.item import ItemKind
from dailyfocus.models.notification import QuietConfig


WEDNESDAY = date(2024, 3, 13)
THURSDAY = date(2024, 3, 14)


def _at(day: date, hour: int, minute: int, tz) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)


class TestQuietWindow:
    def test_wraps_past_midnight(self):
        assert in_quiet_window("23:30", "22:00", "08:00") is True
        assert in_quiet_window("02:00", "22:00", "08:00") is True
        assert in_quiet_window("09:00", "22:00", "08:00") is False

    def test_start_inclusive_end_exclusive(self):
        assert in_quiet_window("22:00", "22:00", "08:00") is True
        assert in_quiet_window("08:00", "22:00", "08:00") is False
        assert in_quiet_window("12:00", "12:00", "13:00") is True
        assert in_quiet_window("13:00", "12:00", "13:00") is False

    def test_same_day_window(self):
        assert in_quiet_window("12:30", "12:00", "13:00") is True
        assert in_quiet_window("11:59", "12:00", "13:00") is False

    def test_empty_window_contains_nothing(self):
        assert in_quiet_window("10:00", "10:00", "10:00") is False
        assert in_quiet_window("00:00", "10:00", "10:00") is False

    def test_quiet_days(self, sao_paulo):
        quiet = QuietConfig(quiet_days=["saturday", 0])
        assert is_quiet(quiet, _at(date(2024, 3, 16), 12, 0, sao_paulo)) is True
        assert is_quiet(quiet, _at(date(2024, 3, 17), 12, 0, sao_paulo)) is True
        assert is_quiet(quiet, _at(date(2024, 3, 15), 12, 0, sao_paulo)) is False

    def test_window_ignored_when_disabled(self, sao_paulo):
        quiet = QuietConfig(quiet_hours_enabled=False, quiet_start="22:00", quiet_end="08:00")
        assert is_quiet(quiet, _at(WEDNESDAY, 23, 30, sao_paulo)) is False

    def test_defaults_when_bounds_missing(self):
        quiet = QuietConfig(quiet_hours_enabled=True, quiet_start=None, quiet_end=None)
        assert (quiet.quiet_start, quiet.quiet_end) == ("22:00", "08:00")


class TestTriggerMatching:
    def test_time_rule_matches_minute(self, make_rule, sao_paulo):
        rule = make_rule(type="time", time="09:00")
        assert matches_trigger(rule, _at(WEDNESDAY, 9, 0, sao_paulo)) is True
        assert matches_trigger(rule, _at(WEDNESDAY, 9, 1, sao_paulo)) is False

    def test_time_rule_with_seconds_in_storage(self, make_rule, sao_paulo):
        rule = make_rule(type="time", time="09:00:00")
        assert matches_trigger(rule, _at(WEDNESDAY, 9, 0, sao_paulo)) is True

    def test_day_rule_matches_weekday_any_time(self, make_rule, sao_paulo):
        rule = make_rule(type="day", time=None, days_of_week=[1, 3, 5])
        assert matches_trigger(rule, _at(WEDNESDAY, 0, 0, sao_paulo)) is True
        assert matches_trigger(rule, _at(WEDNESDAY, 17, 45, sao_paulo)) is True
        assert matches_trigger(rule, _at(THURSDAY, 9, 0, sao_paulo)) is False

    def test_date_rule_matches_calendar_date(self, make_rule, sao_paulo):
        rule = make_rule(type="date", time=None, specific_date=WEDNESDAY)
        assert matches_trigger(rule, _at(WEDNESDAY, 15, 0, sao_paulo)) is True
        assert matches_trigger(rule, _at(THURSDAY, 15, 0, sao_paulo)) is False


class TestShouldFire:
    def test_day_rule_wednesday_fires_thursday_not(self, make_rule, no_quiet, sao_paulo):
        rule = make_rule(type="day", time=None, days_of_week=[1, 3, 5], is_active=True)
        assert should_fire(rule, no_quiet, _at(WEDNESDAY, 10, 0, sao_paulo), sao_paulo) is True
        assert should_fire(rule, no_quiet, _at(THURSDAY, 10, 0, sao_paulo), sao_paulo) is False

    def test_inactive_rule_never_fires(self, make_rule, no_quiet, sao_paulo):
        rule = make_rule(time="09:00", is_active=False)
        assert should_fire(rule, no_quiet, _at(WEDNESDAY, 9, 0, sao_paulo), sao_paulo) is False

    def test_quiet_hours_suppress(self, make_rule, sao_paulo):
        quiet = QuietConfig(quiet_hours_enabled=True, quiet_start="22:00", quiet_end="08:00")
        late = make_rule(time="23:30")
        morning = make_rule(time="09:00")
        assert should_fire(late, quiet, _at(WEDNESDAY, 23, 30, sao_paulo), sao_paulo) is False
        assert should_fire(morning, quiet, _at(WEDNESDAY, 9, 0, sao_paulo), sao_paulo) is True

    def test_quiet_day_suppresses_day_rule(self, make_rule, sao_paulo):
        quiet = QuietConfig(quiet_days=[3])
        rule = make_rule(type="day", time=None, days_of_week=[3])
        assert should_fire(rule, quiet, _at(WEDNESDAY, 10, 0, sao_paulo), sao_paulo) is False

    def test_evaluated_in_user_timezone(self, make_rule, no_quiet, sao_paulo):
        rule = make_rule(time="09:00")
        # 12:00 UTC is 09:00 in Sao Paulo
        now_utc = datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)
        assert should_fire(rule, no_quiet, now_utc, sao_paulo) is True
        assert should_fire(rule, no_quiet, now_utc, ZoneInfo("UTC")) is False

    def test_naive_instant_taken_as_utc(self, make_rule, no_quiet, sao_paulo):
        rule = make_rule(time="09:00")
        assert should_fire(rule, no_quiet, datetime(2024, 3, 13, 12, 0), sao_paulo) is True

    def test_date_rule_uses_local_date(self, make_rule, no_quiet, sao_paulo):
        rule = make_rule(type="date", time=None, specific_date=WEDNESDAY)
        # 01:00 UTC on the 14th is still the 13th in Sao Paulo
        now = datetime(2024, 3, 14, 1, 0, tzinfo=timezone.utc)
        assert should_fire(rule, no_quiet, now, sao_paulo) is True

    @pytest.mark.parametrize(
        "kind,switch",
        [(ItemKind.TASK, "tasks_enabled"), (ItemKind.PROJECT, "projects_enabled"), (ItemKind.GOAL, "goals_enabled")],
    )
    def test_kind_switch_suppresses_linked_rules(self, make_rule, sao_paulo, kind, switch):
        rule = make_rule(time="09:00", linked_item_id="item-1", linked_item_kind=kind)
        now = _at(WEDNESDAY, 9, 0, sao_paulo)
        assert should_fire(rule, QuietConfig(), now, sao_paulo) is True
        assert should_fire(rule, QuietConfig(**{switch: False}), now, sao_paulo) is False

    def test_unlinked_rule_ignores_kind_switches(self, make_rule, sao_paulo):
        quiet = QuietConfig(tasks_enabled=False, projects_enabled=False, goals_enabled=False)
        rule = make_rule(time="09:00")
        assert should_fire(rule, quiet, _at(WEDNESDAY, 9, 0, sao_paulo), sao_paulo) is True

    def test_mismatched_rules_never_fire(self, make_rule, no_quiet, sao_paulo):
        time_without_time = make_rule(type="time", time=None)
        day_without_days = make_rule(type="day", time=None, days_of_week=[])
        date_without_date = make_rule(type="date", time=None)
        for hour in range(24):
            now = _at(WEDNESDAY, hour, 0, sao_paulo)
            assert should_fire(time_without_time, no_quiet, now, sao_paulo) is False
            assert should_fire(day_without_days, no_quiet, now, sao_paulo) is False
            assert should_fire(date_without_date, no_quiet, now, sao_paulo) is False

    def test_stateless_repeat_calls_agree(self, make_rule, no_quiet, sao_paulo):
        rule = make_rule(time="09:00")
        now = _at(WEDNESDAY, 9, 0, sao_paulo)
        assert should_fire(rule, no_quiet, now, sao_paulo) is True
        assert should_fire(rule, no_quiet, now, sao_paulo) is True


class TestSelectDueRules:
    def test_returns_ids_in_input_order(self, make_rule, no_quiet, sao_paulo):
        first = make_rule(time="09:00")
        other = make_rule(time="10:00")
        day = make_rule(type="day", time=None, days_of_week=[3])
        inactive = make_rule(time="09:00", is_active=False)

        due = select_due_rules([first, other, day, inactive], no_quiet, _at(WEDNESDAY, 9, 0, sao_paulo), sao_paulo)

        assert due == [first.id, day.id]
