from datetime import datetime, timedelta

import pytest

import callwindow.domain.business_hours.diagnostics as diagnostics
from callwindow.domain.business_hours.evaluator import evaluate_traced
from callwindow.domain.business_hours.models import BusinessHoursConfig
from callwindow.domain.business_hours.next_slot import (
    SENTINEL_DEFERRAL,
    is_sentinel_deferral,
    next_allowed_time,
    search_next_slot,
)
from callwindow.domain.business_hours.zones import load_zone
from helpers import ALL_DISABLED, WEEKDAYS_9_TO_5, utc


class RecordingLog:
    def __init__(self):
        self.events = []

    def info(self, event, **kw):
        self.events.append(("info", event, kw))

    def warning(self, event, **kw):
        self.events.append(("warning", event, kw))


CONFIGS = {
    "weekdays": WEEKDAYS_9_TO_5,
    "only_sunday_evening": {**ALL_DISABLED, "sunday": {"start": "19:45", "end": "21:00", "enabled": True}},
    "early_every_day": {d: {"start": "00:00", "end": "23:59", "enabled": True} for d in WEEKDAYS_9_TO_5},
    "encoded_mix": {**WEEKDAYS_9_TO_5, "monday": "garbage", "saturday": '{"start": "11:00", "end": "13:00"}'},
}


@pytest.mark.parametrize("name", sorted(CONFIGS))
@pytest.mark.parametrize("tz", ["Europe/London", "America/New_York", "Australia/Sydney"])
def test_next_allowed_time_is_strictly_in_the_future(name, tz):
    cfg = BusinessHoursConfig(**CONFIGS[name])
    start = utc(2025, 3, 24, 0, 0)  # spans the EU spring-forward weekend
    for step in range(0, 24 * 14, 5):
        candidate = start + timedelta(hours=step, minutes=step % 60)
        assert next_allowed_time(candidate, cfg, tz) > candidate


def test_earliest_enabled_day_wins():
    cfg = BusinessHoursConfig(**WEEKDAYS_9_TO_5)
    # Tuesday 2025-01-07 07:00 -> same day opening, not a later one
    assert next_allowed_time(utc(2025, 1, 7, 7, 0), cfg, "Europe/London") == utc(2025, 1, 7, 9, 0)


def test_window_start_equal_to_candidate_is_not_returned():
    cfg = BusinessHoursConfig(**WEEKDAYS_9_TO_5)
    assert next_allowed_time(utc(2025, 1, 7, 9, 0), cfg, "Europe/London") == utc(2025, 1, 8, 9, 0)


def test_local_calendar_date_drives_the_search():
    cfg = BusinessHoursConfig(**WEEKDAYS_9_TO_5)
    # 23:30 UTC Friday is already 10:30 Saturday in Sydney; next opening is Monday 09:00 AEDT (UTC+11)
    assert next_allowed_time(utc(2025, 1, 10, 23, 30), cfg, "Australia/Sydney") == utc(2025, 1, 12, 22, 0)


def test_hours_config_timezone_wins_over_argument(monkeypatch):
    recorder = RecordingLog()
    monkeypatch.setattr(diagnostics, "log", recorder)
    cfg = BusinessHoursConfig(timezone="America/New_York", **WEEKDAYS_9_TO_5)
    # Monday 18:00 UTC is 13:00 EST; the next opening is Tuesday 09:00 EST = 14:00 UTC
    assert next_allowed_time(utc(2025, 1, 6, 18, 0), cfg) == utc(2025, 1, 7, 14, 0)
    assert next_allowed_time(utc(2025, 1, 6, 18, 0), cfg, "Europe/London") == utc(2025, 1, 7, 14, 0)
    assert all(kw["timezone"] == "America/New_York" for _, _, kw in recorder.events)


def test_timezone_argument_used_when_config_has_none():
    cfg = BusinessHoursConfig(**WEEKDAYS_9_TO_5)
    assert next_allowed_time(utc(2025, 1, 6, 18, 0), cfg, "America/New_York") == utc(2025, 1, 7, 14, 0)


def test_all_days_disabled_returns_sentinel_and_warns(monkeypatch):
    recorder = RecordingLog()
    monkeypatch.setattr(diagnostics, "log", recorder)
    cfg = BusinessHoursConfig(**ALL_DISABLED)
    candidate = utc(2025, 1, 6, 18, 0)

    when = next_allowed_time(candidate, cfg, "Europe/London")

    assert when == candidate + timedelta(days=30)
    assert is_sentinel_deferral(candidate, when)
    assert any(level == "warning" and event == "business_hours_search_exhausted" for level, event, _ in recorder.events)


def test_all_days_disabled_through_evaluate():
    cfg = BusinessHoursConfig(timezone="Europe/London", **ALL_DISABLED)
    candidate = utc(2025, 1, 8, 12, 0)
    r = evaluate_traced(candidate, None, cfg)
    assert r.allowed is False
    assert r.reason == "Wednesday is not a business day"
    assert r.next_allowed_time == candidate + SENTINEL_DEFERRAL
    assert [w.event for w in r.warnings] == ["search_exhausted"]


def test_single_day_already_passed_is_beyond_the_horizon():
    # Only Monday is enabled and its opening has passed: next Monday is day 7, outside 0..6
    cfg = BusinessHoursConfig(**{**ALL_DISABLED, "monday": {"start": "09:00", "end": "17:00", "enabled": True}})
    candidate = utc(2025, 1, 6, 10, 0)
    assert next_allowed_time(candidate, cfg, "Europe/London") == candidate + SENTINEL_DEFERRAL


def test_start_inside_dst_gap_is_pushed_forward():
    # 01:30 does not exist in London on 2025-03-30; fold=0 reads it with the GMT offset
    cfg = BusinessHoursConfig(**{**ALL_DISABLED, "sunday": {"start": "01:30", "end": "05:00", "enabled": True}})
    when = next_allowed_time(utc(2025, 3, 29, 12, 0), cfg, "Europe/London")
    assert when == utc(2025, 3, 30, 1, 30)


def test_missing_config_uses_default_window_every_day():
    # Saturday evening -> Sunday 09:00, since absent fields resolve to 09:00-17:00 enabled
    when = next_allowed_time(utc(2025, 1, 11, 18, 0), None, "Europe/London")
    assert when == utc(2025, 1, 12, 9, 0)


def test_naive_candidate_is_treated_as_utc():
    cfg = BusinessHoursConfig(**WEEKDAYS_9_TO_5)
    assert next_allowed_time(datetime(2025, 1, 6, 18, 0), cfg) == utc(2025, 1, 7, 9, 0)


def test_search_trace_records_fallback_then_slot():
    cfg = BusinessHoursConfig(**{**ALL_DISABLED, "monday": "broken", "tuesday": "broken"})
    zone, _ = load_zone("Europe/London")
    # Sunday 20:00: Monday's malformed field falls back to an enabled 09:00 window
    when, trace = search_next_slot(utc(2025, 1, 5, 20, 0), cfg, zone)
    assert when == utc(2025, 1, 6, 9, 0)
    assert [t.event for t in trace] == ["window_fallback", "next_slot"]


def test_sentinel_detection_needs_the_exact_offset():
    candidate = utc(2025, 1, 6, 18, 0)
    assert is_sentinel_deferral(candidate, candidate + timedelta(days=30))
    assert not is_sentinel_deferral(candidate, candidate + timedelta(days=30, minutes=1))
    assert not is_sentinel_deferral(candidate, utc(2025, 1, 7, 9, 0))
