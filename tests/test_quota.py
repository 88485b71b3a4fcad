from datetime import datetime, timedelta, timezone

from lithos.quota import format_quota_reset

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_full_breakdown():
    reset = NOW + timedelta(days=1, hours=2, minutes=3, seconds=4)
    assert format_quota_reset(reset, NOW) == "1d 2h 3m 4s"


def test_zero_duration_shows_milliseconds():
    assert format_quota_reset(NOW, NOW) == "0ms"


def test_sub_second_shows_milliseconds():
    assert format_quota_reset(NOW + timedelta(milliseconds=250), NOW) == "250ms"


def test_components_stay_within_their_ranges():
    reset = NOW + timedelta(days=3, hours=23, minutes=59, seconds=59, milliseconds=900)
    parts = format_quota_reset(reset, NOW).split()
    assert parts[0] == f"{3}d"
    assert parts[1:] == [f"{23}h", f"{59}m", f"{59}s"]


def test_without_days_no_day_part():
    parts = format_quota_reset(NOW + timedelta(hours=5, seconds=1), NOW).split()
    assert not any(p.endswith("d") for p in parts)
    assert parts[0] == "5h"


def test_default_now_is_current_time():
    reset = datetime.now(timezone.utc) + timedelta(days=10, hours=1)
    parts = format_quota_reset(reset).split()
    assert parts[0] == "10d"
    assert len(parts) == 4