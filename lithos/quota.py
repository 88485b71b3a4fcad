"""Formatting of quota reset times."""

from __future__ import annotations

from datetime import datetime, timezone


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def format_quota_reset(reset: datetime, now: datetime | None = None) -> str:
    """Describe the time left until ``reset``, such as ``"1d 2h 3m 4s"``.

    ``now`` defaults to the current UTC time.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    delta = reset - now
    microseconds = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    milliseconds = _trunc_div(microseconds, 1000)
    seconds = _trunc_div(milliseconds, 1000)
    minutes = _trunc_div(seconds, 60)
    hours = _trunc_div(minutes, 60)
    days = _trunc_div(hours, 24)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours - days * 24}h")
    if minutes > 0:
        parts.append(f"{minutes - hours * 60}m")
    if seconds > 0:
        parts.append(f"{seconds - minutes * 60}s")
    else:
        parts.append(f"{milliseconds - seconds * 1000}ms")
    return " ".join(parts)