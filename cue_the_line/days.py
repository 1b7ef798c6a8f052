"""Calendar helpers: day keys and day indices, all in local time."""

from __future__ import annotations

from datetime import date, timedelta

DEFAULT_ANCHOR = date(2025, 1, 1)


def day_key(day: date) -> str:
    """Local calendar date as YYYY-MM-DD."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def yesterday_key(day: date) -> str:
    return day_key(day - timedelta(days=1))


def day_index(day: date, anchor: date = DEFAULT_ANCHOR) -> int:
    """Whole days elapsed since anchor."""
    return (day - anchor).days


def run_number(index: int) -> int:
    return index + 1


def parse_anchor(value: str) -> date:
    return date.fromisoformat(value)
