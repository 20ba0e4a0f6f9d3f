# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for the study planner.

All comparisons between calendar dates (deadlines, due dates, study task
dates) and instants (reminder times, "now") go through these helpers so
that naive and aware values never get mixed.

Design Decisions:
-----------------
1. Instants are timezone-aware UTC datetimes.
2. Naive datetimes coming from clients (e.g. ``2025-11-10T09:00``) are
   treated as UTC.
3. A calendar date is compared against "now" by day, using the UTC day
   that contains "now".

Usage:
------
    from src.utils.datetime import utc_now, days_between

    days_left = days_between(utc_now(), application.deadline)
"""

from datetime import date, datetime, time, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def assume_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to a naive datetime, keeping any offset already present.

    Reminder times keep the offset the client sent so that their calendar
    date is the one the client wrote.
    """
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)


def start_of_day(day: date) -> datetime:
    """Get midnight UTC for a calendar date.

    Args:
        day: Calendar date.

    Returns:
        Timezone-aware datetime at 00:00:00 UTC on that date.
    """
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def as_instant(value: date | datetime) -> datetime:
    """Normalize a date or datetime to an aware UTC instant.

    Dates map to midnight UTC, which lets alerts dated by day and alerts
    dated by reminder time sort on one axis.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    return start_of_day(value)


def utc_today(now: datetime | None = None) -> date:
    """Get the UTC calendar date containing ``now``.

    Args:
        now: Reference instant, defaults to the current time.

    Returns:
        The UTC date.
    """
    reference = ensure_utc(now) if now is not None else utc_now()
    return reference.date()


def days_between(now: datetime, target: date) -> int:
    """Whole calendar days from the day of ``now`` to ``target``.

    Args:
        now: Reference instant.
        target: Calendar date.

    Returns:
        Positive when target is in the future, 0 for today, negative
        when target has passed.
    """
    return (target - utc_today(now)).days


def minutes_between(now: datetime, target: datetime) -> float:
    """Minutes from ``now`` until ``target`` (negative if in the past)."""
    return (ensure_utc(target) - ensure_utc(now)) / timedelta(minutes=1)
