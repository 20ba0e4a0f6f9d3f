# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for datetime utilities."""

from datetime import date, datetime, timedelta, timezone

from src.utils.datetime import (
    as_instant,
    assume_utc,
    days_between,
    ensure_utc,
    minutes_between,
    start_of_day,
    utc_now,
    utc_today,
)


class TestEnsureUtc:
    """Tests for ensure_utc."""

    def test_none_passes_through(self) -> None:
        """Test that None is returned unchanged."""
        assert ensure_utc(None) is None

    def test_naive_is_treated_as_utc(self) -> None:
        """Test that naive datetimes get UTC tzinfo without shifting."""
        result = ensure_utc(datetime(2025, 11, 10, 9, 0))

        assert result == datetime(2025, 11, 10, 9, 0, tzinfo=timezone.utc)

    def test_aware_is_converted(self) -> None:
        """Test that aware datetimes are converted to UTC."""
        plus_two = timezone(timedelta(hours=2))
        result = ensure_utc(datetime(2025, 11, 10, 9, 0, tzinfo=plus_two))

        assert result == datetime(2025, 11, 10, 7, 0, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc


class TestAssumeUtc:
    """Tests for assume_utc."""

    def test_none_and_naive(self) -> None:
        """Test that naive datetimes get UTC tzinfo and None passes through."""
        assert assume_utc(None) is None
        assert assume_utc(datetime(2025, 11, 10, 9, 0)) == datetime(
            2025, 11, 10, 9, 0, tzinfo=timezone.utc
        )

    def test_offset_is_kept(self) -> None:
        """Test that an aware datetime keeps its own offset and calendar date."""
        plus_five = timezone(timedelta(hours=5))
        value = datetime(2025, 11, 10, 1, 0, tzinfo=plus_five)

        result = assume_utc(value)

        assert result.tzinfo == plus_five
        assert result.date() == date(2025, 11, 10)


class TestDayArithmetic:
    """Tests for calendar-day helpers."""

    def test_start_of_day(self) -> None:
        """Test that a date maps to midnight UTC."""
        assert start_of_day(date(2025, 11, 10)) == datetime(
            2025, 11, 10, tzinfo=timezone.utc
        )

    def test_as_instant_accepts_date_and_datetime(self) -> None:
        """Test normalization of both dates and datetimes."""
        assert as_instant(date(2025, 11, 10)) == datetime(
            2025, 11, 10, tzinfo=timezone.utc
        )
        assert as_instant(datetime(2025, 11, 10, 8, 0)) == datetime(
            2025, 11, 10, 8, 0, tzinfo=timezone.utc
        )

    def test_utc_today_uses_reference(self) -> None:
        """Test that utc_today returns the UTC date of the reference."""
        late = datetime(2025, 11, 10, 23, 30, tzinfo=timezone(timedelta(hours=-2)))

        assert utc_today(late) == date(2025, 11, 11)

    def test_utc_today_defaults_to_now(self) -> None:
        """Test the default reference is the current time."""
        assert utc_today() == utc_now().date()

    def test_days_between_ignores_time_of_day(self) -> None:
        """Test that day distance is measured between calendar days."""
        late_evening = datetime(2025, 11, 10, 23, 59, tzinfo=timezone.utc)

        assert days_between(late_evening, date(2025, 11, 10)) == 0
        assert days_between(late_evening, date(2025, 11, 11)) == 1
        assert days_between(late_evening, date(2025, 11, 8)) == -2


class TestMinutesBetween:
    """Tests for minutes_between."""

    def test_future_is_positive(self) -> None:
        """Test minutes until a future instant."""
        reference = datetime(2025, 11, 10, 12, 0, tzinfo=timezone.utc)

        assert minutes_between(reference, reference + timedelta(minutes=90)) == 90

    def test_past_is_negative_and_naive_is_utc(self) -> None:
        """Test minutes since a past naive instant."""
        reference = datetime(2025, 11, 10, 12, 0, tzinfo=timezone.utc)

        assert minutes_between(reference, datetime(2025, 11, 10, 11, 30)) == -30
