"""
governance/week_clock.py

Canonical weekly partition key.

The same key names the week folder in Drive and stamps/filters the ``week``
column of every register row, so both must go through ``week_key``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

WEEK_FOLDER_PREFIX = "Week "


def week_start(moment: datetime | date) -> date:
    """
    Return the Monday that begins the week containing *moment*.

    Sunday is day 7 of the preceding week.
    """

    day = moment.date() if isinstance(moment, datetime) else moment
    return day - timedelta(days=day.isoweekday() - 1)


def week_key(moment: datetime | date) -> str:
    """
    Format the Monday of *moment*'s week as zero-padded ``YYYY-MM-DD``.
    """

    return week_start(moment).strftime("%Y-%m-%d")


def current_week_key(now: datetime | None = None, tz: str | tzinfo = "UTC") -> str:
    """
    Return the week key for *now* (defaults to the current time in *tz*).
    """

    if now is None:
        zone = ZoneInfo(tz) if isinstance(tz, str) else tz
        now = datetime.now(zone)
    return week_key(now)


def week_folder_name(key: str) -> str:
    return f"{WEEK_FOLDER_PREFIX}{key}"


class WeekClock:
    """
    Time source shared by week-folder naming and record partitioning.
    """

    def __init__(
        self,
        *,
        tz: str | tzinfo = "UTC",
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._tz = ZoneInfo(tz) if isinstance(tz, str) else tz
        self._now = now

    def now(self) -> datetime:
        if self._now is not None:
            return self._now()
        return datetime.now(self._tz)

    def week_key_for(self, moment: datetime) -> str:
        """
        Return the week key of *moment* as seen in the configured zone.

        Naive datetimes are taken to be local to that zone already.
        """

        if moment.tzinfo is not None:
            moment = moment.astimezone(self._tz)
        return week_key(moment)

    def current_week_key(self) -> str:
        return self.week_key_for(self.now())

    def current_week_folder_name(self) -> str:
        return week_folder_name(self.current_week_key())
