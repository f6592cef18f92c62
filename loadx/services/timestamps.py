"""
Locale date/time stamps for log entries and archived sessions.

The stored strings follow the Brazilian convention (day/month/year, 24h
clock). History filtering compares these strings directly, so the format
must stay stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Mapping, Optional, Tuple

DEFAULT_DATE_FORMAT = "%d/%m/%Y"
DEFAULT_TIME_FORMAT = "%H:%M"


@dataclass(frozen=True)
class LocaleFormatter:
    date_format: str = DEFAULT_DATE_FORMAT
    time_format: str = DEFAULT_TIME_FORMAT
    clock: Callable[[], datetime] = datetime.now

    def format_date(self, value: date) -> str:
        return value.strftime(self.date_format)

    def format_time(self, value: datetime) -> str:
        return value.strftime(self.time_format)

    def stamp(self, now: Optional[datetime] = None) -> Tuple[str, str]:
        """(date, time) strings for the current local moment."""
        now = now or self.clock()
        return self.format_date(now), self.format_time(now)

    def parse_date(self, value: str) -> Optional[date]:
        try:
            return datetime.strptime(value, self.date_format).date()
        except ValueError:
            return None


def formatter_from_config(config: Mapping) -> LocaleFormatter:
    return LocaleFormatter(
        date_format=config.get("LOADX_LOCALE_DATE_FORMAT", DEFAULT_DATE_FORMAT),
        time_format=config.get("LOADX_LOCALE_TIME_FORMAT", DEFAULT_TIME_FORMAT),
    )
