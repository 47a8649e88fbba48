# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Date parsing for Info dictionary and XMP metadata values.

Two grammars are supported:

* Info dictionary dates: ``D:YYYYMMDDHHmmSS`` (prefix and trailing
  groups optional, no separators).
* XMP dates: ``YYYY[-MM[-DDTHH:mm[:ss[.s+]][(+|-)HH:mm|Z]]]``.

Both produce a fully populated :class:`CalendarValue`. Components that are
missing from the input default to January 1st, 00:00:00.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

# Info dictionary date: fixed-width groups, each one only reachable when
# the previous one matched
_INFO_DATE_RE = re.compile(
    r"(\d{4})(\d{2})?(\d{2})?(\d{2})?(\d{2})?(\d{2})?",
    re.ASCII,
)

# XMP date (ISO 8601 subset); no end anchor, trailing garbage is ignored
_XMP_DATE_RE = re.compile(
    r"(?P<year>\d{4})"
    r"(?:-(?P<month>\d{2})"
    r"(?:-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.\d+)?)?"
    r"(?:(?P<tz_sign>[+-])(?P<tz_hour>\d{2}):(?P<tz_minute>\d{2})|(?P<utc>Z))?"
    r")?"
    r")?"
    r")?",
    re.ASCII,
)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


@dataclass(frozen=True)
class CalendarValue:
    """Fully populated calendar date and time.

    Attributes:
        year: Four-digit year.
        month: Month of year, 1-12.
        day: Day of month, 1-31.
        hour: Hour, 0-23.
        minute: Minute, 0-59.
        second: Second, 0-60 (60 rolls over into the next minute).
    """

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0

    def normalize(self) -> datetime:
        """Validates the components and returns the normalized datetime.

        Raises:
            ValueError: If any component is outside its calendar range.
        """
        if not 0 <= self.second <= 60:
            raise ValueError(f"second must be in 0..60, got {self.second}")
        try:
            base = datetime(self.year, self.month, self.day, self.hour, self.minute)
            return base + timedelta(seconds=self.second)
        except OverflowError as e:
            raise ValueError(str(e)) from e


def _validated(value: CalendarValue, raw: str) -> CalendarValue | None:
    try:
        value.normalize()
    except ValueError as e:
        logger.debug("Invalid date: %s (%s)", raw, e)
        return None
    return value


def parse_info_date(raw: str) -> CalendarValue | None:
    """Parses an Info dictionary date string.

    Args:
        raw: Date string, e.g. ``D:20230615120000+02'00'``.

    Returns:
        Parsed calendar value or None if no year could be read or the
        resulting date does not exist.
    """
    if raw.startswith("D:"):
        raw = raw[2:]

    match = _INFO_DATE_RE.match(raw)
    if not match:
        logger.debug("Could not parse Info date: %s", raw)
        return None

    year, month, day, hour, minute, second = match.groups()
    value = CalendarValue(
        year=int(year),
        month=int(month) if month else 1,
        day=int(day) if day else 1,
        hour=int(hour) if hour else 0,
        minute=int(minute) if minute else 0,
        second=int(second) if second else 0,
    )
    return _validated(value, raw)


def scan_xmp_date(raw: str) -> tuple[CalendarValue, int | None] | None:
    """Scans an XMP date string into a calendar value and its UTC offset.

    The offset is returned in seconds (None when absent) but is not applied
    to the calendar value.

    Args:
        raw: XMP date string, e.g. ``2023-06-15T12:00:00+02:00``.

    Returns:
        Tuple of (calendar value, offset seconds) or None if the string does
        not start with a four-digit year.
    """
    match = _XMP_DATE_RE.match(raw)
    if not match:
        logger.debug("Could not parse XMP date: %s", raw)
        return None

    groups = match.groupdict()
    value = CalendarValue(
        year=int(groups["year"]),
        month=int(groups["month"]) if groups["month"] else 1,
        day=int(groups["day"]) if groups["day"] else 1,
        hour=int(groups["hour"]) if groups["hour"] else 0,
        minute=int(groups["minute"]) if groups["minute"] else 0,
        second=int(groups["second"]) if groups["second"] else 0,
    )

    offset = None
    if groups["tz_sign"]:
        offset = (int(groups["tz_hour"]) * 60 + int(groups["tz_minute"])) * 60
        if groups["tz_sign"] == "-":
            offset = -offset
    elif groups["utc"]:
        offset = 0

    return value, offset


def parse_xmp_date(raw: str) -> CalendarValue | None:
    """Parses an XMP date string.

    The timezone offset is read but not applied: the result carries the
    wall-clock time as written in the packet.

    Args:
        raw: XMP date string.

    Returns:
        Parsed calendar value or None if parsing or validation fails.
    """
    scanned = scan_xmp_date(raw)
    if scanned is None:
        return None

    value, offset = scanned
    if offset:
        logger.debug("Ignoring UTC offset of %+d seconds in %s", offset, raw)
    return _validated(value, raw)


def format_calendar(value: CalendarValue) -> str | None:
    """Renders a calendar value as ``Www Mmm dd HH:MM:SS YYYY``.

    The layout matches the C locale ``%c`` format, with the day of month
    padded by a space.

    Returns:
        Rendered string or None if the value does not normalize.
    """
    try:
        dt = value.normalize()
    except ValueError as e:
        logger.debug("Cannot format %s: %s", value, e)
        return None

    return (
        f"{_WEEKDAYS[dt.weekday()]} {_MONTHS[dt.month - 1]} {dt.day:2d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} {dt.year}"
    )
