"""
Relative Date Resolver.

Turns natural-language date expressions ("next friday", "in 2 weeks",
"april 30") into ISO ``YYYY-MM-DD`` strings relative to a reference
"today". Also hosts the last-mile date/time normalizers the chip
workflow applies before writing to the call record.

All functions are pure: no clock reads unless the caller omits
``today``, and no shared state.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from callpad.data.keywords import MONTHS, NUMBER_WORDS, WEEKDAYS
from callpad.errors import InvalidCalendarDate
from callpad.logging_config import get_logger

logger = get_logger(__name__)

_MONTH_NAME = (
    "jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|"
    "sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_WEEKDAY_ALT = "|".join(WEEKDAYS)
_SHORT_WEEKDAYS = {"mon": 0, "tue": 1, "tues": 1, "wed": 2, "weds": 2, "thu": 3, "thur": 3,
                   "thurs": 3, "fri": 4, "sat": 5, "sun": 6}

MONTH_DAY_RE = re.compile(
    rf"^(?:on\s+)?(?:(next)\s+)?({_MONTH_NAME})\.?\s+(\d{{1,2}})(?:st|nd|rd|th)?(?:,?\s*(\d{{4}}))?$",
    re.IGNORECASE,
)
DAY_MONTH_RE = re.compile(
    rf"^(?:on\s+)?(?:the\s+)?(\d{{1,2}})(?:st|nd|rd|th)?\s+(?:of\s+)?({_MONTH_NAME})\.?(?:,?\s*(\d{{4}}))?$",
    re.IGNORECASE,
)
SLASH_DATE_RE = re.compile(r"^(?:on\s+)?(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?$")
ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
WEEKDAY_RE = re.compile(
    rf"^(?:on\s+)?(?:(this|next|coming|this\s+coming)\s+)?({_WEEKDAY_ALT}|"
    rf"{'|'.join(_SHORT_WEEKDAYS)})\.?$",
    re.IGNORECASE,
)
IN_OFFSET_RE = re.compile(
    r"^in\s+(\d+|an?|[a-z]+(?:[\s\-][a-z]+)?)\s+(day|week|month)s?$",
    re.IGNORECASE,
)
TIME_RE = re.compile(
    r"^(?:at\s+|@\s*)?(\d{1,2})(?::(\d{2}))?\s*(a\.?m\.?|p\.?m\.?|a|p)?$",
    re.IGNORECASE,
)


def _js_weekday(day: date) -> int:
    """Sunday=0 … Saturday=6."""
    return (day.weekday() + 1) % 7


def build_date(year: int, month: int, day: int) -> date:
    """Construct a date, raising InvalidCalendarDate instead of clamping."""
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidCalendarDate(f"{year:04d}-{month:02d}-{day:02d}") from exc


def word_to_number(text: str) -> Optional[int]:
    """'5' → 5, 'five' → 5, 'twenty five' / 'twenty-five' → 25, 'a' → 1."""
    token = " ".join(text.lower().replace("-", " ").split())
    if token.isdigit():
        return int(token)
    if token in ("a", "an"):
        return 1
    if token in NUMBER_WORDS:
        return NUMBER_WORDS[token]
    parts = token.split()
    if len(parts) == 2 and parts[0] in NUMBER_WORDS and parts[1] in NUMBER_WORDS:
        tens, ones = NUMBER_WORDS[parts[0]], NUMBER_WORDS[parts[1]]
        if tens % 10 == 0 and tens >= 20 and 1 <= ones <= 9:
            return tens + ones
    return None


def _month_day(month: int, day: int, year: Optional[int], today: date) -> date:
    """Year omitted → this year, rolled forward only if strictly in the past."""
    if year is not None:
        return build_date(year, month, day)
    candidate = build_date(today.year, month, day)
    if candidate < today:
        candidate = build_date(today.year + 1, month, day)
    return candidate


def _weekday_offset(target: int, today: date, qualifier: Optional[str]) -> int:
    """
    Days from ``today`` to the named weekday (``target`` is Sunday=0).

    Bare and "this" resolve strictly forward. "next" adds a further week
    only when the named day has already passed in the current week.
    """
    raw = target - _js_weekday(today)
    offset = raw
    if offset <= 0:
        offset += 7
    if qualifier == "next" and raw < 0 and offset < 7:
        offset += 7
    return offset


def resolve_relative_date(expression: str, today: date | None = None) -> Optional[str]:
    """
    Resolve a relative date expression to ``YYYY-MM-DD``.

    Returns None when the phrasing is not recognised or names a day
    that does not exist.
    """
    today = today or date.today()
    text = " ".join(expression.lower().strip(" .,!").split())
    if not text:
        return None

    try:
        resolved = _resolve(text, today)
    except InvalidCalendarDate as exc:
        logger.debug("invalid_calendar_date", expression=expression, error=str(exc))
        return None
    return resolved.isoformat() if resolved else None


def _resolve(text: str, today: date) -> Optional[date]:
    if text in ("today", "tonight", "this evening", "this afternoon"):
        return today
    if text in ("tomorrow", "tmrw", "tmr", "tomorrow night"):
        return today + timedelta(days=1)
    if text in ("day after tomorrow", "the day after tomorrow"):
        return today + timedelta(days=2)

    if text in ("next weekend", "this weekend", "weekend", "this coming weekend"):
        days = ((6 - _js_weekday(today) + 7) % 7) or 7
        return today + timedelta(days=days)

    if text == "next week":
        return today + timedelta(days=7)
    if text == "next month":
        return (today + relativedelta(months=1)).replace(day=1)

    match = WEEKDAY_RE.match(text)
    if match:
        qualifier = match.group(1).split()[0] if match.group(1) else None
        name = match.group(2)
        python_weekday = WEEKDAYS.index(name) if name in WEEKDAYS else _SHORT_WEEKDAYS[name]
        target = (python_weekday + 1) % 7
        return today + timedelta(days=_weekday_offset(target, today, qualifier))

    match = MONTH_DAY_RE.match(text)
    if match:
        month = MONTHS[match.group(2)[:3]]
        year = int(match.group(4)) if match.group(4) else None
        return _month_day(month, int(match.group(3)), year, today)

    match = IN_OFFSET_RE.match(text)
    if match:
        count = word_to_number(match.group(1))
        if count is None:
            return None
        unit = match.group(2)
        try:
            if unit == "day":
                return today + timedelta(days=count)
            if unit == "week":
                return today + timedelta(weeks=count)
            return today + relativedelta(months=count)
        except (OverflowError, ValueError) as exc:
            raise InvalidCalendarDate(f"{text}: {exc}") from exc

    return None


def resolve_absolute_date(expression: str, today: date | None = None) -> Optional[str]:
    """
    Resolve slash dates ("4/30", "4/30/25") and month-day forms
    ("April 30th", "on apr 30, 2026", "30 april") to ``YYYY-MM-DD``.
    """
    today = today or date.today()
    text = " ".join(expression.strip(" .,!").split())

    try:
        match = SLASH_DATE_RE.match(text)
        if match:
            month, day = int(match.group(1)), int(match.group(2))
            year = None
            if match.group(3):
                year = int(match.group(3))
                if year < 100:
                    year += 2000
            return _month_day(month, day, year, today).isoformat()

        match = MONTH_DAY_RE.match(text)
        if match and not match.group(1):
            year = int(match.group(4)) if match.group(4) else None
            return _month_day(MONTHS[match.group(2)[:3].lower()], int(match.group(3)), year, today).isoformat()

        match = DAY_MONTH_RE.match(text)
        if match:
            year = int(match.group(3)) if match.group(3) else None
            return _month_day(MONTHS[match.group(2)[:3].lower()], int(match.group(1)), year, today).isoformat()
    except InvalidCalendarDate as exc:
        logger.debug("invalid_calendar_date", expression=expression, error=str(exc))
        return None

    return None


def parse_time(value: str) -> Optional[tuple[int, int]]:
    """
    Parse "5pm", "5p", "9:30 am", "17:45", "noon" into (hour24, minute).

    A bare number without a meridiem or minutes is not a time.
    """
    text = " ".join(value.lower().strip().split())
    if text in ("noon", "at noon", "12 noon"):
        return 12, 0
    if text in ("midnight", "at midnight"):
        return 0, 0

    match = TIME_RE.match(text)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    meridiem = (match.group(3) or "").replace(".", "")

    if minute > 59:
        return None
    if meridiem:
        if not 1 <= hour <= 12:
            return None
        if meridiem.startswith("p") and hour != 12:
            hour += 12
        elif meridiem.startswith("a") and hour == 12:
            hour = 0
        return hour, minute

    if match.group(2) is None or hour > 23:
        return None
    return hour, minute


def normalize_time(value: str) -> Optional[str]:
    """Render a time expression as 24-hour ``HH:MM``."""
    parsed = parse_time(value)
    if parsed is None:
        return None
    return f"{parsed[0]:02d}:{parsed[1]:02d}"


def normalize_date(value: str, today: date | None = None) -> Optional[str]:
    """Render any supported date expression as ``YYYY-MM-DD``."""
    text = value.strip()
    match = ISO_DATE_RE.match(text)
    if match:
        try:
            return build_date(int(match.group(1)), int(match.group(2)), int(match.group(3))).isoformat()
        except InvalidCalendarDate:
            return None
    return resolve_absolute_date(text, today) or resolve_relative_date(text, today)
