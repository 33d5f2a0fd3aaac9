"""``date``: render a date/time value through a format pattern.

Two pattern dialects, chosen when the filter is built
(``FilterConfig.use_ruby_date_format``):

Native (default)::

    d dd ddd dddd     day, padded day, abbreviated / full weekday name
    M MM MMM MMMM     month, padded month, abbreviated / full month name
    y yy yyy+         year mod 100, padded year mod 100, full year padded
    h hh H HH         12-hour / 24-hour clock
    m mm s ss         minutes, seconds
    f… F…             fraction of a second (F drops trailing zeros)
    t tt              first letter / full AM-PM designator
    z zz zzz K        UTC offset
    g                 era
    'text' "text" \\c  literals

    A pattern of exactly one letter is a standard format
    (d D t T f F g G M Y s u o r).

Ruby (strftime)::

    %a %A %b %B %c %C %d %D %e %F %H %I %j %k %l %L %m %M
    %p %P %s %S %T %u %U %w %W %x %X %y %Y %z %Z %%

Month and weekday names, AM/PM designators and standard formats come from
the configured culture (babel CLDR data).  Unknown directives and other
characters are copied through.
"""

from __future__ import annotations

import calendar
import datetime as dt
import logging
from typing import Any, Callable, Dict, Optional

from babel import Locale
from babel.dates import (
    format_date,
    format_skeleton,
    format_time,
    get_day_names,
    get_era_names,
    get_month_names,
    get_period_names,
)
from dateutil import parser as date_parser

from ..values import is_blank, to_liquid_string
from .culture import locale_for

logger = logging.getLogger(__name__)

_NOW_SENTINELS = ("now", "today")

_Field = Callable[[dt.datetime, Locale], str]


# ─────────────────────────────────────────────────────────────────────────────
# Shared field helpers
# ─────────────────────────────────────────────────────────────────────────────


def _pad(value: int, count: int) -> str:
    return f"{value:02d}" if count >= 2 else str(value)


def _hour12(moment: dt.datetime) -> int:
    return moment.hour % 12 or 12


def _day_name(moment: dt.datetime, width: str, locale: Locale) -> str:
    return get_day_names(width, locale=locale)[moment.weekday()]


def _month_name(moment: dt.datetime, width: str, locale: Locale) -> str:
    return get_month_names(width, locale=locale)[moment.month]


def _period(moment: dt.datetime, locale: Locale) -> str:
    names = get_period_names("abbreviated", context="format", locale=locale)
    return names["am" if moment.hour < 12 else "pm"]


def _offset(moment: dt.datetime) -> tuple[str, int, int]:
    """UTC offset as (sign, hours, minutes); naive values count as UTC."""
    delta = moment.utcoffset() or dt.timedelta(0)
    total = int(delta.total_seconds()) // 60
    hours, minutes = divmod(abs(total), 60)
    return ("-" if total < 0 else "+"), hours, minutes


def _iso_offset(moment: dt.datetime) -> str:
    sign, hours, minutes = _offset(moment)
    return f"{sign}{hours:02d}:{minutes:02d}"


# ─────────────────────────────────────────────────────────────────────────────
# Native dialect
# ─────────────────────────────────────────────────────────────────────────────

_NATIVE_LETTERS = frozenset("dfFghHKmMstyz")


def _native_field(letter: str, count: int, moment: dt.datetime, locale: Locale) -> str:
    if letter == "d":
        if count <= 2:
            return _pad(moment.day, count)
        return _day_name(moment, "abbreviated" if count == 3 else "wide", locale)
    if letter in "fF":
        digits = f"{moment.microsecond:06d}0"[:min(count, 7)]
        return digits if letter == "f" else digits.rstrip("0")
    if letter == "g":
        return get_era_names("abbreviated", locale=locale)[1]
    if letter == "h":
        return _pad(_hour12(moment), count)
    if letter == "H":
        return _pad(moment.hour, count)
    if letter == "K":
        return _iso_offset(moment) if moment.tzinfo else ""
    if letter == "m":
        return _pad(moment.minute, count)
    if letter == "M":
        if count <= 2:
            return _pad(moment.month, count)
        return _month_name(moment, "abbreviated" if count == 3 else "wide", locale)
    if letter == "s":
        return _pad(moment.second, count)
    if letter == "t":
        period = _period(moment, locale)
        return period[:1] if count == 1 else period
    if letter == "y":
        if count <= 2:
            return _pad(moment.year % 100, count)
        return f"{moment.year:0{count}d}"
    # z
    sign, hours, minutes = _offset(moment)
    if count == 1:
        return f"{sign}{hours}"
    if count == 2:
        return f"{sign}{hours:02d}"
    return f"{sign}{hours:02d}:{minutes:02d}"


def _format_native_custom(pattern: str, moment: dt.datetime, locale: Locale) -> str:
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch in _NATIVE_LETTERS:
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            out.append(_native_field(ch, j - i, moment, locale))
            i = j
        elif ch in "'\"":
            close = pattern.find(ch, i + 1)
            if close == -1:
                close = n
            out.append(pattern[i + 1:close])
            i = close + 1
        elif ch == "\\" and i + 1 < n:
            out.append(pattern[i + 1])
            i += 2
        elif ch == "%" and i + 1 < n and pattern[i + 1] in _NATIVE_LETTERS:
            # "%d" is the custom "d", not the standard short-date format
            i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _round_trip(moment: dt.datetime, _locale: Locale) -> str:
    text = f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond:06d}0"
    return text + _iso_offset(moment) if moment.tzinfo else text


def _rfc1123(moment: dt.datetime, _locale: Locale) -> str:
    invariant = locale_for("en-US")
    return (
        f"{_day_name(moment, 'abbreviated', invariant)}, {moment.day:02d} "
        f"{_month_name(moment, 'abbreviated', invariant)} {moment:%Y %H:%M:%S} GMT"
    )


_STANDARD_FORMATS: Dict[str, _Field] = {
    "d": lambda m, loc: format_date(m, "short", locale=loc),
    "D": lambda m, loc: format_date(m, "full", locale=loc),
    "t": lambda m, loc: format_time(m, "short", locale=loc),
    "T": lambda m, loc: format_time(m, "medium", locale=loc),
    "f": lambda m, loc: f"{format_date(m, 'full', locale=loc)} {format_time(m, 'short', locale=loc)}",
    "F": lambda m, loc: f"{format_date(m, 'full', locale=loc)} {format_time(m, 'medium', locale=loc)}",
    "g": lambda m, loc: f"{format_date(m, 'short', locale=loc)} {format_time(m, 'short', locale=loc)}",
    "G": lambda m, loc: f"{format_date(m, 'short', locale=loc)} {format_time(m, 'medium', locale=loc)}",
    "M": lambda m, loc: format_skeleton("MMMMd", m, locale=loc),
    "m": lambda m, loc: format_skeleton("MMMMd", m, locale=loc),
    "Y": lambda m, loc: format_skeleton("yMMMM", m, locale=loc),
    "y": lambda m, loc: format_skeleton("yMMMM", m, locale=loc),
    "s": lambda m, _loc: f"{m:%Y-%m-%dT%H:%M:%S}",
    "u": lambda m, _loc: f"{m:%Y-%m-%d %H:%M:%S}Z",
    "o": _round_trip,
    "O": _round_trip,
    "r": _rfc1123,
    "R": _rfc1123,
}


def format_native(pattern: str, moment: dt.datetime, locale: Locale) -> str:
    """Render *moment* through a native pattern (standard or custom)."""
    if len(pattern) == 1 and pattern in _STANDARD_FORMATS:
        return _STANDARD_FORMATS[pattern](moment, locale)
    return _format_native_custom(pattern, moment, locale)


# ─────────────────────────────────────────────────────────────────────────────
# Ruby (strftime) dialect
# ─────────────────────────────────────────────────────────────────────────────

_STRFTIME: Dict[str, _Field] = {
    "a": lambda m, loc: _day_name(m, "abbreviated", loc),
    "A": lambda m, loc: _day_name(m, "wide", loc),
    "b": lambda m, loc: _month_name(m, "abbreviated", loc),
    "h": lambda m, loc: _month_name(m, "abbreviated", loc),
    "B": lambda m, loc: _month_name(m, "wide", loc),
    "c": lambda m, loc: (
        f"{_day_name(m, 'abbreviated', loc)} {_month_name(m, 'abbreviated', loc)} "
        f"{m:%d %H:%M:%S %Y}"
    ),
    "C": lambda m, _loc: f"{m.year // 100:02d}",
    "d": lambda m, _loc: f"{m.day:02d}",
    "D": lambda m, _loc: f"{m:%m/%d/%y}",
    "e": lambda m, _loc: f"{m.day:2d}",
    "F": lambda m, _loc: f"{m:%Y-%m-%d}",
    "H": lambda m, _loc: f"{m.hour:02d}",
    "I": lambda m, _loc: f"{_hour12(m):02d}",
    "j": lambda m, _loc: f"{m.timetuple().tm_yday:03d}",
    "k": lambda m, _loc: f"{m.hour:2d}",
    "l": lambda m, _loc: f"{_hour12(m):2d}",
    "L": lambda m, _loc: f"{m.microsecond // 1000:03d}",
    "m": lambda m, _loc: f"{m.month:02d}",
    "M": lambda m, _loc: f"{m.minute:02d}",
    "p": lambda m, loc: _period(m, loc).upper(),
    "P": lambda m, loc: _period(m, loc).lower(),
    "s": lambda m, _loc: str(calendar.timegm(m.utctimetuple())),
    "S": lambda m, _loc: f"{m.second:02d}",
    "T": lambda m, _loc: f"{m:%H:%M:%S}",
    "u": lambda m, _loc: str(m.isoweekday()),
    "U": lambda m, _loc: m.strftime("%U"),
    "w": lambda m, _loc: str(m.isoweekday() % 7),
    "W": lambda m, _loc: m.strftime("%W"),
    "x": lambda m, loc: format_date(m, "short", locale=loc),
    "X": lambda m, loc: format_time(m, "medium", locale=loc),
    "y": lambda m, _loc: f"{m.year % 100:02d}",
    "Y": lambda m, _loc: str(m.year),
    "z": lambda m, _loc: _iso_offset(m).replace(":", ""),
    "Z": lambda m, _loc: m.tzname() or "",
    "%": lambda _m, _loc: "%",
}


def format_strftime(pattern: str, moment: dt.datetime, locale: Locale) -> str:
    """Render *moment* through a ``%``-directive pattern."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "%" and i + 1 < n and pattern[i + 1] in _STRFTIME:
            out.append(_STRFTIME[pattern[i + 1]](moment, locale))
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


# ─────────────────────────────────────────────────────────────────────────────
# Filter
# ─────────────────────────────────────────────────────────────────────────────


# Two fills that differ in year, month and day: a field the text leaves out
# shows up as a difference between the two parses.
_PARSE_DEFAULTS = (dt.datetime(2000, 1, 1), dt.datetime(2001, 2, 2))


def parse_moment(text: str) -> dt.datetime:
    """Parse text naming a complete calendar date, with an optional time.

    Text that leaves the year, month or day to be guessed (``"1"``,
    ``"may"``, ``"2006-07"``) raises ``ValueError``, as does anything
    ``dateutil`` cannot read.
    """
    first, second = (date_parser.parse(text, default=fill) for fill in _PARSE_DEFAULTS)
    if first != second:
        raise ValueError(f"{text!r} does not name a complete date")
    return first


def _as_datetime(value: dt.date) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value
    return dt.datetime.combine(value, dt.time())


def make_date_filter(
    use_ruby_date_format: bool = False,
    culture: str = "en-US",
    clock: Callable[[], dt.datetime] = dt.datetime.now,
) -> Callable[..., Any]:
    """Factory for ``date``.

    Args:
        use_ruby_date_format: ``True`` → ``%``-directive patterns.
        culture: Culture for names and standard formats.
        clock: Source of the current moment for ``"now"`` / ``"today"``.

    Returns:
        The ``date`` filter.
    """
    locale = locale_for(culture)
    render = format_strftime if use_ruby_date_format else format_native

    def date(input: Any, format: Any = None) -> Optional[str]:
        """``date``: format a date/time value, or text that parses as one.

        Behavior:
        * ``None`` → ``None``
        * ``"now"`` / ``"today"`` (any case) → the current moment
        * Other text is parsed; text that is unparsable or not a complete
          date is returned unchanged
        * Blank *format* → the default textual form (parsed text is
          returned as given)

        Examples::

            date(datetime(2006, 5, 5, 10), "MMMM")           → "May"
            date("2006-07-05 10:00:00", "MM/dd/yyyy")        → "07/05/2006"
            date("hi", "MMMM")                               → "hi"
        """
        if input is None:
            return None

        pattern = to_liquid_string(format)
        if isinstance(input, dt.date):
            if is_blank(pattern):
                return to_liquid_string(input)
            moment = _as_datetime(input)
        else:
            text = to_liquid_string(input)
            if text.lower() in _NOW_SENTINELS:
                moment = clock()
                if is_blank(pattern):
                    return to_liquid_string(moment)
            else:
                try:
                    moment = parse_moment(text)
                except (ValueError, OverflowError) as exc:
                    logger.debug("date(%r) left unparsed: %s", text, exc)
                    return text
                if is_blank(pattern):
                    return text

        return render(pattern, moment, locale)

    return date


date = make_date_filter()
