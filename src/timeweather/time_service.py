# ABOUTME: Date/time computations behind the time tools: clock queries, conversion, arithmetic, formatting.
# ABOUTME: Pure functions with no I/O; all text in and out uses the yyyy-MM-dd HH:mm:ss layout.

import calendar
import re
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timeweather.errors import InvalidTimeFormat, InvalidTimezone, UnsupportedUnit
from timeweather.models import FullTimeInfo, TimeDifference

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATETIME_PATTERN = "yyyy-MM-dd HH:mm:ss"

# strptime alone accepts unpadded fields such as "2023-1-5 9:0:0"
_STRICT_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_UNITS = {
    "year": "years",
    "years": "years",
    "month": "months",
    "months": "months",
    "day": "days",
    "days": "days",
    "hour": "hours",
    "hours": "hours",
    "minute": "minutes",
    "minutes": "minutes",
    "second": "seconds",
    "seconds": "seconds",
}


def _now() -> datetime:
    """Current time as an aware datetime in the process's local timezone."""
    return datetime.now().astimezone()


def _parse(text: str) -> datetime:
    """Parse text in the fixed layout into a naive wall-clock datetime."""
    if not isinstance(text, str) or not _STRICT_DATETIME.fullmatch(text):
        raise InvalidTimeFormat(f"Invalid time '{text}', use the {DATETIME_PATTERN} format")
    try:
        return datetime.strptime(text, DATETIME_FORMAT)
    except ValueError as e:
        raise InvalidTimeFormat(f"Invalid time '{text}', use the {DATETIME_PATTERN} format") from e


def _epoch_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def now_local() -> str:
    return _now().strftime(DATETIME_FORMAT)


def now_utc() -> str:
    return _now().astimezone(timezone.utc).strftime(DATETIME_FORMAT)


def now_in_zone(zone_id: str) -> str:
    """Current time in an IANA timezone such as "Asia/Shanghai" or "UTC"."""
    try:
        zone = ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimezone(f"Invalid timezone ID: {zone_id}") from e
    return _now().astimezone(zone).strftime(DATETIME_FORMAT)


def now_epoch_millis() -> int:
    return _epoch_millis(_now())


def now_epoch_seconds() -> int:
    return _epoch_millis(_now()) // 1000


def epoch_millis_to_time(millis: int) -> str:
    """Render an epoch timestamp in milliseconds as local wall-clock time."""
    try:
        moment = datetime.fromtimestamp(millis // 1000)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidTimeFormat(f"Timestamp {millis} is out of the supported range") from e
    return moment.strftime(DATETIME_FORMAT)


def time_to_epoch_millis(text: str) -> int:
    """Interpret text as local wall-clock time and return epoch milliseconds."""
    moment = _parse(text)
    try:
        return _epoch_millis(moment.astimezone())
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidTimeFormat(f"Time '{text}' cannot be converted to a timestamp") from e


def difference(start: str, end: str) -> TimeDifference:
    """Compute end - start as whole-unit totals plus a day/hour/minute/second breakdown.

    Both ends are naive wall-clock times, so no DST correction applies. A negative result
    means end precedes start; every field then carries the minus sign.
    """
    delta = _parse(end) - _parse(start)
    total_seconds = delta.days * 86400 + delta.seconds
    sign = -1 if total_seconds < 0 else 1
    magnitude = abs(total_seconds)

    days = sign * (magnitude // 86400)
    remainder_hours = sign * (magnitude // 3600 % 24)
    remainder_minutes = sign * (magnitude // 60 % 60)
    remainder_seconds = sign * (magnitude % 60)

    return TimeDifference(
        start=start,
        end=end,
        days=days,
        hours=sign * (magnitude // 3600),
        minutes=sign * (magnitude // 60),
        seconds=total_seconds,
        milliseconds=total_seconds * 1000,
        remainder_hours=remainder_hours,
        remainder_minutes=remainder_minutes,
        remainder_seconds=remainder_seconds,
        summary=f"{days} days {remainder_hours} hours {remainder_minutes} minutes {remainder_seconds} seconds",
    )


def _shift_months(moment: datetime, months: int) -> datetime:
    """Move by calendar months, clamping the day to the last day of the target month."""
    year, month_index = divmod(moment.year * 12 + moment.month - 1 + months, 12)
    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidTimeFormat(f"Result year {year} is out of the supported range")
    month = month_index + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def add(base: str, amount: int, unit: str) -> str:
    """Add amount units to base; negative amounts subtract.

    Jan 31 + 1 month gives the last day of February, and Feb 29 + 1 year gives Feb 28.
    """
    moment = _parse(base)
    normalized = _UNITS.get(unit.strip().lower()) if isinstance(unit, str) else None
    if normalized is None:
        raise UnsupportedUnit(f"Unsupported time unit: {unit} (use years, months, days, hours, minutes or seconds)")

    if normalized == "years":
        result = _shift_months(moment, amount * 12)
    elif normalized == "months":
        result = _shift_months(moment, amount)
    else:
        try:
            result = moment + timedelta(**{normalized: amount})
        except OverflowError as e:
            raise InvalidTimeFormat(f"Adding {amount} {normalized} to {base} is out of the supported range") from e
    return result.strftime(DATETIME_FORMAT)


def _width_between(letter: str, width: int, low: int, high: int) -> None:
    if not low <= width <= high:
        raise InvalidTimeFormat(f"Too many pattern letters: {letter * width}")


def _year(moment: datetime, width: int) -> str:
    if width == 2:
        return f"{moment.year % 100:02d}"
    return str(moment.year).zfill(width)


def _era(moment: datetime, width: int) -> str:
    # years 1..9999 only, so always the common era
    _width_between("G", width, 1, 5)
    if width == 4:
        return "Anno Domini"
    if width == 5:
        return "A"
    return "AD"


def _month(letter: str):
    def render(moment: datetime, width: int) -> str:
        _width_between(letter, width, 1, 5)
        if width == 5:
            return moment.strftime("%B")[0]
        if width == 4:
            return moment.strftime("%B")
        if width == 3:
            return moment.strftime("%b")
        return str(moment.month).zfill(width)

    return render


_QUARTER_NAMES = ("1st quarter", "2nd quarter", "3rd quarter", "4th quarter")


def _quarter(letter: str):
    def render(moment: datetime, width: int) -> str:
        _width_between(letter, width, 1, 5)
        quarter = (moment.month - 1) // 3 + 1
        if width == 3:
            return f"Q{quarter}"
        if width == 4:
            return _QUARTER_NAMES[quarter - 1]
        if width == 5:
            return str(quarter)
        return str(quarter).zfill(width)

    return render


def _weekday(moment: datetime, width: int) -> str:
    _width_between("E", width, 1, 5)
    if width == 5:
        return moment.strftime("%A")[0]
    return moment.strftime("%A" if width == 4 else "%a")


def _numbered_weekday(letter: str, numeric_width: int):
    """Weekday as a number (Monday is 1) for short runs, as text for 3 to 5 letters."""

    def render(moment: datetime, width: int) -> str:
        _width_between(letter, width, 1, 5)
        if width <= numeric_width:
            return str(moment.isoweekday()).zfill(width)
        if width < 3:
            raise InvalidTimeFormat(f"Invalid pattern letters: {letter * width}")
        return _weekday(moment, width)

    return render


def _am_pm(moment: datetime, width: int) -> str:
    _width_between("a", width, 1, 1)
    return "AM" if moment.hour < 12 else "PM"


def _number(letter: str, value, max_width: int = 2):
    def render(moment: datetime, width: int) -> str:
        _width_between(letter, width, 1, max_width)
        return str(value(moment)).zfill(width)

    return render


# Times carry whole seconds, so sub-second fields always render as zeros
_FIELD_RENDERERS = {
    "G": _era,
    "y": _year,
    "u": _year,
    "Q": _quarter("Q"),
    "q": _quarter("q"),
    "M": _month("M"),
    "L": _month("L"),
    "w": _number("w", lambda m: m.isocalendar()[1]),
    "d": _number("d", lambda m: m.day),
    "D": _number("D", lambda m: m.timetuple().tm_yday, max_width=3),
    "E": _weekday,
    "e": _numbered_weekday("e", 2),
    "c": _numbered_weekday("c", 1),
    "a": _am_pm,
    "H": _number("H", lambda m: m.hour),
    "k": _number("k", lambda m: m.hour or 24),
    "K": _number("K", lambda m: m.hour % 12),
    "h": _number("h", lambda m: m.hour % 12 or 12),
    "m": _number("m", lambda m: m.minute),
    "s": _number("s", lambda m: m.second),
    "S": lambda m, width: "0" * width,
    "n": _number("n", lambda m: 0, max_width=19),
}

_RESERVED_CHARS = "#{}"


def format_time(base: str, pattern: str) -> str:
    """Re-render base using a letter pattern such as "yyyy年MM月dd日" or "MM/dd/yyyy HH:mm".

    Runs of a letter are fields (see _FIELD_RENDERERS); text inside single quotes is copied
    as-is and '' is a literal quote. Square brackets mark optional sections, which always
    print because every field is available. Any other ASCII letter and the reserved
    characters # { } are rejected.
    """
    moment = _parse(base)
    pieces = []
    optional_depth = 0
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "'":
            if pattern.startswith("''", i):
                pieces.append("'")
                i += 2
                continue
            i += 1
            while True:
                if i >= len(pattern):
                    raise InvalidTimeFormat(f"Unterminated quote in pattern: {pattern}")
                if pattern.startswith("''", i):
                    pieces.append("'")
                    i += 2
                elif pattern[i] == "'":
                    i += 1
                    break
                else:
                    pieces.append(pattern[i])
                    i += 1
        elif ch.isascii() and ch.isalpha():
            j = i
            while j < len(pattern) and pattern[j] == ch:
                j += 1
            renderer = _FIELD_RENDERERS.get(ch)
            if renderer is None:
                raise InvalidTimeFormat(f"Unknown pattern letter '{ch}' in pattern: {pattern}")
            pieces.append(renderer(moment, j - i))
            i = j
        elif ch == "[":
            optional_depth += 1
            i += 1
        elif ch == "]":
            if optional_depth == 0:
                raise InvalidTimeFormat(f"Unmatched ']' in pattern: {pattern}")
            optional_depth -= 1
            i += 1
        elif ch in _RESERVED_CHARS:
            raise InvalidTimeFormat(f"Reserved character '{ch}' in pattern: {pattern}")
        else:
            pieces.append(ch)
            i += 1
    return "".join(pieces)


def weekday_name() -> str:
    return WEEKDAY_NAMES[_now().weekday()]


def current_year() -> int:
    return _now().year


def current_month() -> int:
    return _now().month


def current_day() -> int:
    return _now().day


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def full_info() -> FullTimeInfo:
    """Everything the individual clock queries return, taken from a single clock reading."""
    moment = _now()
    millis = _epoch_millis(moment)
    return FullTimeInfo(
        current_time=moment.strftime(DATETIME_FORMAT),
        current_utc_time=moment.astimezone(timezone.utc).strftime(DATETIME_FORMAT),
        timestamp=millis,
        timestamp_seconds=millis // 1000,
        day_of_week=WEEKDAY_NAMES[moment.weekday()],
        year=moment.year,
        month=moment.month,
        day=moment.day,
        is_leap_year=is_leap_year(moment.year),
    )
