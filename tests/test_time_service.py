# ABOUTME: Contract tests for the date/time computations behind the time tools.
# ABOUTME: Covers clock queries (with a pinned clock), parsing, arithmetic, differences and formatting.

import pytest

from timeweather import time_service
from timeweather.errors import InvalidTimeFormat, InvalidTimezone, UnsupportedUnit


class TestClockQueries:
    def test_now_local_and_utc(self, fixed_clock):
        """Local and UTC queries render the pinned instant in the fixed layout.

        Implementation: Pins the clock to a UTC instant so local and UTC coincide.
        Passing implies: Both queries use yyyy-MM-dd HH:mm:ss and drop sub-second parts.
        """
        assert time_service.now_local() == "2024-02-29 23:59:59"
        assert time_service.now_utc() == "2024-02-29 23:59:59"

    def test_now_in_zone_converts(self, fixed_clock):
        """now_in_zone shifts the instant into the requested zone.

        Implementation: Asks for Asia/Shanghai (UTC+8) at 23:59:59 UTC.
        Passing implies: The result crosses into the next day in the target zone.
        """
        assert time_service.now_in_zone("Asia/Shanghai") == "2024-03-01 07:59:59"
        assert time_service.now_in_zone("UTC") == "2024-02-29 23:59:59"

    @pytest.mark.parametrize("zone_id", ["Mars/Olympus_Mons", "", "../etc/passwd", "not a zone", "America", "Asia", "Etc"])
    def test_now_in_zone_rejects_unknown(self, zone_id):
        """Unknown or malformed zone identifiers raise InvalidTimezone.

        Implementation: Passes identifiers zoneinfo cannot resolve.
        Passing implies: Callers get one typed failure instead of zoneinfo internals.
        """
        with pytest.raises(InvalidTimezone, match="Invalid timezone ID"):
            time_service.now_in_zone(zone_id)

    def test_epoch_readings(self, fixed_clock):
        """Epoch readings truncate the pinned instant to milliseconds and seconds.

        Implementation: Compares against the known epoch value of the pinned instant.
        Passing implies: Millisecond and second readings come from the same clock.
        """
        assert time_service.now_epoch_millis() == 1709251199999
        assert time_service.now_epoch_seconds() == 1709251199

    def test_calendar_queries(self, fixed_clock):
        """Weekday and date-part queries read the pinned date.

        Implementation: 2024-02-29 is a Thursday.
        Passing implies: Calendar queries use the current local date.
        """
        assert time_service.weekday_name() == "Thursday"
        assert time_service.current_year() == 2024
        assert time_service.current_month() == 2
        assert time_service.current_day() == 29

    def test_unpinned_clock_is_consistent(self):
        """The live clock returns a parseable time and a plausible timestamp.

        Implementation: Reads the real clock once per query.
        Passing implies: The default clock is wired up and uses the fixed layout.
        """
        assert time_service.time_to_epoch_millis(time_service.now_local()) > 0
        assert time_service.now_epoch_seconds() > 1_700_000_000


class TestIsLeapYear:
    @pytest.mark.parametrize(
        ("year", "expected"),
        [(2024, True), (2023, False), (1900, False), (2000, True), (2100, False), (2400, True), (4, True)],
    )
    def test_gregorian_rule(self, year, expected):
        """Leap years are divisible by 4, except centuries not divisible by 400.

        Implementation: Checks ordinary years, centuries and quad-centuries.
        Passing implies: The full Gregorian rule is applied.
        """
        assert time_service.is_leap_year(year) is expected


class TestFullInfo:
    def test_all_fields_from_one_reading(self, fixed_clock):
        """full_info derives every field from a single clock reading.

        Implementation: Pins the clock one millisecond before midnight on a leap day.
        Passing implies: Date parts, weekday and timestamps agree with each other.
        """
        info = time_service.full_info()
        assert info.current_time == "2024-02-29 23:59:59"
        assert info.current_utc_time == "2024-02-29 23:59:59"
        assert info.timestamp == 1709251199999
        assert info.timestamp_seconds == 1709251199
        assert info.day_of_week == "Thursday"
        assert (info.year, info.month, info.day) == (2024, 2, 29)
        assert info.is_leap_year is True


class TestParsing:
    @pytest.mark.parametrize(
        "text",
        [
            "2023-12-21T10:00:00",
            "2023-12-21",
            "2023-1-5 10:00:00",
            "2023-12-21 9:00:00",
            "2023-02-30 10:00:00",
            "2023-12-21 24:00:00",
            "",
            " 2023-12-21 10:00:00",
        ],
    )
    def test_rejects_anything_but_fixed_layout(self, text):
        """Only zero-padded, valid yyyy-MM-dd HH:mm:ss text parses.

        Implementation: Feeds near-miss strings to time_to_epoch_millis.
        Passing implies: Parse failures raise InvalidTimeFormat instead of guessing.
        """
        with pytest.raises(InvalidTimeFormat, match="yyyy-MM-dd HH:mm:ss"):
            time_service.time_to_epoch_millis(text)

    def test_round_trip_is_lossless(self):
        """Text -> epoch millis -> text reproduces the original time.

        Implementation: Converts a mid-December local time both ways.
        Passing implies: Conversion is lossless at second granularity.
        """
        text = "2023-12-21 10:30:00"
        millis = time_service.time_to_epoch_millis(text)
        assert millis % 1000 == 0
        assert time_service.epoch_millis_to_time(millis) == text
        assert time_service.time_to_epoch_millis(time_service.epoch_millis_to_time(millis)) == millis

    def test_epoch_millis_to_time_drops_millis(self):
        """Sub-second millis are truncated, not rounded.

        Implementation: Adds 999 ms to a whole-second timestamp.
        Passing implies: The rendered second is unchanged.
        """
        millis = time_service.time_to_epoch_millis("2023-12-21 10:30:00")
        assert time_service.epoch_millis_to_time(millis + 999) == "2023-12-21 10:30:00"

    def test_one_hour_apart_is_3600000_millis(self):
        """Timestamps of two times an hour apart differ by 3,600,000.

        Implementation: Converts two mid-December times.
        Passing implies: Millisecond scaling is correct.
        """
        a = time_service.time_to_epoch_millis("2023-12-21 10:00:00")
        b = time_service.time_to_epoch_millis("2023-12-21 11:00:00")
        assert b - a == 3_600_000

    def test_epoch_out_of_range(self):
        """Timestamps beyond the representable range raise InvalidTimeFormat.

        Implementation: Passes 10**20 milliseconds.
        Passing implies: Overflow is reported as a typed failure.
        """
        with pytest.raises(InvalidTimeFormat):
            time_service.epoch_millis_to_time(10**20)


class TestDifference:
    def test_hours_and_remainder(self):
        """10:00 to 15:30 is 5 whole hours with a 30-minute remainder.

        Implementation: Uses the canonical same-day example.
        Passing implies: Totals truncate and remainders are taken modulo the next unit.
        """
        diff = time_service.difference("2023-12-21 10:00:00", "2023-12-21 15:30:00")
        assert diff.days == 0
        assert diff.hours == 5
        assert diff.minutes == 330
        assert diff.seconds == 19800
        assert diff.milliseconds == 19_800_000
        assert diff.remainder_hours == 5
        assert diff.remainder_minutes == 30
        assert diff.remainder_seconds == 0
        assert diff.summary == "0 days 5 hours 30 minutes 0 seconds"

    def test_multi_day_breakdown(self):
        """A span over several days breaks down into days, hours, minutes and seconds.

        Implementation: Uses a 2d 3h 5m 7s span.
        Passing implies: Totals and remainders are derived from the same duration.
        """
        diff = time_service.difference("2023-12-21 10:00:00", "2023-12-23 13:05:07")
        assert diff.days == 2
        assert diff.hours == 51
        assert diff.minutes == 3065
        assert diff.seconds == 183907
        assert (diff.remainder_hours, diff.remainder_minutes, diff.remainder_seconds) == (3, 5, 7)
        assert diff.summary == "2 days 3 hours 5 minutes 7 seconds"

    def test_reversed_order_negates(self):
        """Swapping start and end negates every numeric field.

        Implementation: Compares difference(a, b) with difference(b, a).
        Passing implies: Negative durations truncate toward zero symmetrically.
        """
        forward = time_service.difference("2023-12-21 10:00:00", "2023-12-23 13:05:07")
        backward = time_service.difference("2023-12-23 13:05:07", "2023-12-21 10:00:00")
        for field in (
            "days",
            "hours",
            "minutes",
            "seconds",
            "milliseconds",
            "remainder_hours",
            "remainder_minutes",
            "remainder_seconds",
        ):
            assert getattr(backward, field) == -getattr(forward, field)
        assert backward.summary == "-2 days -3 hours -5 minutes -7 seconds"

    def test_crosses_leap_day(self):
        """Differences use the real calendar, including Feb 29.

        Implementation: Spans Feb 28 to Mar 1 in a leap year.
        Passing implies: Day counts follow the calendar, not a 30-day month.
        """
        assert time_service.difference("2024-02-28 00:00:00", "2024-03-01 00:00:00").days == 2

    def test_invalid_input(self):
        """Either bad endpoint raises InvalidTimeFormat.

        Implementation: Passes one malformed value on each side.
        Passing implies: No partial result is produced.
        """
        with pytest.raises(InvalidTimeFormat):
            time_service.difference("yesterday", "2023-12-21 10:00:00")
        with pytest.raises(InvalidTimeFormat):
            time_service.difference("2023-12-21 10:00:00", "2023/12/21 10:00:00")


class TestAdd:
    @pytest.mark.parametrize(
        ("base", "amount", "unit", "expected"),
        [
            ("2023-12-21 10:00:00", 5, "days", "2023-12-26 10:00:00"),
            ("2023-12-21 10:00:00", -3, "hours", "2023-12-21 07:00:00"),
            ("2023-12-21 10:00:00", 1, "day", "2023-12-22 10:00:00"),
            ("2023-12-31 23:59:30", 45, "seconds", "2024-01-01 00:00:15"),
            ("2023-12-21 10:00:00", 90, "Minutes", "2023-12-21 11:30:00"),
            ("2023-12-21 10:00:00", 2, " YEARS ", "2025-12-21 10:00:00"),
            ("2023-12-15 10:00:00", 13, "months", "2025-01-15 10:00:00"),
            ("2024-01-15 10:00:00", -2, "month", "2023-11-15 10:00:00"),
            ("2023-12-21 10:00:00", 0, "hour", "2023-12-21 10:00:00"),
        ],
    )
    def test_units(self, base, amount, unit, expected):
        """Every supported unit adds or subtracts, case-insensitively.

        Implementation: Exercises singular, plural, mixed-case and negative amounts.
        Passing implies: Unit parsing and calendar arithmetic work together.
        """
        assert time_service.add(base, amount, unit) == expected

    @pytest.mark.parametrize(
        ("base", "amount", "unit", "expected"),
        [
            ("2024-01-31 08:00:00", 1, "months", "2024-02-29 08:00:00"),
            ("2023-01-31 08:00:00", 1, "months", "2023-02-28 08:00:00"),
            ("2024-03-31 08:00:00", -1, "months", "2024-02-29 08:00:00"),
            ("2024-02-29 08:00:00", 1, "years", "2025-02-28 08:00:00"),
            ("2024-02-29 08:00:00", 4, "years", "2028-02-29 08:00:00"),
        ],
    )
    def test_month_overflow_clamps(self, base, amount, unit, expected):
        """Month and year arithmetic clamps to the last day of the target month.

        Implementation: Adds months/years to month-end and leap-day dates.
        Passing implies: The day-overflow rule is clamping, not rolling into the next month.
        """
        assert time_service.add(base, amount, unit) == expected

    @pytest.mark.parametrize("unit", ["weeks", "fortnight", "", "ms"])
    def test_unsupported_unit(self, unit):
        """Units outside years..seconds raise UnsupportedUnit.

        Implementation: Passes unknown unit names.
        Passing implies: Unknown units are rejected with a typed failure.
        """
        with pytest.raises(UnsupportedUnit, match="Unsupported time unit"):
            time_service.add("2023-12-21 10:00:00", 1, unit)

    def test_bad_base(self):
        """An unparseable base raises InvalidTimeFormat.

        Implementation: Passes an ISO 'T'-separated timestamp.
        Passing implies: Base parsing uses the fixed layout only.
        """
        with pytest.raises(InvalidTimeFormat):
            time_service.add("2023-12-21T10:00:00", 1, "days")

    @pytest.mark.parametrize(("amount", "unit"), [(1, "seconds"), (1, "years"), (1, "months"), (10**10, "days")])
    def test_out_of_range_result(self, amount, unit):
        """Results past year 9999 raise InvalidTimeFormat.

        Implementation: Adds to the last representable second.
        Passing implies: Overflow never escapes as a raw OverflowError.
        """
        with pytest.raises(InvalidTimeFormat):
            time_service.add("9999-12-31 23:59:59", amount, unit)


class TestFormatTime:
    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("yyyy年MM月dd日", "2023年12月21日"),
            ("MM/dd/yyyy", "12/21/2023"),
            ("HH:mm:ss", "15:04:05"),
            ("yy-M-d H:m:s", "23-12-21 15:4:5"),
            ("EEEE, MMMM d", "Thursday, December 21"),
            ("EEE dd MMM", "Thu 21 Dec"),
            ("hh:mm a", "03:04 PM"),
            ("'Day' D 'of' yyyy", "Day 355 of 2023"),
            ("HH 'o''clock'", "15 o'clock"),
            ("''yyyy''", "'2023'"),
            ("HH:mm:ss.SSS", "15:04:05.000"),
            ("yyyy-MM-dd HH:mm:ss", "2023-12-21 15:04:05"),
            ("", ""),
            ("yyyy-MM-dd QQ", "2023-12-21 04"),
            ("QQQ yyyy", "Q4 2023"),
            ("QQQQ", "4th quarter"),
            ("qqqqq", "4"),
            ("MMMMM", "D"),
            ("LLLL", "December"),
            ("EEEEE", "T"),
            ("e ee eee", "4 04 Thu"),
            ("cccc", "Thursday"),
            ("k:mm", "15:04"),
            ("K:mm a", "3:04 PM"),
            ("G yyyy", "AD 2023"),
            ("GGGG", "Anno Domini"),
            ("GGGGG", "A"),
            ("'week' w", "week 51"),
            ("ss.nnn", "05.000"),
            ("yyyy[-MM[-dd]]", "2023-12-21"),
        ],
    )
    def test_patterns(self, pattern, expected):
        """Letter patterns render each field; quoted text and symbols pass through.

        Implementation: Formats one afternoon time with assorted patterns.
        Passing implies: Field widths, names, quarters, eras, narrow forms, 12/24-hour clocks and quoting all work.
        """
        assert time_service.format_time("2023-12-21 15:04:05", pattern) == expected

    def test_midnight_in_twelve_hour_clock(self):
        """Hour 0 renders as 12 AM in the 12-hour clock.

        Implementation: Formats 00:30 with hh and a.
        Passing implies: The 12-hour mapping handles midnight.
        """
        assert time_service.format_time("2023-12-21 00:30:00", "h:mm a") == "12:30 AM"

    def test_midnight_in_alternate_hour_fields(self):
        """Hour 0 is 24 in the 1-24 clock and 0 in the 0-11 clock.

        Implementation: Formats 00:30 with k and K.
        Passing implies: Both alternate hour fields map midnight correctly.
        """
        assert time_service.format_time("2023-12-21 00:30:00", "k K") == "24 0"

    def test_quarter_of_early_month(self):
        """March is in the first quarter and April in the second.

        Implementation: Formats dates on either side of the quarter boundary.
        Passing implies: Quarters split the year in three-month blocks.
        """
        assert time_service.format_time("2023-03-31 00:00:00", "QQQQ") == "1st quarter"
        assert time_service.format_time("2023-04-01 00:00:00", "QQQ") == "Q2"

    @pytest.mark.parametrize(
        "pattern",
        [
            "yyyy-MM-dd bb",
            "'unterminated",
            "MMMMMM",
            "EEEEEE",
            "QQQQQQ",
            "ddd",
            "aa",
            "cc",
            "yyyy#",
            "{yyyy}",
            "yyyy]",
        ],
    )
    def test_invalid_pattern(self, pattern):
        """Unknown letters, over-long fields, reserved characters and unbalanced quotes or brackets raise InvalidTimeFormat.

        Implementation: Passes malformed patterns.
        Passing implies: Invalid patterns fail instead of rendering garbage.
        """
        with pytest.raises(InvalidTimeFormat):
            time_service.format_time("2023-12-21 15:04:05", pattern)

    def test_invalid_base(self):
        """An unparseable base raises InvalidTimeFormat before the pattern is used.

        Implementation: Passes a date without a time.
        Passing implies: format_time validates its input like every other operation.
        """
        with pytest.raises(InvalidTimeFormat):
            time_service.format_time("2023-12-21", "yyyy")
