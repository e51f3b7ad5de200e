"""Tests for availability parsing and time validation."""

import pytest

from toltimed.schemas.practitioner_schema import DateSlots
from toltimed.wizard.availability import (
    ParsedRange,
    TimeSelector,
    Unparsed,
    available_slots,
    parse_availability_range,
    parse_clock_time,
    validate_time,
)
from tests.conftest import make_practitioner


class TestParseAvailabilityRange:
    def test_simple_range(self):
        assert parse_availability_range("9am-5pm") == ParsedRange(start=540, end=1020)

    def test_case_and_whitespace(self):
        assert parse_availability_range(" 9AM - 5PM ") == ParsedRange(start=540, end=1020)

    def test_twelve_am_is_midnight(self):
        assert parse_availability_range("12am-6am") == ParsedRange(start=0, end=360)

    def test_twelve_pm_is_noon(self):
        assert parse_availability_range("12pm-1pm") == ParsedRange(start=720, end=780)

    def test_minutes_in_endpoint(self):
        assert parse_availability_range("9:30am-11:15am") == ParsedRange(start=570, end=675)

    @pytest.mark.parametrize("text", ["weekdays", "9-5", "13pm-5pm", "9am to 5pm", ""])
    def test_unparseable_is_tagged(self, text):
        assert parse_availability_range(text) == Unparsed(text)


class TestParseClockTime:
    @pytest.mark.parametrize("value,expected", [
        ("10:00", 600), ("00:00", 0), ("23:59", 1439), ("9:05", 545),
        ("2:30pm", 870), ("12am", 0), ("10:00:00", 600),
    ])
    def test_parses(self, value, expected):
        assert parse_clock_time(value) == expected

    @pytest.mark.parametrize("value", ["", "25:00", "10:61", "noon", "13pm"])
    def test_rejects(self, value):
        assert parse_clock_time(value) is None


class TestValidateTime:
    def test_inside_range_is_valid(self):
        check = validate_time("10:00", make_practitioner(("9am-5pm",)))
        assert check.valid
        assert check.error is None

    def test_outside_range_lists_availability(self):
        check = validate_time("18:00", make_practitioner(("9am-5pm",)))
        assert not check.valid
        assert "9am-5pm" in check.error

    def test_range_is_inclusive(self):
        practitioner = make_practitioner(("9am-5pm",))
        assert validate_time("09:00", practitioner).valid
        assert validate_time("17:00", practitioner).valid

    def test_no_availability_accepts_anything(self):
        assert validate_time("03:00", make_practitioner(())).valid

    def test_any_entry_may_accept(self):
        practitioner = make_practitioner(("8am-10am", "6pm-9pm"))
        assert validate_time("19:30", practitioner).valid

    def test_unparseable_entry_is_skipped(self):
        practitioner = make_practitioner(("mornings only", "1pm-3pm"))
        assert validate_time("14:00", practitioner).valid

    def test_only_unparseable_entries_reject_with_all_listed(self):
        practitioner = make_practitioner(("mornings only", "call first"))
        check = validate_time("10:00", practitioner)
        assert not check.valid
        assert "mornings only" in check.error
        assert "call first" in check.error

    def test_unparseable_candidate_is_invalid_not_error(self):
        check = validate_time("whenever", make_practitioner(("9am-5pm",)))
        assert not check.valid

    def test_date_slots_match_exact_time(self):
        practitioner = make_practitioner((DateSlots(date="2026-10-20", slots=("08:00", "14:00")),))
        assert validate_time("14:00", practitioner).valid
        check = validate_time("15:00", practitioner)
        assert not check.valid
        assert "2026-10-20: 08:00, 14:00" in check.error

    def test_mixed_entries(self):
        practitioner = make_practitioner(
            (DateSlots(date="2026-10-20", slots=("08:00",)), "6pm-10pm")
        )
        assert validate_time("08:00", practitioner).valid
        assert validate_time("21:00", practitioner).valid
        assert not validate_time("12:00", practitioner).valid


class TestAvailableSlots:
    def test_first_dated_entry(self):
        practitioner = make_practitioner((
            "9am-5pm",
            DateSlots(date="2026-10-20", slots=("08:00", "10:00")),
            DateSlots(date="2026-10-21", slots=("12:00",)),
        ))
        assert available_slots(practitioner) == ["08:00", "10:00"]

    def test_no_dated_entries(self):
        assert available_slots(make_practitioner(("9am-5pm",))) == []


class TestTimeSelector:
    def test_writes_through_to_schedule(self, configurator):
        selector = TimeSelector(configurator)
        selector.select(" 10:00 ")
        assert configurator.config.time_slot == "10:00"
        assert selector.can_continue()

    def test_nothing_selected(self, configurator):
        selector = TimeSelector(configurator)
        assert not selector.can_continue()
        assert not selector.check(make_practitioner()).valid

    def test_mismatch_warns_but_does_not_block(self, configurator):
        selector = TimeSelector(configurator)
        selector.select("18:00")
        assert not selector.check(make_practitioner(("9am-5pm",))).valid
        assert selector.can_continue()
