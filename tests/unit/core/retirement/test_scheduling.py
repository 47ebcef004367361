from datetime import date, datetime, timedelta, timezone

import pytest

from core.config_loader import RetirementConfig
from core.retirement import AdvisorCalendar
from core.retirement.scheduling import slot_key, to_utc

DAY = date(2026, 11, 2)


class TestAdvisorCalendar:

    @pytest.fixture
    def calendar(self):
        return AdvisorCalendar()

    def test_default_day_has_sixteen_half_hour_slots(self, calendar):
        slots = calendar.slot_times(DAY)

        assert len(slots) == 16
        assert slots[0] == datetime(2026, 11, 2, 9, 0, tzinfo=timezone.utc)
        assert slots[-1] == datetime(2026, 11, 2, 16, 30, tzinfo=timezone.utc)

    def test_slot_labels(self, calendar):
        labels = [s.time for s in calendar.time_slots(DAY, [])]

        assert labels[:3] == ["9:00", "9:30", "10:00"]
        assert labels[-1] == "16:30"

    def test_booked_slots_marked_unavailable(self, calendar):
        booked = [datetime(2026, 11, 2, 10, 0)]  # naive values read back from SQLite

        slots = {s.time: s.available for s in calendar.time_slots(DAY, booked)}

        assert slots["10:00"] is False
        assert slots["10:30"] is True

    def test_booking_in_other_timezone_matches_utc_slot(self, calendar):
        eastern = timezone(timedelta(hours=-5))
        booked = [datetime(2026, 11, 2, 9, 30, tzinfo=eastern)]  # 14:30 UTC

        slots = {s.time: s.available for s in calendar.time_slots(DAY, booked)}

        assert slots["14:30"] is False

    def test_custom_hours_and_slot_length(self):
        calendar = AdvisorCalendar(RetirementConfig(
            advisor_day_start_hour=8, advisor_day_end_hour=10, slot_minutes=60,
        ))

        assert [s.hour for s in calendar.slot_times(DAY)] == [8, 9]

    @pytest.mark.parametrize("value,expected", [
        (datetime(2026, 11, 2, 9, 0, tzinfo=timezone.utc), True),
        (datetime(2026, 11, 2, 16, 30, tzinfo=timezone.utc), True),
        (datetime(2026, 11, 2, 17, 0, tzinfo=timezone.utc), False),
        (datetime(2026, 11, 2, 8, 30, tzinfo=timezone.utc), False),
        (datetime(2026, 11, 2, 9, 15, tzinfo=timezone.utc), False),
        (datetime(2026, 11, 2, 9, 0, 30, tzinfo=timezone.utc), False),
        (datetime(2026, 11, 2, 11, 0), True),
    ])
    def test_is_valid_slot(self, calendar, value, expected):
        assert calendar.is_valid_slot(value) is expected


class TestUtcHelpers:

    def test_naive_values_are_treated_as_utc(self):
        assert to_utc(datetime(2026, 1, 1, 12, 0)) == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_aware_values_are_converted(self):
        tokyo = timezone(timedelta(hours=9))
        assert to_utc(datetime(2026, 1, 1, 21, 0, tzinfo=tokyo)).hour == 12

    def test_slot_key_drops_seconds_and_tz(self):
        key = slot_key(datetime(2026, 1, 1, 12, 0, 45, 10, tzinfo=timezone.utc))
        assert key == datetime(2026, 1, 1, 12, 0)
