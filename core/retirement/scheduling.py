"""
Advisor calendar: half-hour consultation slots during advisor hours.

All appointment times are handled in UTC. Slots for a day start at
`advisor_day_start_hour` and the last slot starts `slot_minutes` before
`advisor_day_end_hour`.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Set

from core.config_loader import RetirementConfig


@dataclass
class TimeSlot:
    time: str  # "H:MM", e.g. "9:00", "14:30"
    available: bool
    date_time: datetime


def to_utc(dt: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are assumed to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def slot_key(dt: datetime) -> datetime:
    """Naive UTC key used to compare booked times regardless of driver tz handling."""
    return to_utc(dt).replace(tzinfo=None, second=0, microsecond=0)


class AdvisorCalendar:

    def __init__(self, config: Optional[RetirementConfig] = None):
        self.config = config or RetirementConfig()

    def slot_times(self, day: date) -> List[datetime]:
        start = datetime.combine(day, time(hour=self.config.advisor_day_start_hour), tzinfo=timezone.utc)
        end = datetime.combine(day, time(0), tzinfo=timezone.utc) + timedelta(hours=self.config.advisor_day_end_hour)
        step = timedelta(minutes=self.config.slot_minutes)

        slots = []
        current = start
        while current + step <= end:
            slots.append(current)
            current += step
        return slots

    def time_slots(self, day: date, booked: Iterable[datetime]) -> List[TimeSlot]:
        """List every slot on `day`, marking the ones already booked as unavailable."""
        booked_keys: Set[datetime] = {slot_key(b) for b in booked}
        return [
            TimeSlot(
                time=f"{slot.hour}:{slot.minute:02d}",
                available=slot_key(slot) not in booked_keys,
                date_time=slot,
            )
            for slot in self.slot_times(day)
        ]

    def is_valid_slot(self, dt: datetime) -> bool:
        """True when `dt` falls exactly on a slot boundary within advisor hours."""
        utc = to_utc(dt)
        return any(slot_key(s) == slot_key(utc) and utc.second == 0 and utc.microsecond == 0
                   for s in self.slot_times(utc.date()))
