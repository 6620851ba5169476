'''
Expands an availability pattern (a recurrence rule) into concrete slots.
'''
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Optional, Union
from uuid import UUID, uuid4

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.datetime_utils import to_naive_utc, utc_now
from ..common.logger import log
from ..database.db_enums import SlotType

ALL_DAYS_OF_WEEK = frozenset(range(7))  # 0=Sunday .. 6=Saturday
END_OF_DAY = timedelta(hours=24)


# --- Value Models ---

class AvailabilityRule(BaseModel):
    """
    The subset of an availability pattern the generator reads.
    Built straight from a db_models.AvailabilityPatterns row or an API payload.
    """
    id: Optional[UUID] = None
    service_id: Optional[UUID] = None
    slot_type: str
    slot_duration: int
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    days_of_week: Optional[Union[str, list[Union[int, str]]]] = None
    start_date: date
    end_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class Slot(BaseModel):
    """
    One concrete bookable interval derived from a pattern.
    is_available is advisory: the exception filter recomputes it on every read.
    """
    id: UUID = Field(default_factory=uuid4)
    service_id: Optional[UUID] = None
    pattern_id: Optional[UUID] = None
    start_date_time: datetime
    end_date_time: datetime
    slot_type: str
    is_available: bool = True
    created_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(from_attributes=True)

    @field_validator('start_date_time', 'end_date_time', mode='after')
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    def __str__(self) -> str:
        state = "available" if self.is_available else "blocked"
        return f"{self.slot_type} {self.start_date_time:%Y-%m-%d %H:%M} -> {self.end_date_time:%Y-%m-%d %H:%M} ({state})"


# --- Helpers ---

def parse_days_of_week(raw: Optional[Union[str, list[Union[int, str]]]]) -> frozenset[int]:
    """
    Turns '1,2,3,4,5' (or a list) into a set of Sunday-based weekday indexes.
    Entries that are not integers in 0..6 are dropped; if nothing usable is
    left, every day of the week is allowed.
    """
    if raw is None:
        return ALL_DAYS_OF_WEEK

    entries = raw.split(',') if isinstance(raw, str) else raw
    days = set()
    for entry in entries:
        try:
            day = int(str(entry).strip())
        except ValueError:
            continue
        if day in ALL_DAYS_OF_WEEK:
            days.add(day)

    return frozenset(days) if days else ALL_DAYS_OF_WEEK


def sunday_based_weekday(day: date) -> int:
    """Python counts Monday as 0; patterns count Sunday as 0."""
    return (day.weekday() + 1) % 7


def start_of_week(day: date) -> date:
    """The Sunday on or before `day`."""
    return day - timedelta(days=sunday_based_weekday(day))


def _time_to_offset(value: Optional[time], default: timedelta) -> timedelta:
    if value is None:
        return default
    return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second)


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return to_naive_utc(value)
    return datetime.combine(value, time.min)


def default_generation_window(
    pattern: Any,
    months_ahead: int = 3,
    now: Optional[datetime] = None
) -> tuple[datetime, datetime]:
    """
    The window a pattern is expanded over when the caller does not pass one:
    [start_date, end_date], or [start_date, now + months_ahead calendar months]
    for open-ended patterns.
    """
    now = to_naive_utc(now) or utc_now()
    window_start = _as_datetime(pattern.start_date)
    if pattern.end_date is not None:
        window_end = _as_datetime(pattern.end_date)
    else:
        window_end = now + relativedelta(months=months_ahead)
    return window_start, window_end


# --- Generator ---

class SlotGenerator:
    """
    Pure expansion of a pattern into slots, one strategy per SlotType.
    Never touches the database; the same pattern and window always yield the
    same start/end/type sequence (ids and created_at are fresh each call).
    """
    def __init__(self):
        self._strategies: dict[SlotType, Callable[[AvailabilityRule, datetime, datetime], list[Slot]]] = {
            SlotType.MINUTE: self._generate_time_of_day_slots,
            SlotType.HOUR: self._generate_time_of_day_slots,
            SlotType.DAY: self._generate_daily_slots,
            SlotType.WEEK: self._generate_weekly_slots,
            SlotType.MONTH: self._generate_monthly_slots,
        }

    def generate(
        self,
        pattern: Any,
        window_start: Union[date, datetime],
        window_end: Union[date, datetime]
    ) -> list[Slot]:
        """
        Expands `pattern` over [window_start, window_end].
        An unrecognised slot type is not an error: it yields no slots.
        """
        rule = pattern if isinstance(pattern, AvailabilityRule) else AvailabilityRule.model_validate(pattern)

        slot_type = SlotType.parse(rule.slot_type)
        if slot_type is None:
            log.debug(f"Unknown slot type '{rule.slot_type}' for pattern {rule.id}; no slots generated.")
            return []

        strategy = self._strategies[slot_type]
        slots = strategy(rule, _as_datetime(window_start), _as_datetime(window_end))
        log.debug(f"Generated {len(slots)} {slot_type.value} slots for pattern {rule.id}.")
        return slots

    def _new_slot(self, rule: AvailabilityRule, start: datetime, end: datetime) -> Slot:
        return Slot(
            service_id=rule.service_id,
            pattern_id=rule.id,
            start_date_time=start,
            end_date_time=end,
            slot_type=rule.slot_type,
        )

    def _generate_time_of_day_slots(self, rule: AvailabilityRule, window_start: datetime, window_end: datetime) -> list[Slot]:
        """
        Minute and Hour patterns: step slot_duration minutes from start_time to
        end_time on every allowed weekday. A slot that would run past end_time
        is dropped, never truncated.
        """
        if rule.slot_duration <= 0:
            log.debug(f"Pattern {rule.id} has non-positive slot_duration {rule.slot_duration}; no slots generated.")
            return []

        slots = []
        allowed_days = parse_days_of_week(rule.days_of_week)
        step = timedelta(minutes=rule.slot_duration)
        day_start_offset = _time_to_offset(rule.start_time, timedelta(0))
        day_end_offset = _time_to_offset(rule.end_time, END_OF_DAY)

        current_date = window_start.date()
        last_date = window_end.date()
        while current_date <= last_date:
            if sunday_based_weekday(current_date) in allowed_days:
                midnight = datetime.combine(current_date, time.min)
                cursor = day_start_offset
                while cursor < day_end_offset:
                    slot_end_offset = cursor + step
                    if slot_end_offset <= day_end_offset:
                        slots.append(self._new_slot(rule, midnight + cursor, midnight + slot_end_offset))
                    cursor += step
            current_date += timedelta(days=1)

        return slots

    def _generate_daily_slots(self, rule: AvailabilityRule, window_start: datetime, window_end: datetime) -> list[Slot]:
        """One all-day slot per date; days_of_week does not apply."""
        slots = []
        current_date = window_start.date()
        last_date = window_end.date()
        while current_date <= last_date:
            day_start = datetime.combine(current_date, time.min)
            slots.append(self._new_slot(rule, day_start, day_start + timedelta(days=1) - timedelta(seconds=1)))
            current_date += timedelta(days=1)
        return slots

    def _generate_weekly_slots(self, rule: AvailabilityRule, window_start: datetime, window_end: datetime) -> list[Slot]:
        """One slot per Sunday-anchored week, starting with the week containing window_start."""
        slots = []
        week_start = datetime.combine(start_of_week(window_start.date()), time.min)
        while week_start <= window_end:
            week_end = week_start + timedelta(days=6, hours=23, minutes=59, seconds=59)
            slots.append(self._new_slot(rule, week_start, week_end))
            week_start += timedelta(days=7)
        return slots

    def _generate_monthly_slots(self, rule: AvailabilityRule, window_start: datetime, window_end: datetime) -> list[Slot]:
        """One slot per calendar month, from the month of window_start."""
        slots = []
        month_start = datetime(window_start.year, window_start.month, 1)
        while month_start <= window_end:
            next_month_start = month_start + relativedelta(months=1)
            slots.append(self._new_slot(rule, month_start, next_month_start - timedelta(seconds=1)))
            month_start = next_month_start
        return slots


def generate_slots(
    pattern: Any,
    window_start: Union[date, datetime],
    window_end: Union[date, datetime]
) -> list[Slot]:
    """Module-level shortcut for SlotGenerator().generate(...)."""
    return SlotGenerator().generate(pattern, window_start, window_end)
