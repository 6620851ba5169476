'''
Resolves slot availability against a service's exceptions (blackout periods).
'''
from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from ..common.datetime_utils import to_naive_utc
from ..common.logger import log
from .slot_generator import Slot


class ExceptionWindow(BaseModel):
    """
    The fields of a service exception the filter needs.
    For yearly exceptions only the month and day of each bound are significant.
    """
    id: Optional[UUID] = None
    title: Optional[str] = None
    start_date_time: datetime
    end_date_time: datetime
    recurring_yearly: bool = False

    model_config = ConfigDict(from_attributes=True)

    @field_validator('start_date_time', 'end_date_time', mode='after')
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


def project_onto_year(moment: datetime, year: int) -> datetime:
    """
    Midnight of `moment`'s month/day in `year`.
    Feb 29 falls back to Feb 28 in non-leap years.
    """
    try:
        return datetime(year, moment.month, moment.day)
    except ValueError:
        return datetime(year, moment.month, moment.day - 1)


def starts_within_one_off(slot_start: datetime, exception: ExceptionWindow) -> bool:
    return exception.start_date_time <= slot_start <= exception.end_date_time


def starts_within_yearly(slot_start: datetime, exception: ExceptionWindow) -> bool:
    """
    Projects the exception onto the slot's year and tests the slot start.
    A span that crosses New Year (e.g. Dec 20 -> Jan 5) projects to an
    inverted range and never matches; see starts_within_yearly_wrapping.
    """
    projected_start = project_onto_year(exception.start_date_time, slot_start.year)
    projected_end = project_onto_year(exception.end_date_time, slot_start.year)
    return projected_start <= slot_start <= projected_end


def starts_within_yearly_wrapping(slot_start: datetime, exception: ExceptionWindow) -> bool:
    """
    Year-boundary aware variant of starts_within_yearly: an inverted projected
    range is read as [start, Dec 31] + [Jan 1, end] of the slot's year.
    """
    projected_start = project_onto_year(exception.start_date_time, slot_start.year)
    projected_end = project_onto_year(exception.end_date_time, slot_start.year)
    if projected_start <= projected_end:
        return projected_start <= slot_start <= projected_end
    return slot_start >= projected_start or slot_start <= projected_end


class ExceptionFilter:
    """
    Marks each slot available or not. Only the slot's start instant is tested,
    so a slot that begins before an exception and runs into it stays available.

    Returns new Slot objects in input order; the inputs are never mutated.
    """
    def __init__(self, year_wraparound: bool = False):
        self.year_wraparound = year_wraparound
        self._yearly_test = starts_within_yearly_wrapping if year_wraparound else starts_within_yearly

    def is_blocked(self, slot_start: datetime, exceptions: list[ExceptionWindow]) -> bool:
        slot_start = to_naive_utc(slot_start)
        for exception in exceptions:
            if exception.recurring_yearly:
                if self._yearly_test(slot_start, exception):
                    return True
            elif starts_within_one_off(slot_start, exception):
                return True
        return False

    def apply(self, slots: Iterable[Any], exceptions: Iterable[Any]) -> list[Slot]:
        windows = [
            e if isinstance(e, ExceptionWindow) else ExceptionWindow.model_validate(e)
            for e in exceptions
        ]

        filtered = []
        for raw_slot in slots:
            slot = raw_slot if isinstance(raw_slot, Slot) else Slot.model_validate(raw_slot)
            is_available = not self.is_blocked(slot.start_date_time, windows)
            filtered.append(slot.model_copy(update={"is_available": is_available}))

        blocked = sum(1 for s in filtered if not s.is_available)
        log.debug(f"Exception filter: {blocked}/{len(filtered)} slots blocked by {len(windows)} exceptions.")
        return filtered


def filter_slots_by_exceptions(
    slots: Iterable[Any],
    exceptions: Iterable[Any],
    year_wraparound: bool = False
) -> list[Slot]:
    """Module-level shortcut for ExceptionFilter(year_wraparound).apply(...)."""
    return ExceptionFilter(year_wraparound=year_wraparound).apply(slots, exceptions)


def only_available(slots: Iterable[Slot]) -> list[Slot]:
    """The public projection: available slots only, earliest first."""
    return sorted((s for s in slots if s.is_available), key=lambda s: s.start_date_time)
