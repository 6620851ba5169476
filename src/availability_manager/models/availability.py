'''
Availability Pattern and Slot API Models
'''
from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..database.db_enums import SlotType


class CamelModel(BaseModel):
    """
    Base for every API model: snake_case in Python, camelCase on the wire.
    Both spellings are accepted on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- API Write Models (Input) ---

class AvailabilityPatternWrite(CamelModel):
    """
    Payload for creating or replacing an availability pattern.
    Every create/update regenerates the pattern's slots.
    """
    slot_type: str = Field(..., min_length=1, description=f"One of {', '.join(SlotType.get_all_names())} (case-insensitive).")
    slot_duration: int = Field(..., gt=0, description="Slot length in minutes (Minute/Hour types).")
    start_time: Optional[time] = Field(None, description="Daily start, defaults to 00:00.")
    end_time: Optional[time] = Field(None, description="Daily end, defaults to 24:00.")
    days_of_week: Optional[str] = Field(None, description="Comma-separated, 0=Sunday..6=Saturday, e.g. '1,2,3,4,5'.")
    start_date: date
    end_date: Optional[date] = None

    @model_validator(mode='after')
    def validate_bounds(self) -> 'AvailabilityPatternWrite':
        """
        Rejects degenerate patterns here, since the generator itself would
        silently expand them to zero slots.
        """
        if self.start_time is not None and self.end_time is not None:
            if self.start_time > self.end_time:
                raise ValueError('startTime cannot be later than endTime')
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError('endDate cannot be earlier than startDate')
        return self


# --- API Read Models (Output) ---

class AvailabilityPatternRead(CamelModel):
    id: UUID
    slot_type: str
    slot_duration: int
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    days_of_week: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None


class AvailableSlotRead(CamelModel):
    """A concrete slot as returned to clients, availability already resolved."""
    id: UUID
    start_date_time: datetime
    end_date_time: datetime
    slot_type: str
    is_available: bool
