'''
Service Exception (blackout period) API Models
'''
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from ..common.datetime_utils import to_naive_utc
from .availability import CamelModel


class ServiceExceptionWrite(CamelModel):
    """
    Payload for creating or replacing an exception.
    When recurring_yearly is set only the month/day of the bounds matter.
    """
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date_time: datetime
    end_date_time: datetime
    exception_type: str = Field(..., min_length=1, max_length=64, description="e.g. Unavailable, Holiday, Break, Maintenance")
    recurring_yearly: bool = False

    @field_validator('start_date_time', 'end_date_time', mode='after')
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Offset-aware input is stored as the same instant in naive UTC."""
        return to_naive_utc(v)

    @model_validator(mode='after')
    def validate_interval(self) -> 'ServiceExceptionWrite':
        if self.end_date_time < self.start_date_time:
            raise ValueError('endDateTime cannot be earlier than startDateTime')
        return self


class ServiceExceptionRead(CamelModel):
    id: UUID
    title: str
    description: Optional[str] = None
    start_date_time: datetime
    end_date_time: datetime
    exception_type: str
    recurring_yearly: bool
