'''
Service and Sharable Link API Models
'''
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from ..database.db_enums import DurationUnit
from .availability import CamelModel, AvailableSlotRead


class ServiceCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    provider_name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    duration_unit: DurationUnit = DurationUnit.MINUTES
    business_name: Optional[str] = None


class ServiceUpdate(CamelModel):
    """
    All fields are optional to allow for partial updates.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    provider_name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    duration_unit: Optional[DurationUnit] = None
    business_name: Optional[str] = None


class ServiceRead(CamelModel):
    id: UUID
    title: str
    provider_name: str
    description: Optional[str] = None
    duration: Optional[int] = None
    duration_unit: DurationUnit
    business_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    sharable_token: Optional[str] = None


class SharableLinkRead(CamelModel):
    token: str
    public_url: str
    created_at: datetime


class PublicServiceRead(CamelModel):
    """
    What an anonymous visitor sees through a sharable link:
    the service details and its available slots, earliest first.
    """
    title: str
    description: Optional[str] = None
    duration: Optional[int] = None
    provider_name: str
    business_name: Optional[str] = None
    available_slots: list[AvailableSlotRead] = Field(default_factory=list)
