'''
Availability Service
'''
from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.db_enums import SlotType
from ..models import availability as availability_models
from ..core.slot_generator import AvailabilityRule, Slot, SlotGenerator, default_generation_window
from ..core.exception_filter import ExceptionFilter
from ..common.config import settings
from ..common.datetime_utils import to_naive_utc
from ..common.exceptions import PatternNotFoundError, ServiceNotFoundError
from ..common.logger import log
from .service_management_service import ServiceManagementService
from .exception_service import ExceptionService


class AvailabilityService:
    """
    Service for availability patterns and the slots they expand into.
    Slots are derived data: every pattern write deletes and regenerates them,
    and their availability is re-resolved against exceptions on every read.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)],
        exception_service: Annotated[ExceptionService, Depends(ExceptionService)]
    ):
        self.db = db
        self.service_management = service_management
        self.exception_service = exception_service
        self.slot_generator = SlotGenerator()
        self.exception_filter = ExceptionFilter(year_wraparound=settings.YEARLY_EXCEPTION_WRAPAROUND)

    # --- Internal Fetchers ---

    async def _get_pattern_by_id_internal(self, pattern_id: UUID, service_id: Optional[UUID] = None) -> db_models.AvailabilityPatterns:
        stmt = select(db_models.AvailabilityPatterns).filter(
            db_models.AvailabilityPatterns.id == pattern_id,
            db_models.AvailabilityPatterns.is_active.is_(True)
        )
        if service_id is not None:
            stmt = stmt.filter(db_models.AvailabilityPatterns.service_id == service_id)

        result = await self.db.execute(stmt)
        pattern = result.scalars().first()
        if not pattern:
            log.warning(f"Tried to fetch non-existing pattern {pattern_id} (service {service_id})")
            raise PatternNotFoundError(f"Availability pattern {pattern_id} not found.")
        return pattern

    # --- Slot Generation ---

    async def _replace_slots(self, pattern: db_models.AvailabilityPatterns) -> int:
        """
        Delete-then-recreate of a pattern's slots over its default window.
        Returns the number of slots created.
        """
        await self.db.execute(
            delete(db_models.AvailableSlots).where(db_models.AvailableSlots.pattern_id == pattern.id)
        )

        rule = AvailabilityRule.model_validate(pattern)
        if SlotType.parse(rule.slot_type) is None:
            log.warning(f"Pattern {pattern.id} has unknown slot type '{rule.slot_type}' "
                        f"(expected one of {SlotType.get_all_names()}); it yields no slots.")
        window_start, window_end = default_generation_window(rule, months_ahead=settings.SLOT_GENERATION_MONTHS)
        slots = self.slot_generator.generate(rule, window_start, window_end)

        self.db.add_all([db_models.AvailableSlots(**slot.model_dump()) for slot in slots])
        await self.db.flush()
        log.info(f"Generated {len(slots)} slots for pattern {pattern.id} over {window_start:%Y-%m-%d}..{window_end:%Y-%m-%d}.")
        return len(slots)

    async def regenerate_slots(self, pattern_id: UUID) -> int:
        """Rebuilds the slots of one pattern. Raises PatternNotFoundError if it is gone."""
        pattern = await self._get_pattern_by_id_internal(pattern_id)
        return await self._replace_slots(pattern)

    # --- Pattern CRUD (API-Facing) ---

    async def get_patterns_for_api(self, service_id: UUID) -> list[availability_models.AvailabilityPatternRead]:
        log.info(f"Fetching availability patterns for service {service_id}.")
        await self.service_management.get_service_by_id_internal(service_id)

        stmt = select(db_models.AvailabilityPatterns).filter(
            db_models.AvailabilityPatterns.service_id == service_id,
            db_models.AvailabilityPatterns.is_active.is_(True)
        ).order_by(db_models.AvailabilityPatterns.created_at)
        result = await self.db.execute(stmt)
        return [availability_models.AvailabilityPatternRead.model_validate(p) for p in result.scalars().all()]

    async def create_pattern_for_api(
        self,
        service_id: UUID,
        data: availability_models.AvailabilityPatternWrite
    ) -> availability_models.AvailabilityPatternRead:
        log.info(f"Creating {data.slot_type} pattern for service {service_id}.")
        try:
            await self.service_management.get_service_by_id_internal(service_id)

            new_pattern = db_models.AvailabilityPatterns(service_id=service_id, **data.model_dump())
            self.db.add(new_pattern)
            await self.db.flush()

            await self._replace_slots(new_pattern)
            return availability_models.AvailabilityPatternRead.model_validate(new_pattern)
        except ServiceNotFoundError:
            raise
        except Exception as e:
            log.error(f"Error in create_pattern_for_api for service {service_id}: {e}", exc_info=True)
            raise

    async def update_pattern_for_api(
        self,
        service_id: UUID,
        pattern_id: UUID,
        data: availability_models.AvailabilityPatternWrite
    ) -> availability_models.AvailabilityPatternRead:
        log.info(f"Attempting to update pattern {pattern_id} of service {service_id}.")
        try:
            await self.service_management.get_service_by_id_internal(service_id)
            pattern = await self._get_pattern_by_id_internal(pattern_id, service_id)

            for key, value in data.model_dump().items():
                setattr(pattern, key, value)

            self.db.add(pattern)
            await self.db.flush()

            await self._replace_slots(pattern)
            return availability_models.AvailabilityPatternRead.model_validate(pattern)
        except (ServiceNotFoundError, PatternNotFoundError):
            raise
        except Exception as e:
            log.error(f"Error in update_pattern_for_api for pattern {pattern_id}: {e}", exc_info=True)
            raise

    async def delete_pattern(self, service_id: UUID, pattern_id: UUID) -> bool:
        """Removes the pattern's slots, then soft-deletes the pattern."""
        log.info(f"Attempting to delete pattern {pattern_id} of service {service_id}.")
        await self.service_management.get_service_by_id_internal(service_id)
        pattern = await self._get_pattern_by_id_internal(pattern_id, service_id)

        await self.db.execute(
            delete(db_models.AvailableSlots).where(db_models.AvailableSlots.pattern_id == pattern.id)
        )
        pattern.is_active = False
        await self.db.flush()
        return True

    # --- Slot Queries ---

    async def get_filtered_slots(self, service_id: UUID, start: datetime, end: datetime) -> list[Slot]:
        """
        Stored slots of the service starting within [start, end], earliest first,
        with is_available resolved against the exceptions for that window.
        Both available and blocked slots are returned.
        Offset-aware bounds are converted to naive UTC first.
        """
        start, end = to_naive_utc(start), to_naive_utc(end)
        stmt = select(db_models.AvailableSlots).filter(
            db_models.AvailableSlots.service_id == service_id,
            db_models.AvailableSlots.start_date_time >= start,
            db_models.AvailableSlots.start_date_time <= end
        ).order_by(db_models.AvailableSlots.start_date_time)
        result = await self.db.execute(stmt)
        stored_slots = result.scalars().all()

        exceptions = await self.exception_service.get_active_exceptions_for_period(service_id, start, end)
        return self.exception_filter.apply(stored_slots, exceptions)

    async def get_slots_for_api(
        self,
        service_id: UUID,
        start: datetime,
        end: datetime
    ) -> list[availability_models.AvailableSlotRead]:
        start, end = to_naive_utc(start), to_naive_utc(end)
        log.info(f"Fetching slots for service {service_id} between {start} and {end}.")
        if end < start:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="endDate cannot be earlier than startDate.")

        await self.service_management.get_service_by_id_internal(service_id)
        slots = await self.get_filtered_slots(service_id, start, end)
        return [availability_models.AvailableSlotRead.model_validate(s) for s in slots]
