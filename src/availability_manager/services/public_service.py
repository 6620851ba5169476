'''
Public Service
'''
from datetime import date, datetime, time, timedelta, timezone
from typing import Annotated, Optional

from fastapi import Depends

from ..models import availability as availability_models
from ..models import services as service_models
from ..core.exception_filter import only_available
from ..common.config import settings
from ..common.logger import log
from .service_management_service import ServiceManagementService
from .availability_service import AvailabilityService


class PublicService:
    """
    Unauthenticated, read-only view of a service reached through its
    sharable link token.
    """
    def __init__(
        self,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)],
        availability_service: Annotated[AvailabilityService, Depends(AvailabilityService)]
    ):
        self.service_management = service_management
        self.availability_service = availability_service

    def _public_window(self, today: Optional[date] = None) -> tuple[datetime, datetime]:
        """[today 00:00, today + PUBLIC_VIEW_DAYS days]"""
        today = today or datetime.now(timezone.utc).date()
        window_start = datetime.combine(today, time.min)
        return window_start, window_start + timedelta(days=settings.PUBLIC_VIEW_DAYS)

    async def get_public_service_for_api(self, token: str, today: Optional[date] = None) -> service_models.PublicServiceRead:
        """
        Service details plus only its available slots in the public window,
        sorted by start time.
        """
        service = await self.service_management.get_service_by_token_internal(token)
        log.info(f"Public view requested for service {service.id}.")

        window_start, window_end = self._public_window(today)
        slots = await self.availability_service.get_filtered_slots(service.id, window_start, window_end)

        return service_models.PublicServiceRead(
            title=service.title,
            description=service.description,
            duration=service.duration,
            provider_name=service.provider_name,
            business_name=service.business_name,
            available_slots=[availability_models.AvailableSlotRead.model_validate(s) for s in only_available(slots)]
        )
