'''
API endpoints for availability patterns and the slots generated from them.
'''
from datetime import datetime
from typing import Annotated, Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status

from ..models import availability as availability_models
from ..services.availability_service import AvailabilityService


class AvailabilityAPI:
    """
    A class to encapsulate the availability endpoints of a Service.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/services/{service_id}/availability",
            tags=["Availability"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/patterns",
                self.list_patterns,
                methods=["GET"],
                response_model=List[availability_models.AvailabilityPatternRead])
        self.router.add_api_route(
                "/patterns",
                self.create_pattern,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=availability_models.AvailabilityPatternRead)
        self.router.add_api_route(
                "/patterns/{pattern_id}",
                self.update_pattern,
                methods=["PUT"],
                response_model=availability_models.AvailabilityPatternRead)
        self.router.add_api_route(
                "/patterns/{pattern_id}",
                self.delete_pattern,
                methods=["DELETE"],
                status_code=status.HTTP_204_NO_CONTENT)
        self.router.add_api_route(
                "/slots",
                self.list_slots,
                methods=["GET"],
                response_model=List[availability_models.AvailableSlotRead])

    async def list_patterns(
        self,
        service_id: UUID,
        availability_service: Annotated[AvailabilityService, Depends(AvailabilityService)]
    ) -> List[Any]:
        return await availability_service.get_patterns_for_api(service_id)

    async def create_pattern(
        self,
        service_id: UUID,
        pattern_data: availability_models.AvailabilityPatternWrite,
        availability_service: Annotated[AvailabilityService, Depends(AvailabilityService)]
    ) -> Any:
        """
        Creates a pattern and generates its slots.
        """
        return await availability_service.create_pattern_for_api(service_id, pattern_data)

    async def update_pattern(
        self,
        service_id: UUID,
        pattern_id: UUID,
        pattern_data: availability_models.AvailabilityPatternWrite,
        availability_service: Annotated[AvailabilityService, Depends(AvailabilityService)]
    ) -> Any:
        """
        Replaces a pattern and regenerates its slots.
        """
        return await availability_service.update_pattern_for_api(service_id, pattern_id, pattern_data)

    async def delete_pattern(
        self,
        service_id: UUID,
        pattern_id: UUID,
        availability_service: Annotated[AvailabilityService, Depends(AvailabilityService)]
    ):
        await availability_service.delete_pattern(service_id, pattern_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    async def list_slots(
        self,
        service_id: UUID,
        availability_service: Annotated[AvailabilityService, Depends(AvailabilityService)],
        start_date: Annotated[datetime, Query(alias="startDate", description="Window start (inclusive)")],
        end_date: Annotated[datetime, Query(alias="endDate", description="Window end (inclusive)")]
    ) -> List[Any]:
        """
        All slots starting in the window, available or not,
        with exceptions already applied.
        """
        return await availability_service.get_slots_for_api(service_id, start_date, end_date)

# Instantiate the class and export its router
availability_api = AvailabilityAPI()
router = availability_api.router
