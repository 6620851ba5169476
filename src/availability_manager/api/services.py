'''
API endpoints for CRUD operations on offered Services and their sharable links.
'''
from typing import Annotated, Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status

from ..models import services as service_models
from ..services.service_management_service import ServiceManagementService


class ServicesAPI:
    """
    A class to encapsulate CRUD endpoints for Services.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/services",
            tags=["Services"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/",
                self.list_services,
                methods=["GET"],
                response_model=List[service_models.ServiceRead])
        self.router.add_api_route(
                "/",
                self.create_service,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=service_models.ServiceRead)
        self.router.add_api_route(
                "/{service_id}",
                self.get_service,
                methods=["GET"],
                response_model=service_models.ServiceRead)
        self.router.add_api_route(
                "/{service_id}",
                self.update_service,
                methods=["PUT"],
                response_model=service_models.ServiceRead)
        self.router.add_api_route(
                "/{service_id}",
                self.delete_service,
                methods=["DELETE"],
                status_code=status.HTTP_204_NO_CONTENT)

        # Sharable link sub-resource
        self.router.add_api_route(
                "/{service_id}/sharable-link",
                self.generate_sharable_link,
                methods=["POST"],
                response_model=service_models.SharableLinkRead)
        self.router.add_api_route(
                "/{service_id}/regenerate-link",
                self.regenerate_sharable_link,
                methods=["POST"],
                response_model=service_models.SharableLinkRead)

    async def list_services(
        self,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ) -> List[Any]:
        """
        Retrieves all active services with their current sharable token.
        """
        return await service_management.get_all_services_for_api()

    async def create_service(
        self,
        service_data: service_models.ServiceCreate,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ) -> Any:
        return await service_management.create_service_for_api(service_data)

    async def get_service(
        self,
        service_id: UUID,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ) -> Any:
        return await service_management.get_service_by_id_for_api(service_id)

    async def update_service(
        self,
        service_id: UUID,
        service_data: service_models.ServiceUpdate,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ) -> Any:
        """
        Updates the provided fields of a service.
        """
        return await service_management.update_service_for_api(service_id, service_data)

    async def delete_service(
        self,
        service_id: UUID,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ):
        """
        Deactivates a service, its sharable links and its slots.
        """
        await service_management.delete_service(service_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    async def generate_sharable_link(
        self,
        service_id: UUID,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ) -> Any:
        """
        Returns the active public link of the service, creating it on first call.
        """
        return await service_management.generate_sharable_link(service_id)

    async def regenerate_sharable_link(
        self,
        service_id: UUID,
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ) -> Any:
        """
        Invalidates the current public link and issues a new one.
        """
        return await service_management.regenerate_sharable_link(service_id)

# Instantiate the class and export its router
services_api = ServicesAPI()
router = services_api.router
