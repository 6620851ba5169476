'''
API endpoints for managing a Service's exceptions (blackout periods).
'''
from typing import Annotated, Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status

from ..models import exceptions as exception_models
from ..services.exception_service import ExceptionService


class ExceptionsAPI:
    """
    A class to encapsulate CRUD endpoints for Exceptions.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/services/{service_id}/exceptions",
            tags=["Exceptions"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/",
                self.list_exceptions,
                methods=["GET"],
                response_model=List[exception_models.ServiceExceptionRead])
        self.router.add_api_route(
                "/",
                self.create_exception,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=exception_models.ServiceExceptionRead)
        self.router.add_api_route(
                "/{exception_id}",
                self.update_exception,
                methods=["PUT"],
                response_model=exception_models.ServiceExceptionRead)
        self.router.add_api_route(
                "/{exception_id}",
                self.delete_exception,
                methods=["DELETE"],
                status_code=status.HTTP_204_NO_CONTENT)

    async def list_exceptions(
        self,
        service_id: UUID,
        exception_service: Annotated[ExceptionService, Depends(ExceptionService)]
    ) -> List[Any]:
        return await exception_service.get_exceptions_for_api(service_id)

    async def create_exception(
        self,
        service_id: UUID,
        exception_data: exception_models.ServiceExceptionWrite,
        exception_service: Annotated[ExceptionService, Depends(ExceptionService)]
    ) -> Any:
        return await exception_service.create_exception_for_api(service_id, exception_data)

    async def update_exception(
        self,
        service_id: UUID,
        exception_id: UUID,
        exception_data: exception_models.ServiceExceptionWrite,
        exception_service: Annotated[ExceptionService, Depends(ExceptionService)]
    ) -> Any:
        return await exception_service.update_exception_for_api(service_id, exception_id, exception_data)

    async def delete_exception(
        self,
        service_id: UUID,
        exception_id: UUID,
        exception_service: Annotated[ExceptionService, Depends(ExceptionService)]
    ):
        await exception_service.delete_exception(service_id, exception_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

# Instantiate the class and export its router
exceptions_api = ExceptionsAPI()
router = exceptions_api.router
