'''
Unauthenticated endpoint behind a Service's sharable link.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends

from ..models import services as service_models
from ..services.public_service import PublicService


class PublicAPI:
    def __init__(self):
        self.router = APIRouter(
            prefix="/public",
            tags=["Public"]
        )
        self._register_routes()

    def _register_routes(self):
        self.router.add_api_route(
                "/service/{token}",
                self.get_public_service,
                methods=["GET"],
                response_model=service_models.PublicServiceRead)

    async def get_public_service(
        self,
        token: str,
        public_service: Annotated[PublicService, Depends(PublicService)]
    ) -> Any:
        """
        Service details and its available slots for the next days, earliest first.
        """
        return await public_service.get_public_service_for_api(token)

# Instantiate the class and export its router
public_api = PublicAPI()
router = public_api.router
