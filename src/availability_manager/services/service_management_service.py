'''
Service Management Service
'''
from typing import Annotated, Optional
from uuid import UUID, uuid4

from fastapi import Depends, HTTPException, status
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..models import services as service_models
from ..common.config import settings
from ..common.exceptions import ServiceNotFoundError, SharableLinkNotFoundError
from ..common.logger import log


class ServiceManagementService:
    """
    Service for the provider-facing CRUD of offered services and
    the sharable links that expose them publicly.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)]
    ):
        self.db = db

    # --- Internal Fetchers ---

    async def get_service_by_id_internal(self, service_id: UUID) -> db_models.Services:
        """
        Fetches an active service. Raises ServiceNotFoundError otherwise.
        Used by the availability, exception and public services too.
        """
        stmt = select(db_models.Services).filter(
            db_models.Services.id == service_id,
            db_models.Services.is_active.is_(True)
        )
        result = await self.db.execute(stmt)
        service = result.scalars().first()
        if not service:
            log.warning(f"Tried to fetch non-existing or inactive service: {service_id}")
            raise ServiceNotFoundError(f"Service {service_id} not found.")
        return service

    async def get_active_link_internal(self, service_id: UUID) -> Optional[db_models.SharableLinks]:
        stmt = select(db_models.SharableLinks).filter(
            db_models.SharableLinks.service_id == service_id,
            db_models.SharableLinks.is_active.is_(True)
        ).order_by(db_models.SharableLinks.created_at.desc())
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_service_by_token_internal(self, token: str) -> db_models.Services:
        """
        Resolves a public token to its service.
        Raises SharableLinkNotFoundError for unknown/deactivated tokens.
        """
        stmt = select(db_models.SharableLinks).filter(
            db_models.SharableLinks.token == token,
            db_models.SharableLinks.is_active.is_(True)
        )
        result = await self.db.execute(stmt)
        link = result.scalars().first()
        if not link:
            log.warning("Public access attempted with an invalid or deactivated token.")
            raise SharableLinkNotFoundError("Service not found or link is invalid.")
        return await self.get_service_by_id_internal(link.service_id)

    # --- Formatting Helpers ---

    def _build_public_url(self, service_id: UUID, token: str) -> str:
        return f"{settings.FRONTEND_BASE_URL.rstrip('/')}/service/{service_id}/{token}"

    def _format_service_for_api(
        self,
        service: db_models.Services,
        link: Optional[db_models.SharableLinks]
    ) -> service_models.ServiceRead:
        return service_models.ServiceRead(
            id=service.id,
            title=service.title,
            provider_name=service.provider_name,
            description=service.description,
            duration=service.duration,
            duration_unit=service.duration_unit,
            business_name=service.business_name,
            created_at=service.created_at,
            updated_at=service.updated_at,
            sharable_token=link.token if link else None
        )

    def _format_link_for_api(self, link: db_models.SharableLinks) -> service_models.SharableLinkRead:
        return service_models.SharableLinkRead(
            token=link.token,
            public_url=self._build_public_url(link.service_id, link.token),
            created_at=link.created_at
        )

    # --- API-Facing Read Methods ---

    async def get_all_services_for_api(self) -> list[service_models.ServiceRead]:
        log.info("Fetching all active services.")
        try:
            stmt = select(db_models.Services).filter(
                db_models.Services.is_active.is_(True)
            ).order_by(db_models.Services.created_at)
            result = await self.db.execute(stmt)
            services = result.scalars().all()

            formatted = []
            for service in services:
                link = await self.get_active_link_internal(service.id)
                formatted.append(self._format_service_for_api(service, link))
            return formatted
        except Exception as e:
            log.error(f"Database error in get_all_services_for_api: {e}", exc_info=True)
            raise

    async def get_service_by_id_for_api(self, service_id: UUID) -> service_models.ServiceRead:
        log.info(f"Requesting service {service_id}")
        service = await self.get_service_by_id_internal(service_id)
        link = await self.get_active_link_internal(service.id)
        return self._format_service_for_api(service, link)

    # --- API-Facing Write Methods ---

    async def create_service_for_api(self, data: service_models.ServiceCreate) -> service_models.ServiceRead:
        log.info(f"Creating service '{data.title}'.")
        try:
            new_service = db_models.Services(
                title=data.title,
                provider_name=data.provider_name,
                description=data.description,
                duration=data.duration,
                duration_unit=data.duration_unit.value,
                business_name=data.business_name
            )
            self.db.add(new_service)
            await self.db.flush()
            await self.db.refresh(new_service)
            return self._format_service_for_api(new_service, None)
        except Exception as e:
            log.error(f"Error in create_service_for_api: {e}", exc_info=True)
            raise

    async def update_service_for_api(self, service_id: UUID, data: service_models.ServiceUpdate) -> service_models.ServiceRead:
        log.info(f"Attempting to update service {service_id}.")
        service = await self.get_service_by_id_internal(service_id)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields provided to update.")

        try:
            for key, value in update_data.items():
                if key == 'duration_unit' and value is not None:
                    setattr(service, key, value.value)
                else:
                    setattr(service, key, value)

            self.db.add(service)
            await self.db.flush()
            await self.db.refresh(service)
            link = await self.get_active_link_internal(service.id)
            return self._format_service_for_api(service, link)
        except Exception as e:
            log.error(f"Error in update_service_for_api for service {service_id}: {e}", exc_info=True)
            raise

    async def delete_service(self, service_id: UUID) -> bool:
        """
        Soft-deletes a service: its links stop resolving and its slots are removed.
        """
        log.info(f"Attempting to delete service {service_id}.")
        service = await self.get_service_by_id_internal(service_id)
        try:
            service.is_active = False
            await self.db.execute(
                update(db_models.SharableLinks)
                .where(db_models.SharableLinks.service_id == service_id)
                .values(is_active=False)
            )
            await self.db.execute(
                delete(db_models.AvailableSlots).where(db_models.AvailableSlots.service_id == service_id)
            )
            await self.db.flush()
            return True
        except Exception as e:
            log.error(f"Error in delete_service for service {service_id}: {e}", exc_info=True)
            raise

    # --- Sharable Links ---

    async def _create_link(self, service_id: UUID) -> db_models.SharableLinks:
        link = db_models.SharableLinks(service_id=service_id, token=uuid4().hex)
        self.db.add(link)
        await self.db.flush()
        await self.db.refresh(link)
        return link

    async def generate_sharable_link(self, service_id: UUID) -> service_models.SharableLinkRead:
        """
        Returns the service's active link, creating one on first use.
        """
        log.info(f"Generating sharable link for service {service_id}.")
        await self.get_service_by_id_internal(service_id)

        existing = await self.get_active_link_internal(service_id)
        if existing:
            return self._format_link_for_api(existing)

        link = await self._create_link(service_id)
        return self._format_link_for_api(link)

    async def regenerate_sharable_link(self, service_id: UUID) -> service_models.SharableLinkRead:
        """
        Invalidates every previous link of the service and issues a new token.
        """
        log.info(f"Regenerating sharable link for service {service_id}.")
        await self.get_service_by_id_internal(service_id)

        await self.db.execute(
            update(db_models.SharableLinks)
            .where(db_models.SharableLinks.service_id == service_id)
            .values(is_active=False)
        )
        link = await self._create_link(service_id)
        return self._format_link_for_api(link)
