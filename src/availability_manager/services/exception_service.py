'''
Exception Service
'''
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..models import exceptions as exception_models
from ..common.datetime_utils import to_naive_utc
from ..common.exceptions import ExceptionNotFoundError, ServiceNotFoundError
from ..common.logger import log
from .service_management_service import ServiceManagementService


class ExceptionService:
    """
    Service for a service's exceptions: one-off or yearly-recurring periods
    during which its slots are not bookable.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        service_management: Annotated[ServiceManagementService, Depends(ServiceManagementService)]
    ):
        self.db = db
        self.service_management = service_management

    # --- Internal Fetchers ---

    async def _get_exception_by_id_internal(self, service_id: UUID, exception_id: UUID) -> db_models.ServiceExceptions:
        stmt = select(db_models.ServiceExceptions).filter(
            db_models.ServiceExceptions.id == exception_id,
            db_models.ServiceExceptions.service_id == service_id,
            db_models.ServiceExceptions.is_active.is_(True)
        )
        result = await self.db.execute(stmt)
        exception = result.scalars().first()
        if not exception:
            log.warning(f"Tried to fetch non-existing exception {exception_id} of service {service_id}")
            raise ExceptionNotFoundError(f"Exception {exception_id} not found.")
        return exception

    async def get_active_exceptions_for_period(
        self,
        service_id: UUID,
        start: datetime,
        end: datetime
    ) -> list[db_models.ServiceExceptions]:
        """
        Candidate exceptions for a query window: every one-off exception that
        overlaps [start, end], plus every yearly exception (their month/day
        projection is resolved per slot by the exception filter).
        """
        start, end = to_naive_utc(start), to_naive_utc(end)
        stmt = select(db_models.ServiceExceptions).filter(
            db_models.ServiceExceptions.service_id == service_id,
            db_models.ServiceExceptions.is_active.is_(True),
            or_(
                db_models.ServiceExceptions.recurring_yearly.is_(True),
                and_(
                    db_models.ServiceExceptions.start_date_time <= end,
                    db_models.ServiceExceptions.end_date_time >= start
                )
            )
        ).order_by(db_models.ServiceExceptions.start_date_time)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    # --- API-Facing Methods ---

    async def get_exceptions_for_api(self, service_id: UUID) -> list[exception_models.ServiceExceptionRead]:
        log.info(f"Fetching exceptions for service {service_id}.")
        await self.service_management.get_service_by_id_internal(service_id)

        stmt = select(db_models.ServiceExceptions).filter(
            db_models.ServiceExceptions.service_id == service_id,
            db_models.ServiceExceptions.is_active.is_(True)
        ).order_by(db_models.ServiceExceptions.start_date_time)
        result = await self.db.execute(stmt)
        return [exception_models.ServiceExceptionRead.model_validate(e) for e in result.scalars().all()]

    async def create_exception_for_api(
        self,
        service_id: UUID,
        data: exception_models.ServiceExceptionWrite
    ) -> exception_models.ServiceExceptionRead:
        log.info(f"Creating exception '{data.title}' for service {service_id}.")
        try:
            await self.service_management.get_service_by_id_internal(service_id)

            new_exception = db_models.ServiceExceptions(service_id=service_id, **data.model_dump())
            self.db.add(new_exception)
            await self.db.flush()
            await self.db.refresh(new_exception)
            return exception_models.ServiceExceptionRead.model_validate(new_exception)
        except ServiceNotFoundError:
            raise
        except Exception as e:
            log.error(f"Error in create_exception_for_api: {e}", exc_info=True)
            raise

    async def update_exception_for_api(
        self,
        service_id: UUID,
        exception_id: UUID,
        data: exception_models.ServiceExceptionWrite
    ) -> exception_models.ServiceExceptionRead:
        log.info(f"Attempting to update exception {exception_id} of service {service_id}.")
        try:
            await self.service_management.get_service_by_id_internal(service_id)
            exception = await self._get_exception_by_id_internal(service_id, exception_id)

            for key, value in data.model_dump().items():
                setattr(exception, key, value)

            self.db.add(exception)
            await self.db.flush()
            await self.db.refresh(exception)
            return exception_models.ServiceExceptionRead.model_validate(exception)
        except (ServiceNotFoundError, ExceptionNotFoundError):
            raise
        except Exception as e:
            log.error(f"Error in update_exception_for_api for exception {exception_id}: {e}", exc_info=True)
            raise

    async def delete_exception(self, service_id: UUID, exception_id: UUID) -> bool:
        """Soft delete; the exception stops affecting availability immediately."""
        log.info(f"Attempting to delete exception {exception_id} of service {service_id}.")
        await self.service_management.get_service_by_id_internal(service_id)
        exception = await self._get_exception_by_id_internal(service_id, exception_id)
        exception.is_active = False
        await self.db.flush()
        return True
