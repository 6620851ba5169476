from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKeyConstraint, Index, Integer, PrimaryKeyConstraint, String, Text, Time, UniqueConstraint, Uuid, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
import datetime
import uuid

from ..common.datetime_utils import utc_now


class Base(DeclarativeBase):
    pass


class Services(Base):
    __tablename__ = 'services'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='services_pkey'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255))
    provider_name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text)
    duration: Mapped[Optional[int]] = mapped_column(Integer)
    duration_unit: Mapped[str] = mapped_column(String(16), default='minutes', server_default=text("'minutes'"))
    business_name: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utc_now, onupdate=utc_now)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text('true'))

    availability_patterns: Mapped[list['AvailabilityPatterns']] = relationship('AvailabilityPatterns', back_populates='service')
    service_exceptions: Mapped[list['ServiceExceptions']] = relationship('ServiceExceptions', back_populates='service')
    sharable_links: Mapped[list['SharableLinks']] = relationship('SharableLinks', back_populates='service')


class AvailabilityPatterns(Base):
    __tablename__ = 'availability_patterns'
    __table_args__ = (
        CheckConstraint('slot_duration > 0', name='availability_patterns_slot_duration_check'),
        ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE', name='availability_patterns_service_id_fkey'),
        PrimaryKeyConstraint('id', name='availability_patterns_pkey'),
        Index('idx_availability_patterns_service', 'service_id')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    # Stored as free text: unknown types are accepted and simply expand to no slots.
    slot_type: Mapped[str] = mapped_column(String(16))
    slot_duration: Mapped[int] = mapped_column(Integer)
    start_date: Mapped[datetime.date] = mapped_column(Date)
    start_time: Mapped[Optional[datetime.time]] = mapped_column(Time)
    end_time: Mapped[Optional[datetime.time]] = mapped_column(Time)
    days_of_week: Mapped[Optional[str]] = mapped_column(String(32))
    end_date: Mapped[Optional[datetime.date]] = mapped_column(Date)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utc_now)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text('true'))

    service: Mapped['Services'] = relationship('Services', back_populates='availability_patterns')
    available_slots: Mapped[list['AvailableSlots']] = relationship('AvailableSlots', back_populates='pattern')


class AvailableSlots(Base):
    __tablename__ = 'available_slots'
    __table_args__ = (
        CheckConstraint('end_date_time > start_date_time', name='available_slots_interval_check'),
        ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE', name='available_slots_service_id_fkey'),
        ForeignKeyConstraint(['pattern_id'], ['availability_patterns.id'], ondelete='CASCADE', name='available_slots_pattern_id_fkey'),
        PrimaryKeyConstraint('id', name='available_slots_pkey'),
        Index('idx_available_slots_service_start', 'service_id', 'start_date_time'),
        Index('idx_available_slots_pattern', 'pattern_id')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    pattern_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    start_date_time: Mapped[datetime.datetime] = mapped_column(DateTime)
    end_date_time: Mapped[datetime.datetime] = mapped_column(DateTime)
    slot_type: Mapped[str] = mapped_column(String(16))
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text('true'))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utc_now)

    pattern: Mapped['AvailabilityPatterns'] = relationship('AvailabilityPatterns', back_populates='available_slots')


class ServiceExceptions(Base):
    __tablename__ = 'service_exceptions'
    __table_args__ = (
        CheckConstraint('end_date_time >= start_date_time', name='service_exceptions_interval_check'),
        ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE', name='service_exceptions_service_id_fkey'),
        PrimaryKeyConstraint('id', name='service_exceptions_pkey'),
        Index('idx_service_exceptions_service', 'service_id')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    title: Mapped[str] = mapped_column(String(255))
    start_date_time: Mapped[datetime.datetime] = mapped_column(DateTime)
    end_date_time: Mapped[datetime.datetime] = mapped_column(DateTime)
    exception_type: Mapped[str] = mapped_column(String(64))
    description: Mapped[Optional[str]] = mapped_column(Text)
    recurring_yearly: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text('false'))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utc_now)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text('true'))

    service: Mapped['Services'] = relationship('Services', back_populates='service_exceptions')


class SharableLinks(Base):
    __tablename__ = 'sharable_links'
    __table_args__ = (
        ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE', name='sharable_links_service_id_fkey'),
        PrimaryKeyConstraint('id', name='sharable_links_pkey'),
        UniqueConstraint('token', name='sharable_links_token_key')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    service_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    token: Mapped[str] = mapped_column(String(64))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utc_now)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text('true'))

    service: Mapped['Services'] = relationship('Services', back_populates='sharable_links')
