"""SQLAlchemy 2.0 async models for NCM shipments."""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(tz=UTC)


class Base(DeclarativeBase):
    """Base class for all litestar-ncm models."""


class ShipmentModel(Base):
    """One NCM shipment per order; recipient fields are a snapshot."""

    __tablename__ = "ncm_shipments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    order_id: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    partner: Mapped[str] = mapped_column(String(32), default="NCM")
    ncm_order_id: Mapped[str | None] = mapped_column(
        String(128), nullable=True, default=None
    )
    tracking_id: Mapped[str] = mapped_column(
        String(128), unique=True, index=True
    )
    system_status: Mapped[str] = mapped_column(String(32), index=True)
    shipping_charge: Mapped[float] = mapped_column(Float, default=0)
    cod_amount: Mapped[float] = mapped_column(Float, default=0)
    recipient_name: Mapped[str] = mapped_column(String(255))
    recipient_phone: Mapped[str] = mapped_column(String(32))
    recipient_address: Mapped[str] = mapped_column(Text, default="")
    destination_city: Mapped[str] = mapped_column(String(64))
    origin_city: Mapped[str] = mapped_column(String(64))
    package_description: Mapped[str] = mapped_column(String(255), default="")
    ncm_response: Mapped[Any] = mapped_column(JSON, nullable=True, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now
    )


class ShipmentEventModel(Base):
    """Append-only tracking history entry."""

    __tablename__ = "ncm_shipment_events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    shipment_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("ncm_shipments.id", ondelete="CASCADE"),
        index=True,
    )
    partner_status: Mapped[str] = mapped_column(String(255))
    vendor_return: Mapped[str | None] = mapped_column(
        String(16), nullable=True, default=None
    )
    system_status: Mapped[str] = mapped_column(String(32))
    occurred_at: Mapped[str | None] = mapped_column(
        String(64), nullable=True, default=None
    )
    location: Mapped[str | None] = mapped_column(
        String(255), nullable=True, default=None
    )
    raw: Mapped[Any] = mapped_column(JSON, nullable=True, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, index=True
    )


class CacheEntryModel(Base):
    """Cached NCM reference data."""

    __tablename__ = "ncm_cache"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
