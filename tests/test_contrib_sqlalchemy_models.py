"""Tests for SQLAlchemy 2.0 async models."""

import pytest
from sqlalchemy.exc import IntegrityError

from litestar_ncm.contrib.sqlalchemy.models import (
    CacheEntryModel,
    ShipmentEventModel,
    ShipmentModel,
)


def _shipment(**overrides) -> ShipmentModel:
    fields = {
        "order_id": "order-1",
        "tracking_id": "trk-1",
        "system_status": "ORDER_CREATED",
        "recipient_name": "Sita Sharma",
        "recipient_phone": "+9779800000000",
        "destination_city": "POKHARA",
        "origin_city": "BIRGUNJ",
    }
    fields.update(overrides)
    return ShipmentModel(**fields)


@pytest.fixture
async def session(async_session_factory):
    async with async_session_factory() as session:
        yield session


async def test_shipment_model_create(session):
    """Can create a ShipmentModel with defaults."""
    shipment = _shipment()
    session.add(shipment)
    await session.commit()
    await session.refresh(shipment)

    assert len(shipment.id) == 36  # UUID
    assert shipment.partner == "NCM"
    assert shipment.ncm_order_id is None
    assert shipment.shipping_charge == 0
    assert shipment.cod_amount == 0
    assert shipment.created_at is not None
    assert shipment.updated_at is not None


async def test_order_id_is_unique(session):
    session.add(_shipment())
    await session.commit()

    session.add(_shipment(tracking_id="trk-2"))
    with pytest.raises(IntegrityError):
        await session.commit()


async def test_tracking_id_is_unique(session):
    session.add(_shipment())
    await session.commit()

    session.add(_shipment(order_id="order-2"))
    with pytest.raises(IntegrityError):
        await session.commit()


async def test_event_model_stores_raw_payload(session):
    shipment = _shipment()
    session.add(shipment)
    await session.commit()

    event = ShipmentEventModel(
        shipment_id=shipment.id,
        partner_status="Delivered",
        system_status="DELIVERED",
        raw={"status": "Delivered", "vendor_return": False},
    )
    session.add(event)
    await session.commit()
    await session.refresh(event)

    assert event.raw == {"status": "Delivered", "vendor_return": False}
    assert event.vendor_return is None
    assert event.location is None


async def test_table_names():
    assert ShipmentModel.__tablename__ == "ncm_shipments"
    assert ShipmentEventModel.__tablename__ == "ncm_shipment_events"
    assert CacheEntryModel.__tablename__ == "ncm_cache"
