"""SQLAlchemy 2.0 async ShipmentRepository implementation."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from litestar_ncm.contrib.sqlalchemy.models import (
    ShipmentEventModel,
    ShipmentModel,
)
from litestar_ncm.exceptions import ConflictError


class SQLAlchemyShipmentRepository:
    """Shipment repository backed by SQLAlchemy async sessions.

    Implements the ShipmentRepository protocol. Every call runs in its own
    session and commits before returning.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._session_factory = session_factory

    async def get_by_tracking_id(self, tracking_id: str) -> ShipmentModel:
        """Get a shipment by tracking ID. Raises KeyError if not found."""
        async with self._session_factory() as session:
            stmt = select(ShipmentModel).where(
                ShipmentModel.tracking_id == tracking_id
            )
            shipment = (await session.execute(stmt)).scalar_one_or_none()
            if shipment is None:
                raise KeyError(tracking_id)
            session.expunge(shipment)
            return shipment

    async def get_by_order_id(self, order_id: str) -> ShipmentModel | None:
        """Get the shipment of an order, or None."""
        async with self._session_factory() as session:
            stmt = select(ShipmentModel).where(
                ShipmentModel.order_id == order_id
            )
            shipment = (await session.execute(stmt)).scalar_one_or_none()
            if shipment is not None:
                session.expunge(shipment)
            return shipment

    async def create(self, **kwargs) -> ShipmentModel:
        """Create a new shipment record.

        Raises ConflictError when the order or tracking ID already has one.
        """
        async with self._session_factory() as session:
            shipment = ShipmentModel(**kwargs)
            session.add(shipment)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise ConflictError(
                    "Shipment already exists for this order or tracking ID"
                ) from exc
            await session.refresh(shipment)
            session.expunge(shipment)
            return shipment

    async def update_status(
        self, shipment_id: str, system_status: str
    ) -> ShipmentModel:
        """Update the shipment's system status."""
        async with self._session_factory() as session:
            shipment = await session.get(ShipmentModel, shipment_id)
            if shipment is None:
                raise KeyError(shipment_id)
            shipment.system_status = str(system_status)
            await session.commit()
            await session.refresh(shipment)
            session.expunge(shipment)
            return shipment

    async def add_event(self, shipment_id: str, **kwargs) -> ShipmentEventModel:
        """Append an event to the shipment's history."""
        async with self._session_factory() as session:
            event = ShipmentEventModel(shipment_id=shipment_id, **kwargs)
            session.add(event)
            await session.commit()
            await session.refresh(event)
            session.expunge(event)
            return event

    async def list_events(self, shipment_id: str) -> list[ShipmentEventModel]:
        """List a shipment's events, newest first."""
        async with self._session_factory() as session:
            stmt = (
                select(ShipmentEventModel)
                .where(ShipmentEventModel.shipment_id == shipment_id)
                .order_by(ShipmentEventModel.created_at.desc())
            )
            result = await session.execute(stmt)
            events = list(result.scalars().all())
            for e in events:
                session.expunge(e)
            return events

    async def list_recent(self, limit: int = 50) -> list[ShipmentModel]:
        """List shipments, newest first."""
        async with self._session_factory() as session:
            stmt = (
                select(ShipmentModel)
                .order_by(ShipmentModel.created_at.desc())
                .limit(limit)
            )
            result = await session.execute(stmt)
            shipments = list(result.scalars().all())
            for s in shipments:
                session.expunge(s)
            return shipments
