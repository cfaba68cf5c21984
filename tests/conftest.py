"""Shared fixtures for litestar-ncm tests."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from litestar import Litestar
from litestar.testing import TestClient

from litestar_ncm.config import NcmConfig
from litestar_ncm.exceptions import ConflictError, UpstreamError
from litestar_ncm.flow import ShipmentFlow
from litestar_ncm.plugin import create_ncm_router
from litestar_ncm.types import CustomerInfo, OrderInfo, OrderItemInfo

_BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


@dataclass
class DemoShipment:
    id: str
    order_id: str
    tracking_id: str
    system_status: str
    partner: str = "NCM"
    ncm_order_id: str | None = None
    shipping_charge: float = 0
    cod_amount: float = 0
    recipient_name: str = ""
    recipient_phone: str = ""
    recipient_address: str = ""
    destination_city: str = ""
    origin_city: str = ""
    package_description: str = ""
    ncm_response: Any = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class DemoEvent:
    id: str
    shipment_id: str
    partner_status: str
    system_status: str
    vendor_return: str | None = None
    occurred_at: str | None = None
    location: str | None = None
    raw: Any = None
    created_at: datetime | None = None


class InMemoryRepo:
    def __init__(self) -> None:
        self.items: dict[str, DemoShipment] = {}
        self.events: list[DemoEvent] = []
        self.writes = 0
        self._ids = itertools.count(1)

    def _tick(self) -> datetime:
        return _BASE_TIME + timedelta(seconds=next(self._ids))

    async def get_by_tracking_id(self, tracking_id: str) -> DemoShipment:
        for shipment in self.items.values():
            if shipment.tracking_id == tracking_id:
                return shipment
        raise KeyError(tracking_id)

    async def get_by_order_id(self, order_id: str) -> DemoShipment | None:
        for shipment in self.items.values():
            if shipment.order_id == order_id:
                return shipment
        return None

    async def create(self, **kwargs) -> DemoShipment:
        if await self.get_by_order_id(kwargs["order_id"]) is not None:
            raise ConflictError("duplicate")
        now = self._tick()
        shipment_id = f"s-{len(self.items) + 1}"
        shipment = DemoShipment(
            id=shipment_id, created_at=now, updated_at=now, **kwargs
        )
        self.items[shipment_id] = shipment
        self.writes += 1
        return shipment

    async def update_status(
        self, shipment_id: str, system_status: str
    ) -> DemoShipment:
        shipment = self.items[shipment_id]
        shipment.system_status = str(system_status)
        shipment.updated_at = self._tick()
        self.writes += 1
        return shipment

    async def add_event(self, shipment_id: str, **kwargs) -> DemoEvent:
        event = DemoEvent(
            id=f"e-{len(self.events) + 1}",
            shipment_id=shipment_id,
            created_at=self._tick(),
            **kwargs,
        )
        self.events.append(event)
        self.writes += 1
        return event

    async def list_events(self, shipment_id: str) -> list[DemoEvent]:
        own = [e for e in self.events if e.shipment_id == shipment_id]
        return sorted(own, key=lambda e: e.created_at, reverse=True)

    async def list_recent(self, limit: int = 50) -> list[DemoShipment]:
        ordered = sorted(
            self.items.values(), key=lambda s: s.created_at, reverse=True
        )
        return ordered[:limit]

    def events_for(self, shipment_id: str) -> list[DemoEvent]:
        return [e for e in self.events if e.shipment_id == shipment_id]


class InMemoryOrderStore:
    def __init__(self) -> None:
        self.orders: dict[str, OrderInfo] = {}
        self.status_updates: list[tuple[str, str]] = []

    def add(self, order: OrderInfo) -> OrderInfo:
        self.orders[order.id] = order
        return order

    async def get_order(self, order_id: str) -> OrderInfo | None:
        return self.orders.get(order_id)

    async def update_status(self, order_id: str, status: str) -> None:
        self.orders[order_id].status = status
        self.status_updates.append((order_id, status))


class RecordingActivityLog:
    def __init__(self) -> None:
        self.entries: list[dict[str, Any]] = []

    async def record(
        self, action, entity_type, entity_id, entity_name, details
    ) -> None:
        self.entries.append(
            {
                "action": action,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "entity_name": entity_name,
                "details": details,
            }
        )


class FakeNcmClient:
    """Deterministic stand-in for NcmClient."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.branches: Any = [{"name": "KATHMANDU"}, {"name": "POKHARA"}]
        self.rate: Any = {"charge": 150}
        self.create_response: Any = {
            "order_id": 4321,
            "tracking_id": "NCM-TRK-1",
            "status": "Drop off Order Created",
        }
        self.status_response: Any = {
            "status": "Drop off Order Created",
            "vendor_return": "False",
        }
        self.fail_status = False
        self.fail_create = False

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    async def branch_list(self) -> Any:
        self.calls.append(("branch_list", None))
        return self.branches

    async def shipping_rate(
        self, *, creation: str, destination: str, type: str
    ) -> Any:
        self.calls.append(
            (
                "shipping_rate",
                {
                    "creation": creation,
                    "destination": destination,
                    "type": type,
                },
            )
        )
        return self.rate

    async def create_order(self, payload: dict) -> Any:
        self.calls.append(("create_order", payload))
        if self.fail_create:
            raise UpstreamError("NCM API returned 503 for /order/create")
        return self.create_response

    async def order_status(self, tracking_id: str) -> Any:
        self.calls.append(("order_status", tracking_id))
        if self.fail_status:
            raise UpstreamError("NCM API request to /order/status failed")
        return self.status_response


def make_order(
    order_id: str = "ORD-1",
    *,
    status: str = "pending",
    payment_method: str | None = "cash_on_delivery",
    total_amount: float = 2499.6,
    phone: str = "+977 9800000000",
    items: list[OrderItemInfo] | None = None,
) -> OrderInfo:
    return OrderInfo(
        id=order_id,
        order_number=f"#{order_id}",
        status=status,
        total_amount=total_amount,
        delivery_charge=100,
        payment_method=payment_method,
        customer=CustomerInfo(
            name="Sita Sharma",
            phone=phone,
            secondary_phone="09811111111",
            address="Ward 4, Birgunj",
        ),
        items=items
        if items is not None
        else [
            OrderItemInfo(product_name="Baby Blanket", quantity=2),
            OrderItemInfo(product_name="Rattle", quantity=1),
        ],
    )


@pytest.fixture()
def repository() -> InMemoryRepo:
    return InMemoryRepo()


@pytest.fixture()
def order_store() -> InMemoryOrderStore:
    store = InMemoryOrderStore()
    store.add(make_order())
    return store


@pytest.fixture()
def activity_log() -> RecordingActivityLog:
    return RecordingActivityLog()


@pytest.fixture()
def ncm_client() -> FakeNcmClient:
    return FakeNcmClient()


@pytest.fixture()
def config() -> NcmConfig:
    return NcmConfig(api_key="test-api-key-1234", origin_branch="BIRGUNJ")


@pytest.fixture()
def flow(
    ncm_client: FakeNcmClient,
    repository: InMemoryRepo,
    order_store: InMemoryOrderStore,
    config: NcmConfig,
    activity_log: RecordingActivityLog,
) -> ShipmentFlow:
    return ShipmentFlow(
        client=ncm_client,
        repository=repository,
        order_store=order_store,
        config=config,
        activity_log=activity_log,
    )


@pytest.fixture()
def test_app(
    ncm_client: FakeNcmClient,
    repository: InMemoryRepo,
    order_store: InMemoryOrderStore,
    config: NcmConfig,
    activity_log: RecordingActivityLog,
) -> Litestar:
    router = create_ncm_router(
        config=config,
        repository=repository,
        order_store=order_store,
        client=ncm_client,
        activity_log=activity_log,
    )
    return Litestar(route_handlers=[router])


@pytest.fixture()
def client(test_app: Litestar) -> Iterator[TestClient]:
    with TestClient(app=test_app) as tc:
        yield tc


# ---------------------------------------------------------------------------
# SQLAlchemy fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
async def async_engine():
    from sqlalchemy.ext.asyncio import create_async_engine

    from litestar_ncm.contrib.sqlalchemy.models import Base

    engine = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def async_session_factory(async_engine):
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False
    )
