"""Order-side snapshots handed to the reconciliation flow."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CustomerInfo:
    name: str
    phone: str
    secondary_phone: str | None = None
    address: str | None = None
    street: str | None = None

    @property
    def delivery_address(self) -> str:
        return self.address or self.street or ""


@dataclass
class OrderItemInfo:
    product_name: str
    quantity: int = 1


@dataclass
class OrderInfo:
    """An order joined with its customer and line items."""

    id: str
    order_number: str
    customer: CustomerInfo
    status: str = "pending"
    total_amount: float = 0.0
    delivery_charge: float = 0.0
    payment_method: str | None = None
    payment_status: str = "unpaid"
    items: list[OrderItemInfo] = field(default_factory=list)
