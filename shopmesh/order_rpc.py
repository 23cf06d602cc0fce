"""RPC-style order operations exchanging order messages."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from shopmesh.orders import Order, OrderItem, OrderService


def _int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


@dataclass
class OrderItemMessage:
    """An order line as it travels over the wire."""

    product_id: str = ""
    quantity: int = 0


@dataclass
class OrderMessage:
    """An order as it travels over the wire."""

    id: str = ""
    user_id: str = ""
    items: list[OrderItemMessage] = field(default_factory=list)
    status: str = ""
    created_at: int = 0


def order_to_message(order: Order) -> OrderMessage:
    """Convert a stored order into its wire message."""
    return OrderMessage(
        id=order.id,
        user_id=order.user_id,
        items=[OrderItemMessage(item.product_id, _int32(item.quantity)) for item in order.items],
        status=order.status,
        created_at=order.created_at,
    )


def items_from_messages(items: Iterable[OrderItemMessage]) -> list[OrderItem]:
    """Convert wire order lines into stored order items."""
    return [OrderItem(product_id=item.product_id, quantity=int(item.quantity)) for item in items]


class OrderRpcHandler:
    """Serves order calls on top of an order service."""

    def __init__(self, service: OrderService, clock: Callable[[], float] = time.time) -> None:
        self._service = service
        self._clock = clock

    def create_order(self, user_id: str, items: Iterable[OrderItemMessage]) -> OrderMessage:
        """Place a new pending order for a user."""
        order = Order(
            user_id=user_id,
            items=items_from_messages(items),
            status="pending",
            created_at=int(self._clock()),
        )
        self._service.create_order(order)
        return order_to_message(order)

    def get_order(self, order_id: str) -> OrderMessage:
        return order_to_message(self._service.get_order_by_id(order_id))

    def update_order_status(self, order_id: str, status: str) -> OrderMessage:
        """Set the status of an order and return it as stored afterwards."""
        self._service.update_order(order_id, status)
        return order_to_message(self._service.get_order_by_id(order_id))

    def list_orders_by_user(self, user_id: str) -> list[OrderMessage]:
        return [order_to_message(order) for order in self._service.list_by_user_id(user_id)]