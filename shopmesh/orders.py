"""Order model, repository contract and service."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

from bson import ObjectId


class OrderNotFoundError(LookupError):
    """Raised when no order matches the requested identifier."""


def _field(data: Mapping[str, Any], name: str, expected: type, default: Any) -> Any:
    value = data.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ValueError(f"field {name!r} has an invalid type: {type(value).__name__}")
    return value


@dataclass
class OrderItem:
    """A product and the quantity ordered of it."""

    product_id: str = ""
    quantity: int = 0

    def to_json(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Any) -> OrderItem:
        if not isinstance(data, Mapping):
            raise ValueError("order item must be a JSON object")
        return cls(_field(data, "product_id", str, ""), _field(data, "quantity", int, 0))


@dataclass
class Order:
    """A customer's order; status is pending, completed or cancelled."""

    id: str = ""
    user_id: str = ""
    items: list[OrderItem] = field(default_factory=list)
    status: str = ""
    created_at: int = 0

    def to_json(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Any) -> Order:
        """Build an order from decoded JSON, rejecting fields of the wrong type."""
        if not isinstance(data, Mapping):
            raise ValueError("order must be a JSON object")
        return cls._build(data, _field(data, "id", str, ""))

    def to_document(self) -> dict[str, Any]:
        """Return the stored form; an empty id is left out so the store assigns one."""
        document = asdict(self)
        order_id = document.pop("id")
        return {"_id": order_id, **document} if order_id else document

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Order:
        raw_id = document.get("_id")
        order_id = str(raw_id) if isinstance(raw_id, ObjectId) else _field(document, "_id", str, "")
        return cls._build(document, order_id)

    @classmethod
    def _build(cls, data: Mapping[str, Any], order_id: str) -> Order:
        items = _field(data, "items", list, [])
        return cls(
            id=order_id,
            user_id=_field(data, "user_id", str, ""),
            items=[OrderItem.from_json(item) for item in items],
            status=_field(data, "status", str, ""),
            created_at=_field(data, "created_at", int, 0),
        )


class OrderRepository(abc.ABC):
    """Storage for orders; get_by_id raises OrderNotFoundError when absent."""

    @abc.abstractmethod
    def create(self, order: Order) -> None: ...

    @abc.abstractmethod
    def get_by_id(self, order_id: str) -> Order: ...

    @abc.abstractmethod
    def update_status(self, order_id: str, status: str) -> None: ...

    @abc.abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]: ...


class OrderService:
    """Order operations on top of an order repository."""

    def __init__(self, repository: OrderRepository) -> None:
        self._repository = repository

    def create_order(self, order: Order) -> None:
        self._repository.create(order)

    def get_order_by_id(self, order_id: str) -> Order:
        return self._repository.get_by_id(order_id)

    def update_order(self, order_id: str, status: str) -> None:
        self._repository.update_status(order_id, status)

    def list_by_user_id(self, user_id: str) -> list[Order]:
        return self._repository.list_by_user(user_id)