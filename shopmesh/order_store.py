"""MongoDB-backed order repository."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import pymongo
from bson import ObjectId

from shopmesh.orders import Order, OrderNotFoundError, OrderRepository

_WRITE_TIMEOUT = 5
_LIST_TIMEOUT = 10


def _object_id(value: str) -> ObjectId:
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValueError(f"invalid object id: {value!r}")
    return ObjectId(value)


class MongoOrderRepository(OrderRepository):
    """Stores orders in the "orders" collection of a database."""

    def __init__(self, database: Any, clock: Callable[[], float] = time.time) -> None:
        self._collection = database["orders"]
        self._clock = clock

    def create(self, order: Order) -> None:
        """Stamp the order with the current time and store it."""
        order.created_at = int(self._clock())
        with pymongo.timeout(_WRITE_TIMEOUT):
            self._collection.insert_one(order.to_document())

    def get_by_id(self, order_id: str) -> Order:
        oid = _object_id(order_id)
        with pymongo.timeout(_WRITE_TIMEOUT):
            document = self._collection.find_one({"_id": oid})
        if document is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return Order.from_document(document)

    def update_status(self, order_id: str, status: str) -> None:
        oid = _object_id(order_id)
        with pymongo.timeout(_WRITE_TIMEOUT):
            self._collection.update_one({"_id": oid}, {"$set": {"status": status}})

    def list_by_user(self, user_id: str) -> list[Order]:
        with pymongo.timeout(_LIST_TIMEOUT):
            return [Order.from_document(document) for document in self._collection.find({"user_id": user_id})]