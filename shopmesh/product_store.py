"""MongoDB-backed product repository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pymongo
from bson import ObjectId

from shopmesh.products import Product, ProductNotFoundError, ProductRepository

_WRITE_TIMEOUT = 5
_LIST_TIMEOUT = 10


def _object_id(value: str) -> ObjectId:
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValueError(f"invalid object id: {value!r}")
    return ObjectId(value)


class MongoProductRepository(ProductRepository):
    """Stores products in the "products" collection of a database."""

    def __init__(self, database: Any) -> None:
        self._collection = database["products"]

    def create(self, product: Product) -> None:
        with pymongo.timeout(_WRITE_TIMEOUT):
            self._collection.insert_one(product.to_document())

    def get_by_id(self, product_id: str) -> Product:
        oid = _object_id(product_id)
        with pymongo.timeout(_WRITE_TIMEOUT):
            document = self._collection.find_one({"_id": oid})
        if document is None:
            raise ProductNotFoundError(f"product {product_id} not found")
        return Product.from_document(document)

    def update(self, product: Product) -> None:
        oid = _object_id(product.id)
        changes = {
            "$set": {
                "name": product.name,
                "category": product.category,
                "price": product.price,
                "stock": product.stock,
            }
        }
        with pymongo.timeout(_WRITE_TIMEOUT):
            result = self._collection.update_one({"_id": oid}, changes)
        if result.matched_count == 0:
            raise ProductNotFoundError("product not found")

    def delete(self, product_id: str) -> None:
        oid = _object_id(product_id)
        with pymongo.timeout(_WRITE_TIMEOUT):
            self._collection.delete_one({"_id": oid})

    def list(self, query: Mapping[str, Any]) -> list[Product]:
        with pymongo.timeout(_LIST_TIMEOUT):
            return [Product.from_document(document) for document in self._collection.find(dict(query))]