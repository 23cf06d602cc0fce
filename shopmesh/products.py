"""Product model, repository contract and service for the inventory."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from bson import ObjectId


class ProductNotFoundError(LookupError):
    """Raised when no product matches the requested identifier."""


def _field(data: Mapping[str, Any], name: str, expected: Any, default: Any) -> Any:
    value = data.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ValueError(f"field {name!r} has an invalid type: {type(value).__name__}")
    return value


@dataclass
class Product:
    """An item held in the inventory."""

    id: str = ""
    name: str = ""
    category: str = ""
    price: float = 0.0
    stock: int = 0

    def to_json(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Any) -> Product:
        """Build a product from decoded JSON, rejecting fields of the wrong type."""
        if not isinstance(data, Mapping):
            raise ValueError("product must be a JSON object")
        return cls._build(data, _field(data, "id", str, ""))

    def to_document(self) -> dict[str, Any]:
        """Return the stored form; an empty id is left out so the store assigns one."""
        document = asdict(self)
        product_id = document.pop("id")
        return {"_id": product_id, **document} if product_id else document

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Product:
        raw_id = document.get("_id")
        product_id = str(raw_id) if isinstance(raw_id, ObjectId) else _field(document, "_id", str, "")
        return cls._build(document, product_id)

    @classmethod
    def _build(cls, data: Mapping[str, Any], product_id: str) -> Product:
        return cls(
            id=product_id,
            name=_field(data, "name", str, ""),
            category=_field(data, "category", str, ""),
            price=float(_field(data, "price", (int, float), 0.0)),
            stock=_field(data, "stock", int, 0),
        )


class ProductRepository(abc.ABC):
    """Storage for products; get_by_id raises ProductNotFoundError when absent."""

    @abc.abstractmethod
    def create(self, product: Product) -> None: ...

    @abc.abstractmethod
    def get_by_id(self, product_id: str) -> Product: ...

    @abc.abstractmethod
    def update(self, product: Product) -> None: ...

    @abc.abstractmethod
    def delete(self, product_id: str) -> None: ...

    @abc.abstractmethod
    def list(self, query: Mapping[str, Any]) -> list[Product]: ...


class ProductService:
    """Inventory operations on top of a product repository."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def create_product(self, product: Product) -> None:
        self._repository.create(product)

    def get_product_by_id(self, product_id: str) -> Product:
        return self._repository.get_by_id(product_id)

    def update_product(self, product: Product) -> None:
        self._repository.update(product)

    def delete_product(self, product_id: str) -> None:
        self._repository.delete(product_id)

    def list_products(self, query: Mapping[str, Any] | None = None) -> list[Product]:
        return self._repository.list({} if query is None else query)