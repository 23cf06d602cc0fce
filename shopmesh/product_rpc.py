"""RPC-style inventory operations exchanging product messages."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from shopmesh.products import Product, ProductService


def _int32(value: int) -> int:
    return (value + 2**31) % 2**32 - 2**31


@dataclass
class ProductMessage:
    """A product as it travels over the wire."""

    id: str = ""
    name: str = ""
    category_id: str = ""
    price: float = 0.0
    quantity: int = 0


def to_message(product: Product) -> ProductMessage:
    """Convert a stored product into its wire message."""
    return ProductMessage(
        id=product.id,
        name=product.name,
        category_id=product.category,
        price=product.price,
        quantity=_int32(product.stock),
    )


class InventoryRpcHandler:
    """Serves inventory calls on top of a product service."""

    def __init__(self, service: ProductService) -> None:
        self._service = service

    def create_product(self, product: ProductMessage) -> ProductMessage:
        """Store a new product under a freshly generated id."""
        created = Product(
            id=str(uuid.uuid4()),
            name=product.name,
            category=product.category_id,
            price=product.price,
            stock=int(product.quantity),
        )
        self._service.create_product(created)
        return to_message(created)

    def get_product(self, product_id: str) -> ProductMessage:
        return to_message(self._service.get_product_by_id(product_id))

    def update_product(self, product: ProductMessage) -> ProductMessage:
        updated = Product(
            id=product.id,
            name=product.name,
            category=product.category_id,
            price=product.price,
            stock=int(product.quantity),
        )
        self._service.update_product(updated)
        return to_message(updated)

    def delete_product(self, product_id: str) -> str:
        self._service.delete_product(product_id)
        return "Product deleted"

    def list_products(self) -> list[ProductMessage]:
        return [to_message(product) for product in self._service.list_products({})]