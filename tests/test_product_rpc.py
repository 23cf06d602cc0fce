import uuid
from dataclasses import replace

import pytest

from shopmesh.product_rpc import InventoryRpcHandler, ProductMessage, to_message
from shopmesh.products import Product, ProductNotFoundError, ProductRepository, ProductService


class MemoryProducts(ProductRepository):
    def __init__(self):
        self.items = {}

    def create(self, product):
        self.items[product.id] = replace(product)

    def get_by_id(self, product_id):
        try:
            return self.items[product_id]
        except KeyError:
            raise ProductNotFoundError(product_id) from None

    def update(self, product):
        if product.id not in self.items:
            raise ProductNotFoundError("product not found")
        self.items[product.id] = replace(product)

    def delete(self, product_id):
        self.items.pop(product_id, None)

    def list(self, query):
        return list(self.items.values())


@pytest.fixture
def repository():
    return MemoryProducts()


@pytest.fixture
def handler(repository):
    return InventoryRpcHandler(ProductService(repository))


def test_to_message_maps_fields():
    message = to_message(Product(id="p1", name="Lamp", category="home", price=12.5, stock=4))
    assert message == ProductMessage(id="p1", name="Lamp", category_id="home", price=12.5, quantity=4)


def test_to_message_keeps_quantity_in_int32_range():
    stock = 2**31 + 11
    quantity = to_message(Product(stock=stock)).quantity
    assert -(2**31) <= quantity < 2**31
    assert quantity % 2**32 == stock % 2**32


def test_create_generates_fresh_uuid(handler, repository):
    request = ProductMessage(id="ignored", name="Lamp", category_id="home", price=12.5, quantity=4)
    created = handler.create_product(request)
    assert created.id != "ignored"
    assert uuid.UUID(created.id).version == 4
    assert replace(created, id="ignored") == request
    assert repository.items[created.id].category == "home"


def test_create_twice_gives_distinct_ids(handler):
    first = handler.create_product(ProductMessage(name="A"))
    second = handler.create_product(ProductMessage(name="A"))
    assert first.id != second.id


def test_get_round_trip(handler):
    created = handler.create_product(ProductMessage(name="Chair", category_id="office", price=40.0, quantity=2))
    assert handler.get_product(created.id) == created


def test_get_missing_raises(handler):
    with pytest.raises(ProductNotFoundError):
        handler.get_product("absent")


def test_update_replaces_fields(handler, repository):
    created = handler.create_product(ProductMessage(name="Chair", quantity=2))
    changed = replace(created, name="Armchair", quantity=7)
    assert handler.update_product(changed) == changed
    assert repository.items[created.id].stock == 7


def test_update_missing_raises(handler):
    with pytest.raises(ProductNotFoundError):
        handler.update_product(ProductMessage(id="absent"))


def test_delete_returns_message(handler, repository):
    created = handler.create_product(ProductMessage(name="Chair"))
    assert handler.delete_product(created.id) == "Product deleted"
    assert repository.items == {}


def test_list_products(handler):
    names = {"Lamp", "Chair", "Desk"}
    for name in names:
        handler.create_product(ProductMessage(name=name))
    assert {message.name for message in handler.list_products()} == names