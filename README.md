# shopmesh

A small shop backend made of three parts:

- **Inventory**: products with a name, a category, a price and a stock count. Products can be created, read, updated, deleted and listed.
- **Orders**: orders that belong to a user. Each order holds a list of items (a product id and a quantity) and a status such as `pending`, `completed` or `cancelled`.
- **Gateway**: a single HTTP entry point. It forwards `/products/...` to the inventory service and forwards `/orders/...` and `/users/...` to the order service.

Both services store their data in MongoDB through `pymongo`. Each service has Flask routes and a plain-Python RPC-style handler.

## Installation

```
pip install .
```

To install the test dependencies as well, run `pip install .[test]`.

## Running the gateway

```
shopmesh-gateway
```

| Option            | Default                        |
|-------------------|--------------------------------|
| `--host`          | `0.0.0.0`                      |
| `--port`          | `8088`                         |
| `--inventory-url` | `http://inventory-service:8080` |
| `--order-url`     | `http://order-service:8081`    |

The gateway sends each request on to the upstream service with the same method, path, query string and body. It drops hop-by-hop headers and adds the client address to `X-Forwarded-For`. If the upstream service cannot be reached, the gateway answers `502`.

CORS is permissive. A request that carries an `Origin` header gets `Access-Control-Allow-Origin: *`. An `OPTIONS` preflight that carries an `Origin` header is answered with `204`.

To build the gateway inside your own code, use `shopmesh.gateway.create_app(inventory_url, order_url)`. To add the same forwarding routes to a Flask app you already have, use `shopmesh.gateway.register_routes(app, inventory_url, order_url)`.

## Products

```python
from flask import Flask
from pymongo import MongoClient

from shopmesh.products import ProductService
from shopmesh.product_store import MongoProductRepository
from shopmesh.product_api import register_product_routes

db = MongoClient("mongodb://localhost:27017")["inventorydb"]
service = ProductService(MongoProductRepository(db))

app = Flask(__name__)
register_product_routes(app, service)
app.run(port=8080)
```

| Method | Path             | Result                                                        |
|--------|------------------|---------------------------------------------------------------|
| POST   | `/products/`     | creates a product, `201`; a malformed body gives `400`        |
| GET    | `/products/`     | lists all products                                            |
| GET    | `/products/<id>` | returns one product; `404` if it cannot be found              |
| PATCH  | `/products/<id>` | replaces the product's fields with the body's; `500` if unknown |
| DELETE | `/products/<id>` | deletes the product                                           |

A product in JSON looks like this:

```json
{"id": "...", "name": "Desk lamp", "category": "lighting", "price": 24.5, "stock": 12}
```

`Product.from_json` builds a product from this shape and raises `ValueError` when a field has the wrong type. `Product.to_json` converts a product back to this shape. `Product.to_document` and `Product.from_document` convert to and from the form stored in MongoDB, in the `products` collection.

## Orders

```python
from flask import Flask
from pymongo import MongoClient

from shopmesh.orders import OrderService
from shopmesh.order_store import MongoOrderRepository
from shopmesh.order_api import register_order_routes

db = MongoClient("mongodb://localhost:27017")["orders_db"]
service = OrderService(MongoOrderRepository(db))

app = Flask(__name__)
register_order_routes(app, service)
app.run(port=8081)
```

| Method | Path                      | Result                                                       |
|--------|---------------------------|--------------------------------------------------------------|
| POST   | `/orders/`                | creates an order, `201`                                      |
| GET    | `/orders/<id>`            | returns one order; `404` if it cannot be found               |
| PATCH  | `/orders/<id>`            | sets the status from a body such as `{"status": "completed"}` |
| GET    | `/users/<user_id>/orders` | lists a user's orders                                        |

An order in JSON looks like this:

```json
{
  "id": "...",
  "user_id": "u-1",
  "items": [{"product_id": "p-1", "quantity": 2}],
  "status": "pending",
  "created_at": 1700000000
}
```

`MongoOrderRepository.create` stamps `created_at` with the current Unix time before it stores the order in the `orders` collection.

## Identifiers

The MongoDB repositories look up records by `ObjectId`. An id passed to a get, update or delete call must therefore be 24 hexadecimal characters; any other id raises `ValueError`. When a record is created with an empty id, MongoDB assigns the id.

A lookup that finds nothing raises one of these errors:

- `ProductNotFoundError`, from `shopmesh.products`
- `OrderNotFoundError`, from `shopmesh.orders`

## RPC-style handlers

`shopmesh.product_rpc.InventoryRpcHandler` and `shopmesh.order_rpc.OrderRpcHandler` provide the same operations as plain method calls. They return message objects: `ProductMessage`, `OrderMessage` and `OrderItemMessage`. These handlers behave as follows:

- `InventoryRpcHandler.create_product` gives each new product a random UUID as its id.
- `OrderRpcHandler.create_order` starts each order in the `pending` status.
- `OrderRpcHandler.update_order_status` returns the order as it is stored after the change.

## What is not included

- The only command is the gateway. There is no command that starts the inventory or order service; run their Flask apps yourself, as shown above.
- The RPC-style handlers are ordinary Python objects. The package does not serve them over a network.

## Tests

```
pip install .[test]
pytest
```