"""HTTP routes for the inventory's products."""

from __future__ import annotations

import json
from typing import Any

from flask import Flask, Response, jsonify, request

from shopmesh.products import Product, ProductService


def _read_json() -> Any:
    body = request.get_data(cache=True)
    if not body.strip():
        raise ValueError("request body is empty")
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    return {} if data is None else data


def _error(status: int, message: str) -> tuple[Response, int]:
    return jsonify(error=message), status


class ProductHandler:
    """Flask views that expose a product service over JSON."""

    def __init__(self, service: ProductService) -> None:
        self._service = service

    def create_product(self) -> tuple[Response, int]:
        try:
            product = Product.from_json(_read_json())
        except ValueError as exc:
            return _error(400, str(exc))
        try:
            self._service.create_product(product)
        except Exception as exc:  # any storage failure becomes a server error
            return _error(500, str(exc))
        return jsonify(product.to_json()), 201

    def get_product(self, product_id: str) -> tuple[Response, int]:
        try:
            product = self._service.get_product_by_id(product_id)
        except Exception:
            return _error(404, "Product not found")
        return jsonify(product.to_json()), 200

    def update_product(self, product_id: str) -> tuple[Response, int]:
        try:
            product = Product.from_json(_read_json())
        except ValueError as exc:
            return _error(400, str(exc))
        product.id = product_id
        try:
            self._service.update_product(product)
        except Exception as exc:
            return _error(500, str(exc))
        return jsonify(product.to_json()), 200

    def delete_product(self, product_id: str) -> tuple[Response, int]:
        try:
            self._service.delete_product(product_id)
        except Exception as exc:
            return _error(500, str(exc))
        return jsonify(message="Product deleted"), 200

    def list_products(self) -> tuple[Response, int]:
        try:
            products = self._service.list_products({})
        except Exception as exc:
            return _error(500, str(exc))
        return jsonify([product.to_json() for product in products]), 200


def register_product_routes(app: Flask, service: ProductService) -> ProductHandler:
    """Mount the /products routes on an application and return their handler."""
    handler = ProductHandler(service)
    app.add_url_rule("/products/", "products.create", handler.create_product, methods=["POST"])
    app.add_url_rule("/products/", "products.list", handler.list_products, methods=["GET"])
    app.add_url_rule("/products/<product_id>", "products.get", handler.get_product, methods=["GET"])
    app.add_url_rule("/products/<product_id>", "products.update", handler.update_product, methods=["PATCH"])
    app.add_url_rule("/products/<product_id>", "products.delete", handler.delete_product, methods=["DELETE"])
    return handler