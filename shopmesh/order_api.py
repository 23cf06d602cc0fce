"""HTTP routes for orders."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from flask import Flask, Response, jsonify, request

from shopmesh.orders import Order, OrderService


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


def _status_from(data: Any) -> str:
    if not isinstance(data, Mapping):
        raise ValueError("request must be a JSON object")
    status = data.get("status")
    if status is None:
        return ""
    if not isinstance(status, str):
        raise ValueError("field 'status' must be a string")
    return status


class OrderHandler:
    """Flask views that expose an order service over JSON."""

    def __init__(self, service: OrderService) -> None:
        self._service = service

    def create_order(self) -> tuple[Response, int]:
        try:
            order = Order.from_json(_read_json())
        except ValueError as exc:
            return _error(400, str(exc))
        try:
            self._service.create_order(order)
        except Exception as exc:  # any storage failure becomes a server error
            return _error(500, str(exc))
        return jsonify(order.to_json()), 201

    def get_order_by_id(self, order_id: str) -> tuple[Response, int]:
        try:
            order = self._service.get_order_by_id(order_id)
        except Exception:
            return _error(404, "Order not found")
        return jsonify(order.to_json()), 200

    def update_order(self, order_id: str) -> tuple[Response, int]:
        """Change the status of an order."""
        try:
            status = _status_from(_read_json())
        except ValueError as exc:
            return _error(400, str(exc))
        try:
            self._service.update_order(order_id, status)
        except Exception as exc:
            return _error(500, str(exc))
        return jsonify(message="Order updated"), 200

    def list_orders_by_user(self, user_id: str) -> tuple[Response, int]:
        try:
            orders = self._service.list_by_user_id(user_id)
        except Exception as exc:
            return _error(500, str(exc))
        return jsonify([order.to_json() for order in orders]), 200


def register_order_routes(app: Flask, service: OrderService) -> OrderHandler:
    """Mount the /orders and /users/<id>/orders routes and return their handler."""
    handler = OrderHandler(service)
    app.add_url_rule("/orders/", "orders.create", handler.create_order, methods=["POST"])
    app.add_url_rule("/orders/<order_id>", "orders.get", handler.get_order_by_id, methods=["GET"])
    app.add_url_rule("/orders/<order_id>", "orders.update", handler.update_order, methods=["PATCH"])
    app.add_url_rule(
        "/users/<user_id>/orders", "orders.by_user", handler.list_orders_by_user, methods=["GET"]
    )
    return handler