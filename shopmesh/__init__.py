"""Inventory and order services over MongoDB, with Flask routes, RPC-style handlers and an HTTP gateway."""

__version__ = "0.1.0"