"""API gateway that forwards product and order traffic to the backing services."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

import requests
from flask import Flask, Response, request

INVENTORY_URL = "http://inventory-service:8080"
ORDER_URL = "http://order-service:8081"
DEFAULT_PORT = 8088

_log = logging.getLogger(__name__)

_HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-connection",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)
_PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
_CORS_METHODS = "GET,POST,PUT,PATCH,DELETE,HEAD,OPTIONS"
_CORS_HEADERS = "Origin,Content-Length,Content-Type"
_CORS_MAX_AGE = str(12 * 60 * 60)


class _ReverseProxy:
    """Forwards the current request to one upstream host."""

    def __init__(self, target: str, session: requests.Session) -> None:
        self._target = target.rstrip("/")
        self._session = session

    def __call__(self, proxy_path: str = "") -> Response:
        url = self._target + request.path
        if request.query_string:
            url += "?" + request.query_string.decode("latin-1")

        headers = {
            name: value
            for name, value in request.headers.items()
            if name.lower() not in _HOP_BY_HOP and name.lower() != "content-length"
        }
        client = request.remote_addr
        if client:
            prior = headers.get("X-Forwarded-For")
            headers["X-Forwarded-For"] = f"{prior}, {client}" if prior else client

        body = request.get_data()
        try:
            upstream = self._session.request(
                request.method,
                url,
                headers=headers,
                data=body or None,
                allow_redirects=False,
                stream=True,
            )
        except requests.RequestException as exc:
            _log.warning("proxy error for %s: %s", url, exc)
            return Response(status=502)

        try:
            content = upstream.raw.read(decode_content=False)
        finally:
            upstream.close()
        out_headers = [
            (name, value)
            for name, value in upstream.headers.items()
            if name.lower() not in _HOP_BY_HOP and name.lower() != "content-length"
        ]
        return Response(content, status=upstream.status_code, headers=out_headers)


def _cors_preflight() -> Response | None:
    if request.method == "OPTIONS" and request.headers.get("Origin"):
        response = Response(status=204)
        response.headers["Access-Control-Allow-Methods"] = _CORS_METHODS
        response.headers["Access-Control-Allow-Headers"] = _CORS_HEADERS
        response.headers["Access-Control-Max-Age"] = _CORS_MAX_AGE
        return response
    return None


def _cors_headers(response: Response) -> Response:
    if request.headers.get("Origin"):
        response.headers["Access-Control-Allow-Origin"] = "*"
    return response


def register_routes(app: Flask, inventory_url: str, order_url: str) -> None:
    """Route /products to the inventory service and /orders and /users to the order service."""
    session = requests.Session()
    session.headers.clear()
    inventory = _ReverseProxy(inventory_url, session)
    orders = _ReverseProxy(order_url, session)
    for prefix, proxy in (("products", inventory), ("orders", orders), ("users", orders)):
        app.add_url_rule(f"/{prefix}/", f"{prefix}_root", proxy, methods=_PROXY_METHODS)
        app.add_url_rule(f"/{prefix}/<path:proxy_path>", f"{prefix}_path", proxy, methods=_PROXY_METHODS)


def create_app(inventory_url: str = INVENTORY_URL, order_url: str = ORDER_URL) -> Flask:
    """Build the gateway application with permissive CORS."""
    app = Flask(__name__)
    app.before_request(_cors_preflight)
    app.after_request(_cors_headers)
    register_routes(app, inventory_url, order_url)
    return app


def main(argv: Sequence[str] | None = None) -> None:
    """Run the gateway."""
    parser = argparse.ArgumentParser(prog="shopmesh-gateway", description="Run the API gateway.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument("--inventory-url", default=INVENTORY_URL, help="inventory service base URL")
    parser.add_argument("--order-url", default=ORDER_URL, help="order service base URL")
    args = parser.parse_args(argv)
    create_app(args.inventory_url, args.order_url).run(host=args.host, port=args.port)