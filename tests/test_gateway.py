import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from shopmesh.gateway import create_app, main


class _EchoHandler(BaseHTTPRequestHandler):
    def _reply(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode()
        payload = json.dumps(
            {
                "service": self.server.service_name,
                "method": self.command,
                "path": self.path,
                "body": body,
                "forwarded_for": self.headers.get("X-Forwarded-For", ""),
            }
        ).encode()
        self.send_response(201 if self.command == "POST" else 200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.send_header("Keep-Alive", "timeout=5")
        self.send_header("X-Upstream", self.server.service_name)
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = _reply

    def log_message(self, *args):
        pass


@pytest.fixture
def upstreams():
    servers = []
    urls = {}
    for name in ("inventory", "order"):
        server = ThreadingHTTPServer(("127.0.0.1", 0), _EchoHandler)
        server.service_name = name
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        urls[name] = f"http://127.0.0.1:{server.server_address[1]}"
    yield urls
    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def client(upstreams):
    return create_app(upstreams["inventory"], upstreams["order"]).test_client()


def test_products_go_to_inventory(client):
    response = client.get("/products/abc?page=2")
    assert response.status_code == 200
    body = response.get_json()
    assert body["service"] == "inventory"
    assert body["path"] == "/products/abc?page=2"
    assert response.headers["X-Upstream"] == "inventory"


def test_orders_go_to_order_service_with_body(client):
    response = client.post("/orders/", data='{"user_id": "u1"}', content_type="application/json")
    assert response.status_code == 201
    body = response.get_json()
    assert body["service"] == "order"
    assert body["method"] == "POST"
    assert body["body"] == '{"user_id": "u1"}'


def test_users_go_to_order_service(client):
    body = client.get("/users/u1/orders").get_json()
    assert body["service"] == "order"
    assert body["path"] == "/users/u1/orders"


@pytest.mark.parametrize("method", ["put", "patch", "delete"])
def test_methods_are_forwarded(client, method):
    body = getattr(client, method)("/products/p1").get_json()
    assert body["method"] == method.upper()


def test_forwarded_for_is_set_and_extended(client):
    first = client.get("/products/", environ_base={"REMOTE_ADDR": "192.0.2.7"}).get_json()
    assert first["forwarded_for"] == "192.0.2.7"
    second = client.get(
        "/products/",
        headers={"X-Forwarded-For": "198.51.100.1"},
        environ_base={"REMOTE_ADDR": "192.0.2.7"},
    ).get_json()
    assert second["forwarded_for"] == "198.51.100.1, 192.0.2.7"


def test_hop_by_hop_headers_are_dropped(client):
    response = client.get("/products/")
    assert "Keep-Alive" not in response.headers
    assert response.headers["X-Upstream"] == "inventory"


def test_unknown_path_is_not_found(client):
    assert client.get("/elsewhere").status_code == 404


def test_unreachable_upstream_is_bad_gateway():
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    dead = f"http://127.0.0.1:{port}"
    response = create_app(dead, dead).test_client().get("/products/p1")
    assert response.status_code == 502


def test_cors_origin_header_on_proxied_response(client):
    response = client.get("/products/", headers={"Origin": "http://shop.example.com"})
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_preflight_is_answered_locally(client):
    response = client.options(
        "/orders/o1",
        headers={"Origin": "http://shop.example.com", "Access-Control-Request-Method": "PATCH"},
    )
    assert response.status_code == 204
    assert "PATCH" in response.headers["Access-Control-Allow-Methods"].split(",")
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.get_data() == b""


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit) as excinfo:
        main(["--port", "not-a-port"])
    assert excinfo.value.code == 2