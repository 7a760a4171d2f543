"""HTTP front end that exposes the bounty ledger as a small JSON API."""

from __future__ import annotations

import argparse
import json
import logging
import threading
import time
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Mapping
from urllib.parse import urlsplit

from .ledger import Ledger, LedgerError
from .models import Task, TaskStatus

logger = logging.getLogger(__name__)

JSON_TYPE = "application/json"
TEXT_TYPE = "text/plain; charset=utf-8"
ADMIN_HEADER = "X-Wallet-Address"
DEFAULT_PORT = 8080


@dataclass
class Response:
    """Status, headers and body produced for one request."""

    status: int = 200
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, payload: Any, status: int = 200) -> "Response":
        """Build a JSON response; the body ends with a newline."""
        body = (json.dumps(payload) + "\n").encode("utf-8")
        return cls(status=status, body=body, headers={"Content-Type": JSON_TYPE})

    @classmethod
    def error(cls, message: str, status: int) -> "Response":
        """Build a plain-text error response."""
        return cls(
            status=status,
            body=(message + "\n").encode("utf-8"),
            headers={"Content-Type": TEXT_TYPE, "X-Content-Type-Options": "nosniff"},
        )

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """The body decoded as JSON."""
        return json.loads(self.body)


class _RequestError(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def _load_json(body: bytes | str | None) -> Any:
    if body is None:
        body = b""
    text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
    if not text.strip():
        raise _RequestError("EOF", 400)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise _RequestError(str(exc), 400) from None


def _decode_object(body: bytes | str | None, names: tuple[str, ...]) -> dict[str, str]:
    data = _load_json(body)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise _RequestError("request body must be a JSON object", 400)
    values: dict[str, str] = {}
    for name in names:
        value = data.get(name)
        if value is None:
            value = ""
        elif not isinstance(value, str):
            raise _RequestError(
                f"field {name!r} must be a string, got {type(value).__name__}", 400
            )
        values[name] = value
    return values


def _decode_task(body: bytes | str | None) -> Task:
    data = _load_json(body)
    if data is None:
        return Task()
    try:
        return Task.from_dict(data)
    except ValueError as exc:
        raise _RequestError(str(exc), 400) from None


class BountyApp:
    """Routes API requests to a ledger and renders the results."""

    def __init__(self, ledger: Ledger | None = None) -> None:
        self.ledger = ledger if ledger is not None else Ledger()
        self.tasks: dict[str, Task] = {}
        self._lock = threading.Lock()
        logger.info("=== IMPORTANT ADDRESSES ===")
        logger.info("Admin Address: %s", self.ledger.admin_address)
        logger.info("Use this address in %s header for admin operations", ADMIN_HEADER)

    def handle(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = b"",
    ) -> Response:
        """Answer one request given its method, path, headers and raw body."""
        path = urlsplit(path).path
        logger.info("Received request: %s %s", method, path)
        header_map = {name.lower(): value for name, value in (headers or {}).items()}
        with self._lock:
            try:
                return self._dispatch(method, path, header_map, body)
            except _RequestError as exc:
                return Response.error(exc.message, exc.status)

    def _dispatch(
        self, method: str, path: str, headers: dict[str, str], body: Any
    ) -> Response:
        if method == "GET" and path == "/tasks":
            return self._list_tasks()
        if method == "POST" and path == "/tasks":
            return self._create_task(body)
        if method == "PUT" and path.endswith("/claim"):
            return self._claim_task(path, body)
        if method == "PUT" and path.startswith("/admin/tasks/"):
            return self._approve_task(path, headers)
        if method == "POST" and path == "/admin/admins":
            return self._add_admin(headers, body)
        if method == "POST" and path == "/generate-address":
            return self._generate_address(body)
        if method == "GET" and path == "/addresses":
            return self._list_addresses()
        logger.info("No route match found for: %s %s", method, path)
        return Response.error("404 page not found", 404)

    def _list_addresses(self) -> Response:
        return Response.from_json(
            {
                "admin_address": self.ledger.admin_address,
                "all_addresses": self.ledger.list_addresses(),
            }
        )

    def _create_task(self, body: Any) -> Response:
        task = _decode_task(body)
        task.id = f"task-{int(time.time())}"
        task.status = TaskStatus.OPEN.value
        try:
            self.ledger.create_task(task)
        except LedgerError as exc:
            raise _RequestError(str(exc), 500) from None
        self.tasks[task.id] = task
        logger.info("Created task: %s", task.id)
        return Response.from_json(task.to_dict())

    def _list_tasks(self) -> Response:
        return Response.from_json([task.to_dict() for task in self.ledger.list_tasks()])

    def _generate_address(self, body: Any) -> Response:
        request = _decode_object(body, ("seed",))
        try:
            address = self.ledger.generate_test_address(request["seed"])
        except ValueError:
            address = ""
        if not address:
            raise _RequestError("Failed to generate address", 500)
        return Response.from_json({"address": address})

    def _claim_task(self, path: str, body: Any) -> Response:
        parts = path.split("/")
        if len(parts) < 4:
            raise _RequestError("Invalid URL format", 400)
        task_id = parts[2]
        claim = _decode_object(body, ("claimer", "proof"))
        try:
            self.ledger.claim_task(task_id, claim["claimer"], claim["proof"])
        except LedgerError as exc:
            raise _RequestError(str(exc), 500) from None
        claimed = self.ledger.get_task(task_id) or Task()
        return Response.from_json(claimed.to_dict())

    def _require_admin(self, headers: dict[str, str]) -> str:
        admin = headers.get(ADMIN_HEADER.lower(), "")
        if not self.ledger.is_admin(admin):
            raise _RequestError("Unauthorized - Admin access required", 401)
        return admin

    def _approve_task(self, path: str, headers: dict[str, str]) -> Response:
        admin = self._require_admin(headers)
        parts = path.split("/")
        if len(parts) < 4:
            raise _RequestError("Invalid URL format", 400)
        task_id = parts[3]
        task = self.ledger.get_task(task_id)
        if task is None or not task.id:
            raise _RequestError("Task not found", 404)
        try:
            self.ledger.approve_task(task, admin)
        except LedgerError as exc:
            raise _RequestError(str(exc), 500) from None
        updated = self.ledger.get_task(task_id) or task
        return Response.from_json(updated.to_dict())

    def _add_admin(self, headers: dict[str, str], body: Any) -> Response:
        admin = self._require_admin(headers)
        request = _decode_object(body, ("address",))
        try:
            self.ledger.add_admin(request["address"], admin)
        except LedgerError as exc:
            raise _RequestError(str(exc), 500) from None
        return Response.from_json({"message": "Admin added successfully"})

    def serve(self, host: str = "", port: int = DEFAULT_PORT) -> None:
        """Serve the API on host and port until interrupted."""
        with ThreadingHTTPServer((host, port), make_handler(self)) as httpd:
            httpd.serve_forever()


def make_handler(app: BountyApp) -> type[BaseHTTPRequestHandler]:
    """Return a request handler class that forwards every request to app."""

    class _Handler(BaseHTTPRequestHandler):
        server_version = "bountyboard"

        def _respond(self) -> None:
            try:
                length = int(self.headers.get("Content-Length") or 0)
            except ValueError:
                self.send_error(400, "invalid Content-Length")
                return
            body = self.rfile.read(length) if length > 0 else b""
            response = app.handle(self.command, self.path, self.headers, body)
            self.send_response(response.status)
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(response.body)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(response.body)

        do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = _respond

        def log_message(self, format: str, *args: Any) -> None:
            logger.debug("%s - %s", self.address_string(), format % args)

    return _Handler


def main(argv: list[str] | None = None) -> int:
    """Start the bounty API server."""
    parser = argparse.ArgumentParser(
        prog="bountyboard", description="Tokenized task bounty API server."
    )
    parser.add_argument("--host", default="", help="address to bind (default: all)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    app = BountyApp()
    logger.info("Starting Tokenized Task Bounty System...")
    logger.info("Chain ID: %s", app.ledger.chain_id)
    logger.info("RPC Endpoint: %s", app.ledger.rpc_endpoint)
    logger.info("REST Endpoint: %s", app.ledger.rest_endpoint)
    logger.info("Server starting on %s:%d", args.host, args.port)
    logger.info("Available endpoints:")
    logger.info("GET  /addresses        - List all addresses")
    logger.info("POST /generate-address - Generate a new address")
    logger.info("POST /tasks            - Create a task")
    logger.info("GET  /tasks            - List all tasks")
    logger.info("PUT  /tasks/{id}/claim - Claim a task")
    logger.info("PUT  /admin/tasks/{id} - Approve a task")
    try:
        app.serve(args.host, args.port)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    return 0