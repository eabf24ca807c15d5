"""HTTP front end for the key/value store."""

from __future__ import annotations

import json
import logging
import tempfile
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .db import Db, NotFoundError, open_db
from .entry import CorruptedError

PORT = 8079
KEY_PREFIX = "/db/"

_log = logging.getLogger(__name__)


def _parse_value(body: bytes) -> str | None:
    """Return the "value" field of a JSON body, or None if the body is bad."""
    try:
        payload, _ = json.JSONDecoder().raw_decode(body.decode().lstrip())
    except ValueError:
        return None
    if payload is None:
        return ""
    if not isinstance(payload, dict):
        return None
    value = payload.get("value")
    if value is None:
        return ""
    return value if isinstance(value, str) else None


def make_handler(db: Db) -> type[BaseHTTPRequestHandler]:
    """Build a request handler class serving GET/POST on /db/<key>."""

    class DbRequestHandler(BaseHTTPRequestHandler):
        def log_message(self, format: str, *args: object) -> None:
            _log.debug(format, *args)

        def _send(self, status: HTTPStatus, text: str | None = None,
                  body: bytes = b"", ctype: str = "") -> None:
            if text is not None:
                body, ctype = (text + "\n").encode(), "text/plain; charset=utf-8"
            self.send_response(status)
            if ctype:
                self.send_header("Content-Type", ctype)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(body)

        def _dispatch(self) -> None:
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length > 0 else b""
            path = unquote(urlsplit(self.path).path)
            if not path.startswith(KEY_PREFIX):
                self._send(HTTPStatus.NOT_FOUND, "404 page not found")
                return
            key = path[len(KEY_PREFIX):]
            if not key:
                self._send(HTTPStatus.BAD_REQUEST, "missing key")
            elif self.command == "GET":
                self._get(key)
            elif self.command == "POST":
                self._post(key, body)
            else:
                self._send(HTTPStatus.METHOD_NOT_ALLOWED, "method not allowed")

        def _get(self, key: str) -> None:
            try:
                value = db.get(key)
            except (NotFoundError, CorruptedError):
                self._send(HTTPStatus.NOT_FOUND, "404 page not found")
                return
            except Exception:
                _log.exception("failed to read key %r", key)
                self._send(HTTPStatus.INTERNAL_SERVER_ERROR, "internal error")
                return
            payload = json.dumps({"key": key, "value": value}, ensure_ascii=False,
                                 separators=(",", ":"))
            self._send(HTTPStatus.OK, body=(payload + "\n").encode(), ctype="application/json")

        def _post(self, key: str, body: bytes) -> None:
            value = _parse_value(body)
            if value is None:
                self._send(HTTPStatus.BAD_REQUEST, "bad request")
                return
            try:
                db.put(key, value)
            except Exception:
                _log.exception("failed to store key %r", key)
                self._send(HTTPStatus.INTERNAL_SERVER_ERROR, "failed to store value")
                return
            self._send(HTTPStatus.CREATED)

        do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = do_OPTIONS = _dispatch

    return DbRequestHandler


def main(argv: list[str] | None = None) -> int:
    """Run the store's HTTP server on port 8079 until interrupted."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    storage_path = Path(tempfile.gettempdir()) / "db-data"
    try:
        storage_path.mkdir(parents=True, exist_ok=True)
        db = open_db(storage_path)
    except (OSError, CorruptedError) as exc:
        _log.error("failed to open db: %s", exc)
        return 1

    with db:
        httpd = ThreadingHTTPServer(("", PORT), make_handler(db))
        httpd.daemon_threads = True
        _log.info("DB HTTP server listening on :%d", PORT)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            httpd.server_close()
    return 0