"""HTTP handlers serving quotations, usable as a WSGI application."""

from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Callable, Iterable
from urllib.parse import parse_qs, urlsplit

from quotaday.quote import Quotation, QuoteBook, QuoteBookError

log = logging.getLogger(__name__)


@dataclass
class Request:
    """An incoming HTTP request."""

    method: str = "GET"
    target: str = "/"
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    remote_addr: str = ""
    proto: str = "HTTP/1.1"

    def header_values(self, name: str) -> list[str]:
        return [v for k, v in self.headers if k.lower() == name.lower()]

    def header(self, name: str) -> str:
        return next(iter(self.header_values(name)), "")


@dataclass
class Response:
    """An outgoing HTTP response."""

    status: int = HTTPStatus.OK
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


def remote_host_info(request: Request) -> str:
    """Describe the client of a request, honouring common proxy headers."""
    remote_addr = request.remote_addr
    if remote := request.header("Cf-Connecting-Ip"):
        remote_addr = f"{remote} ({request.header('Cf-Ipcountry')})"
    elif remote := request.header("X-Real-Ip") or request.header("X-Forwarded-For"):
        remote_addr = remote
    agent = json.dumps(request.header("User-Agent"))
    return f"{remote_addr} {agent} - {request.method} {request.proto} {json.dumps(request.target)}"


def request_from_environ(environ: dict[str, Any]) -> Request:
    """Build a Request from a WSGI environment."""
    target = environ.get("PATH_INFO", "") or "/"
    if query := environ.get("QUERY_STRING", ""):
        target = f"{target}?{query}"
    headers = [
        (key[5:].replace("_", "-").title(), value)
        for key, value in environ.items()
        if key.startswith("HTTP_")
    ]
    length = int(environ.get("CONTENT_LENGTH") or 0)
    body = environ["wsgi.input"].read(length) if length > 0 else b""
    return Request(
        method=environ.get("REQUEST_METHOD", "GET"),
        target=target,
        headers=headers,
        body=body,
        remote_addr=environ.get("REMOTE_ADDR", ""),
        proto=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
    )


def _render(write: Callable[[io.StringIO], None]) -> bytes:
    out = io.StringIO()
    write(out)
    return out.getvalue().encode("utf-8")


class Server:
    """Serves quotations from an in-memory quote book."""

    def __init__(self) -> None:
        self.quote_book = QuoteBook()
        self.quote_book.fill_example()

    def get_quote(self, request: Request, quote_id: int | None = None) -> Response:
        """Serve one quotation, random unless ``quote_id`` is given."""
        log.info(remote_host_info(request))
        try:
            if quote_id is None:
                quotation = self.quote_book.random_quotation()
            else:
                quotation = self.quote_book.get_quote(quote_id)
        except QuoteBookError as exc:
            return Response(HTTPStatus.BAD_REQUEST, body=str(exc).encode("utf-8"))

        # Without an Accept header any MIME type is acceptable.
        for mime_type in request.header_values("Accept") or ["*/*"]:
            for value in mime_type.split(","):
                if value == "text/html":
                    content_type, write = "text/html; charset=UTF-8", quotation.write_html
                elif value in ("application/json", "*/*"):
                    content_type = "application/json; charset=UTF-8"
                    write = quotation.write_json
                else:
                    log.info("Skipping MIME type %r", value)
                    continue
                log.info("Serving MIME type %r", value)
                return Response(HTTPStatus.OK, {"Content-Type": content_type}, _render(write))

        log.info('No acceptable MIME type found in the "Accept" header')
        return Response(HTTPStatus.NOT_ACCEPTABLE)

    def post_quote(self, request: Request) -> Response:
        """Add the quotation in the request body to the quote book."""
        log.info(remote_host_info(request))
        try:
            new_quote = Quotation.from_dict(json.loads(request.body))
        except ValueError as exc:
            log.info("json decode failed: %s", exc)
            return Response(HTTPStatus.BAD_REQUEST, body=b"could not read request body")
        try:
            self.quote_book.add_quote(new_quote)
        except QuoteBookError as exc:
            log.info("QuoteBook Add failed: %s", exc)
            return Response(HTTPStatus.INSUFFICIENT_STORAGE, body=str(exc).encode("utf-8"))
        log.info("Quote added:\n%r\n%r", new_quote.quote, new_quote.author)
        return Response(HTTPStatus.CREATED, body=_render(new_quote.write_json))

    def handle(self, request: Request) -> Response:
        """Route a request to the matching handler."""
        parts = urlsplit(request.target)
        if parts.path != "/quote":
            return Response(HTTPStatus.NOT_FOUND, body=b"404 page not found\n")
        if request.method == "POST":
            return self.post_quote(request)
        if request.method != "GET":
            return Response(HTTPStatus.METHOD_NOT_ALLOWED, {"Allow": "GET, POST"})
        raw = parse_qs(parts.query).get("id", [None])[0]
        if raw is None:
            return self.get_quote(request)
        try:
            quote_id = int(raw)
        except ValueError:
            message = f"Invalid format for parameter id: {raw!r} is not an integer"
            return Response(HTTPStatus.BAD_REQUEST, body=message.encode("utf-8"))
        return self.get_quote(request, quote_id)

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        response = self.handle(request_from_environ(environ))
        status = HTTPStatus(response.status)
        headers = [*response.headers.items(), ("Content-Length", str(len(response.body)))]
        start_response(f"{status.value} {status.phrase}", headers)
        return [response.body]