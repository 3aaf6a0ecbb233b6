"""Test helper functions."""

from io import BytesIO
from unittest.mock import MagicMock, Mock

QUERY_METHODS = ("select", "eq", "limit", "order", "insert", "update", "upsert", "delete")


def make_query(data=None, error: Exception = None) -> MagicMock:
    """Chainable PostgREST query mock whose execute() returns ``data`` or raises ``error``."""
    query = MagicMock()
    for method in QUERY_METHODS:
        getattr(query, method).return_value = query
    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=data if data is not None else [])
    return query


class MockSocket:
    """Just enough socket for BaseHTTPRequestHandler to parse one request line."""

    def __init__(self, request_line: bytes):
        self.request_line = request_line

    def makefile(self, *args, **kwargs):
        return BytesIO(self.request_line)

    def sendall(self, data):
        pass

    def close(self):
        pass


def call_handler(handler_class, method: str, path: str):
    """Instantiate a Vercel-style handler and invoke ``do_<method>`` exactly once with mocked output."""
    request_line = f"{method} {path} HTTP/1.1\r\n\r\n".encode("utf-8")
    # construction would otherwise dispatch the request itself
    quiet_class = type(handler_class.__name__, (handler_class,), {"handle": lambda self: None})
    h = quiet_class(MockSocket(request_line), ("127.0.0.1", 8000), None)
    h.rfile = BytesIO(request_line)
    h.raw_requestline = h.rfile.readline()
    h.parse_request()
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()
    getattr(h, f"do_{method}")()
    h.wfile.seek(0)
    return h, h.wfile.read().decode("utf-8")


def sent_headers(h) -> dict:
    """Headers passed to send_header, as a dict."""
    return {call.args[0]: call.args[1] for call in h.send_header.call_args_list}
