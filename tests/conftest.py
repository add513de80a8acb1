import socket
import socketserver
import threading

import pytest

from gopher_indexer.config import CrawlConfig
from gopher_indexer.session import CrawlContext

HOST = "127.0.0.1"
NOT_FOUND = b"3Resource not found\t\terror.host\t1\r\n.\r\n"


def menu(*lines, terminator=True):
    """Build a directory index response from lines without CRLF."""
    body = "".join(f"{line}\r\n" for line in lines)
    if terminator:
        body += ".\r\n"
    return body.encode('utf-8')


def entry(item_type, selector, display="item", host=HOST, port=70):
    return f"{item_type}{display}\t{selector}\t{host}\t{port}"


class GopherRequestHandler(socketserver.BaseRequestHandler):
    def handle(self):
        data = b""
        while not data.endswith(b"\r\n"):
            chunk = self.request.recv(1024)
            if not chunk:
                return
            data += chunk

        self.server.raw_requests.append(data)
        selector = data[:-2].decode('utf-8', 'surrogateescape')
        self.server.requests.append(selector)
        response = self.server.routes.get(selector, NOT_FOUND)
        if callable(response):
            response(self.request, self.server)
        else:
            self.request.sendall(response)


class GopherTestServer(socketserver.ThreadingTCPServer):
    """Serves canned responses keyed by selector on a loopback port.

    A route may also be a callable(sock, server) for stalling or partial
    responses; stalls end when `released` is set.
    """

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, routes):
        super().__init__((HOST, 0), GopherRequestHandler)
        self.routes = routes
        self.requests = []
        self.raw_requests = []
        self.released = threading.Event()

    @property
    def port(self):
        return self.server_address[1]


def stall(sock, server):
    server.released.wait(5)


def partial_then_stall(data):
    def respond(sock, server):
        sock.sendall(data)
        server.released.wait(5)
    return respond


@pytest.fixture
def gopher_server():
    servers = []

    def start(routes):
        server = GopherTestServer(routes)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.released.set()
        server.shutdown()
        server.server_close()


@pytest.fixture
def listener():
    """A loopback socket that accepts connections and never answers."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind((HOST, 0))
    s.listen(5)
    yield s
    s.close()


@pytest.fixture
def unused_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind((HOST, 0))
    port = s.getsockname()[1]
    s.close()
    return port


def make_context(port, **settings):
    config = dict(idle_timeout=0.5, transfer_timeout=0.5, probe_timeout=1)
    config.update(settings)
    return CrawlContext(HOST, port, config=CrawlConfig(**config), address=HOST)


class FakeSocket:
    """Replays a list of chunks; an exception in the list is raised by recv()."""

    def __init__(self, chunks=()):
        self.chunks = list(chunks)
        self.sent = b""
        self.timeouts = []
        self.closed = False

    def settimeout(self, timeout):
        self.timeouts.append(timeout)

    def sendall(self, data):
        self.sent += data

    def recv(self, size):
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if isinstance(chunk, BaseException):
            raise chunk
        return chunk

    def close(self):
        self.closed = True


class FakeConnector:
    """Hands out a FakeSocket per request, keyed by the selector sent on it."""

    def __init__(self, responses):
        self.responses = responses
        self.sockets = []

    def __call__(self, address, port, timeout):
        connector = self

        class RoutedSocket(FakeSocket):
            def sendall(self, data):
                super().sendall(data)
                self.chunks = list(connector.responses.get(data[:-2].decode('utf-8'), [NOT_FOUND]))

        s = RoutedSocket()
        self.sockets.append(s)
        return s
