"""One request per connection: the crawl context and the connection session."""

import socket
from collections import namedtuple

from gopher_indexer.config import CrawlConfig
from gopher_indexer.errors import AddressResolutionError, ConnectError
from gopher_indexer.items import Item, ItemKind
from gopher_indexer.reader import ReadOutcome, ResponseReader
from gopher_indexer.report import Reporter
from gopher_indexer.store import IndexStore

Response = namedtuple("Response", ["outcome", "result"])


def resolve_host(host):
    """Resolve a hostname to an IPv4 address."""
    try:
        return socket.gethostbyname(host)
    except (socket.gaierror, UnicodeError) as e:
        raise AddressResolutionError(host) from e


def connect_socket(address, port, timeout):
    """Open a TCP connection; the timeout also bounds the connect itself."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.settimeout(timeout)
    try:
        s.connect((address, port))
    except (OSError, OverflowError):
        s.close()
        raise
    return s


def build_request(selector):
    """The request line: the selector followed by CRLF (just CRLF for the root)."""
    return f"{selector}\r\n".encode('utf-8', 'surrogateescape')


class CrawlContext:
    """Everything a crawl shares: server, settings, output, store and transport.

    connector(address, port, timeout) must return a connected socket-like
    object; tests substitute their own.
    """

    def __init__(self, host, port, config=None, reporter=None, store=None,
                 connector=connect_socket, address=None):
        self.host = host
        self.port = port
        self.config = config if config is not None else CrawlConfig()
        self.reporter = reporter if reporter is not None else Reporter()
        self.store = store if store is not None else IndexStore(self.reporter)
        self.connector = connector
        self._address = address
        self.reader = ResponseReader(self.reporter, self.config.idle_timeout,
                                     self.config.transfer_timeout, self.config.buffer_size)

    def resolve(self):
        """Resolve the server address once; later calls reuse it."""
        if self._address is None:
            self._address = resolve_host(self.host)
        return self._address

    @property
    def address(self):
        return self.resolve()

    def request(self, selector, handler):
        """Send one request over a fresh connection and let handler read the response.

        Raises ConnectError when the server cannot be reached. A response
        that times out is recorded as a Timeout item for the selector.
        """
        try:
            s = self.connector(self.address, self.port, self.config.idle_timeout)
        except (OSError, OverflowError) as e:
            raise ConnectError(self.host, self.port, e) from e

        try:
            try:
                s.sendall(build_request(selector))
            except OSError as e:
                self.reporter.error(f"Error: Unable to send request ({e})")
                return Response(ReadOutcome.ERROR, handler.result())

            self.reporter.request_sent(selector)
            outcome = self.reader.drain(s, handler)
        finally:
            s.close()

        if outcome is ReadOutcome.TIMEOUT:
            self.store.add(Item(ItemKind.TIMEOUT, selector))
        return Response(outcome, handler.result())
