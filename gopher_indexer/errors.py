"""Exceptions raised by the crawler.

Only failures that leave the client without a usable server are raised.
Everything else (timeouts, receive errors, malformed lines, oversized files,
unreachable external servers) is recorded as an indexed item or an outcome.
"""


class GopherError(Exception):
    """Base class for all crawler errors."""


class UsageError(GopherError):
    """The command line could not be understood."""


class ConfigError(GopherError):
    """A crawl setting has an unusable value."""


class AddressResolutionError(GopherError):
    """The server hostname could not be resolved."""

    def __init__(self, host):
        super().__init__(f"unable to connect to host {host}")
        self.host = host


class ConnectError(GopherError):
    """The connection to the crawled server could not be established."""

    def __init__(self, host, port, reason=None):
        super().__init__("Connection failed")
        self.host = host
        self.port = port
        self.reason = reason
