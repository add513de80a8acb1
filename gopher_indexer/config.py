"""Crawl settings: module defaults plus the operator-adjustable CrawlConfig."""

from gopher_indexer.errors import ConfigError

# Configuration
BUFFER_SIZE = 4096  # bytes per recv() call
FILE_LIMIT = 65536  # files reaching this many bytes are reported as too large
IDLE_TIMEOUT = 10  # seconds to wait for the first byte of a response
TRANSFER_TIMEOUT = 5  # seconds allowed between chunks once data has started
PROBE_TIMEOUT = 5  # seconds to wait for an external server to accept


class CrawlConfig:
    def __init__(self, file_limit=FILE_LIMIT, idle_timeout=IDLE_TIMEOUT,
                 transfer_timeout=TRANSFER_TIMEOUT, probe_timeout=PROBE_TIMEOUT,
                 buffer_size=BUFFER_SIZE):
        """Collect crawl settings, rejecting values that cannot work."""
        self.file_limit = _positive("file_limit", file_limit)
        self.idle_timeout = _positive("idle_timeout", idle_timeout)
        self.transfer_timeout = _positive("transfer_timeout", transfer_timeout)
        self.probe_timeout = _positive("probe_timeout", probe_timeout)
        self.buffer_size = _positive("buffer_size", buffer_size)

    def __repr__(self):
        return (f"CrawlConfig(file_limit={self.file_limit}, idle_timeout={self.idle_timeout}, "
                f"transfer_timeout={self.transfer_timeout}, probe_timeout={self.probe_timeout}, "
                f"buffer_size={self.buffer_size})")


def _positive(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{name} must be a positive number, got {value!r}")
    return value
