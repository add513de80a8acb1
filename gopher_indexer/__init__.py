"""
gopher-indexer
A Gopher (RFC 1436) client that crawls a server breadth-first, indexes
directories and files, measures file sizes and checks external servers.
"""

from gopher_indexer.config import CrawlConfig
from gopher_indexer.crawler import Crawler
from gopher_indexer.errors import (AddressResolutionError, ConfigError,
                                   ConnectError, GopherError, UsageError)
from gopher_indexer.evaluator import CrawlStats, Evaluator
from gopher_indexer.items import Item, ItemKind
from gopher_indexer.session import CrawlContext
from gopher_indexer.store import IndexStore

__version__ = "1.0.0"

__all__ = [
    "AddressResolutionError",
    "ConfigError",
    "ConnectError",
    "CrawlConfig",
    "CrawlContext",
    "CrawlStats",
    "Crawler",
    "Evaluator",
    "GopherError",
    "IndexStore",
    "Item",
    "ItemKind",
    "UsageError",
]
