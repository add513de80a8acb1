"""Breadth-first traversal of a Gopher server's directories."""

from collections import deque

from gopher_indexer.handlers import IndexHandler
from gopher_indexer.items import ItemKind

ROOT_SELECTOR = ""


class Crawler:
    def __init__(self, context):
        self.context = context

    def index_directory(self, selector):
        """Request one directory and return the items it added to the store."""
        handler = IndexHandler(self.context.store, selector)
        response = self.context.request(selector, handler)
        return response.result.items

    def crawl(self):
        """Index the whole server starting from the root directory.

        Directories are visited in the order they were discovered. The store
        never holds the same directory twice, so none is requested twice.
        ConnectError is left to the caller.
        """
        pending = deque([ROOT_SELECTOR])
        visited = 0

        while pending:
            selector = pending.popleft()
            visited += 1
            for item in self.index_directory(selector):
                if item.kind is ItemKind.DIRECTORY:
                    pending.append(item.record)

        return visited
