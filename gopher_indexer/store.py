"""Ordered, deduplicated collection of indexed items."""

from collections import Counter

from gopher_indexer.items import ItemKind


class IndexStore:
    """Items in the order they were discovered, each (kind, record) once.

    Rejecting duplicates on insertion is what makes the number of invalid
    references count distinct failing selectors rather than every failure.
    """

    def __init__(self, reporter=None):
        self.reporter = reporter
        self._items = []
        self._seen = set()

    def add(self, item):
        """Append an item; return False if an equal item is already stored."""
        if item in self._seen:
            return False

        self._seen.add(item)
        self._items.append(item)
        if self.reporter is not None:
            self._announce(item)
        return True

    def _announce(self, item):
        if item.kind is ItemKind.TIMEOUT:
            self.reporter.error(f"Transmission timeout: {item.record}")
        elif item.kind is ItemKind.TOO_LARGE:
            self.reporter.error(f"File too large: {item.record}")
        else:
            self.reporter.info(f"Indexed {item.kind.value}: {item.record}")

    def __contains__(self, item):
        return item in self._seen

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def of_kind(self, *kinds):
        return [item for item in self._items if item.kind in kinds]

    def counts(self):
        """Number of stored items per kind, in one pass."""
        counts = Counter(item.kind for item in self._items)
        return {kind: counts.get(kind, 0) for kind in ItemKind}
