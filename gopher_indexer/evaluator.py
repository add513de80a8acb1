"""Analysis of the finished index: file sizes, external servers, issues."""

from gopher_indexer.handlers import MeasureSizeHandler, PrintContentHandler
from gopher_indexer.items import FILE_KINDS, ISSUE_KINDS, Item, ItemKind
from gopher_indexer.prober import ExternalProber
from gopher_indexer.reader import ReadOutcome

ISSUE_LABELS = {
    ItemKind.ERROR: "Invalid reference",
    ItemKind.TIMEOUT: "Timeout",
    ItemKind.TOO_LARGE: "File too large",
}


class SizeRange:
    """Smallest and largest size seen for one class of file."""

    def __init__(self):
        self.smallest = None
        self.largest = None
        self.smallest_path = None

    def update(self, path, size):
        # Strict comparison keeps the earliest file on ties
        if self.smallest is None or size < self.smallest:
            self.smallest = size
            self.smallest_path = path
        if self.largest is None or size > self.largest:
            self.largest = size


class CrawlStats:
    def __init__(self):
        self.directories = 0
        self.text_files = 0
        self.binary_files = 0
        self.invalid_references = 0
        self.text = SizeRange()
        self.binary = SizeRange()
        self.sizes = {}  # Item -> size of every measured file
        self.external_servers = {}  # record -> True/False, None when skipped

    @property
    def smallest_text_file(self):
        return self.text.smallest_path


def _size_text(size):
    return -1 if size is None else size


class Evaluator:
    def __init__(self, context, prober=None):
        self.context = context
        self.prober = prober if prober is not None else ExternalProber(context)

    @property
    def reporter(self):
        return self.context.reporter

    @property
    def store(self):
        return self.context.store

    def measure(self, item):
        """Download a file and return its size, or None if it has no usable size."""
        handler = MeasureSizeHandler(self.context.config.file_limit)
        response = self.context.request(item.record, handler)

        if handler.too_large:
            self.store.add(Item(ItemKind.TOO_LARGE, item.record))
            return None
        if response.outcome in (ReadOutcome.COMPLETE, ReadOutcome.EMPTY):
            return response.result.size
        return None

    def measure_files(self, stats):
        # Too-large and timeout items are appended while measuring; snapshot first
        for item in self.store.of_kind(*FILE_KINDS):
            size = self.measure(item)
            if size is None:
                continue
            stats.sizes[item] = size
            if item.kind is ItemKind.TEXT:
                stats.text.update(item.record, size)
            else:
                stats.binary.update(item.record, size)

    def count_items(self, stats):
        counts = self.store.counts()
        stats.directories = counts[ItemKind.DIRECTORY]
        stats.text_files = counts[ItemKind.TEXT]
        stats.binary_files = counts[ItemKind.BINARY]
        stats.invalid_references = counts[ItemKind.ERROR]

    def print_smallest_text_file(self, stats):
        if stats.smallest_text_file is None:
            self.reporter.info("No text file available to print")
            return None
        handler = PrintContentHandler(self.reporter)
        return self.context.request(stats.smallest_text_file, handler)

    def probe_external_servers(self, stats):
        self.reporter.info("\nConnectivity to external servers:")
        externals = self.store.of_kind(ItemKind.EXTERNAL)
        if not externals:
            self.reporter.info("No reference to any external server indexed")
        for item in externals:
            stats.external_servers[item.record] = self.prober.probe(item.record)

    def report_issues(self):
        self.reporter.info("\nReferences with issues/errors:")
        issues = self.store.of_kind(*ISSUE_KINDS)
        if not issues:
            self.reporter.info("No reference with issue/error found")
        for item in issues:
            self.reporter.info(f"({ISSUE_LABELS[item.kind]}) {item.record}")

    def evaluate(self):
        """Measure every file, print the statistics and check external servers."""
        self.reporter.info("\nIndexation complete. Now analysing the files.")
        stats = CrawlStats()

        self.measure_files(stats)
        self.count_items(stats)

        self.reporter.info(f"\nNumber of directories: {stats.directories}")
        self.reporter.info(f"Number of text files: {stats.text_files}")
        self.reporter.info(f"Number of binary files: {stats.binary_files}")
        self.reporter.info(f"Number of invalid references: {stats.invalid_references}\n")

        self.print_smallest_text_file(stats)

        self.reporter.info(f"\nSize of the smallest text file: {_size_text(stats.text.smallest)}")
        self.reporter.info(f"Size of the largest text file: {_size_text(stats.text.largest)}")
        self.reporter.info(f"Size of the smallest binary file: {_size_text(stats.binary.smallest)}")
        self.reporter.info(f"Size of the largest binary file: {_size_text(stats.binary.largest)}")

        self.probe_external_servers(stats)
        self.report_issues()
        return stats
