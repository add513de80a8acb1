"""Response handlers: what to do with the bytes of one response.

There are three of them, one per kind of request the crawler makes:
indexing a directory, measuring a file, and printing a file. Each produces
its own tagged result.
"""

from collections import namedtuple

from gopher_indexer.classifier import classify_line
from gopher_indexer.reader import LineFramer

TERMINATOR = b"."

Count = namedtuple("Count", ["size"])
IndexedItems = namedtuple("IndexedItems", ["items"])


class Printed:
    def __init__(self, lines):
        self.lines = lines

    def __repr__(self):
        return f"Printed(lines={self.lines})"


def decode_line(data):
    """Decode an index line so that build_request() gives back the same bytes.

    Bytes that are not valid UTF-8 are kept as surrogate escapes.
    """
    return data.decode('utf-8', 'surrogateescape')


def decode_text(data):
    """Decode file content for display: UTF-8, falling back to latin-1."""
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        return data.decode('latin-1')


class ResponseHandler:
    def feed(self, chunk):
        """Consume a chunk; return False to stop reading."""
        raise NotImplementedError

    def finish(self):
        """Called once when the peer closed the connection."""

    def result(self):
        raise NotImplementedError


class LineHandler(ResponseHandler):
    """Base for handlers that work on framed lines instead of raw chunks."""

    def __init__(self):
        self.framer = LineFramer()

    def feed(self, chunk):
        for line in self.framer.feed(chunk):
            if not self.handle_line(line):
                return False
        return True

    def finish(self):
        # A last line without CRLF still counts when the peer just closes
        tail = self.framer.flush()
        if tail is not None:
            self.handle_line(tail)

    def handle_line(self, line):
        raise NotImplementedError


class IndexHandler(LineHandler):
    """Classifies each line of a directory index, up to the terminator, into the store."""

    def __init__(self, store, request_selector):
        super().__init__()
        self.store = store
        self.request_selector = request_selector
        self.added = []

    def handle_line(self, line):
        if line == TERMINATOR:
            return False
        item = classify_line(decode_line(line), self.request_selector)
        if item is not None and self.store.add(item):
            self.added.append(item)
        return True

    def result(self):
        return IndexedItems(list(self.added))


class MeasureSizeHandler(ResponseHandler):
    """Counts bytes, giving up as soon as the count reaches the limit."""

    def __init__(self, limit):
        self.limit = limit
        self.size = 0
        self.too_large = False

    def feed(self, chunk):
        self.size += len(chunk)
        if self.size >= self.limit:
            self.too_large = True
            return False
        return True

    def result(self):
        return Count(self.size)


class PrintContentHandler(LineHandler):
    """Prints a text file, stopping at the terminator line if there is one."""

    def __init__(self, reporter, heading="Content of the smallest text file:"):
        super().__init__()
        self.reporter = reporter
        self.heading = heading
        self.lines = 0
        self.started = False
        self.terminated = False

    def feed(self, chunk):
        if not self.started:
            self.started = True
            if self.heading:
                self.reporter.info(self.heading)
        return super().feed(chunk)

    def handle_line(self, line):
        if line == TERMINATOR:
            self.terminated = True
            return False
        self.reporter.info(decode_text(line))
        self.lines += 1
        return True

    def result(self):
        return Printed(self.lines)
