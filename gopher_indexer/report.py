"""Console output for the crawler."""

import datetime
import sys


def timestamp():
    return datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def printable(message):
    """Replace undecodable bytes kept as surrogate escapes in selectors."""
    return message.encode('utf-8', 'surrogateescape').decode('utf-8', 'replace')


class Reporter:
    """Prints report lines to stdout and diagnostics to stderr.

    Streams default to whatever sys.stdout/sys.stderr are at the time of
    printing, so output can be captured or redirected after construction.
    """

    def __init__(self, out=None, err=None):
        self._out = out
        self._err = err

    @property
    def out(self):
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self):
        return self._err if self._err is not None else sys.stderr

    def info(self, message=""):
        print(printable(message), file=self.out)

    def error(self, message):
        print(printable(message), file=self.err)

    def request_sent(self, selector):
        self.info(f"Request sent at {timestamp()}: {selector}")
