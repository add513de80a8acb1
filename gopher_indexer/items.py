"""Indexed item types."""

import enum
from collections import namedtuple


class ItemKind(enum.Enum):
    DIRECTORY = "directory"
    TEXT = "text file"
    BINARY = "binary file"
    ERROR = "invalid request"
    EXTERNAL = "external server"
    TIMEOUT = "timeout"
    TOO_LARGE = "too large"


# Kinds reported in the issues section
ISSUE_KINDS = (ItemKind.ERROR, ItemKind.TIMEOUT, ItemKind.TOO_LARGE)

# Kinds whose files are downloaded and measured
FILE_KINDS = (ItemKind.TEXT, ItemKind.BINARY)


# record is a pathname, the selector of a failed request, or "host\tport"
Item = namedtuple("Item", ["kind", "record"])
