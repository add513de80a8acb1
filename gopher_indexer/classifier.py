"""Classification of directory-index lines (RFC 1436 item types)."""

from gopher_indexer.items import Item, ItemKind

# Gopher item types as per RFC 1436 and common extensions
TEXT_TYPE = '0'
DIRECTORY_TYPE = '1'
ERROR_TYPE = '3'
IGNORED_TYPES = frozenset('i.')  # informational lines and the terminator

# Every non-plain-text file type counts as binary. Name servers ('2'),
# full-text search ('7'), telnet ('8', 'T') and redundant servers ('+') are
# not files and are ignored along with unknown types.
BINARY_TYPES = frozenset('4569gI:;<dhprsPX')


def is_binary_type(item_type):
    return item_type in BINARY_TYPES


def extract_pathname(line):
    """Return the field between the first and second tab of a line.

    Runs to the end of the line when there is no second tab, and is None
    when the line has no tab at all.
    """
    first = line.find('\t')
    if first == -1:
        return None

    second = line.find('\t', first + 1)
    if second == -1:
        return line[first + 1:]
    return line[first + 1:second]


def classify_line(line, request_selector=""):
    """Map one directory-index line (CRLF stripped) to an Item or None.

    request_selector is the selector of the request that produced the line;
    error lines are attributed to it rather than to their own text.
    """
    if not line:
        return None

    item_type = line[0]

    if item_type == ERROR_TYPE:
        return Item(ItemKind.ERROR, request_selector)

    if item_type == DIRECTORY_TYPE:
        kind = ItemKind.DIRECTORY
    elif item_type == TEXT_TYPE:
        kind = ItemKind.TEXT
    elif is_binary_type(item_type):
        kind = ItemKind.BINARY
    else:
        # Informational lines, the terminator, and non-file types
        return None

    pathname = extract_pathname(line)
    if pathname is None:
        return None

    if pathname.startswith('/'):
        return Item(kind, pathname)

    if kind is ItemKind.DIRECTORY and pathname == '':
        # A directory without a local selector points at another server;
        # keep the host and port that follow the empty field
        fields = line.split('\t', 2)
        if len(fields) == 3 and fields[2]:
            return Item(ItemKind.EXTERNAL, fields[2])

    # Relative or otherwise malformed selectors are not indexed
    return None
