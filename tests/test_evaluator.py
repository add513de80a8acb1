from conftest import entry, make_context, menu, stall

from gopher_indexer.crawler import Crawler
from gopher_indexer.evaluator import Evaluator, SizeRange
from gopher_indexer.items import Item, ItemKind


def crawl_and_evaluate(server, **settings):
    context = make_context(server.port, **settings)
    Crawler(context).crawl()
    stats = Evaluator(context).evaluate()
    return context, stats


def test_size_range_keeps_earliest_on_ties():
    sizes = SizeRange()
    sizes.update("/first", 5)
    sizes.update("/second", 5)
    sizes.update("/big", 9)
    assert sizes.smallest == 5
    assert sizes.smallest_path == "/first"
    assert sizes.largest == 9


def test_statistics(gopher_server, capsys):
    server = gopher_server({
        "": menu(entry("1", "/docs"), entry("0", "/short.txt"), entry("9", "/blob.bin")),
        "/docs": menu(entry("0", "/docs/long.txt"), entry("I", "/docs/pic.gif"), entry("0", "/docs/missing")),
        "/short.txt": b"Hi there\r\n.\r\n",
        "/docs/long.txt": b"A longer text file\r\nwith two lines\r\n.\r\n",
        "/blob.bin": bytes(range(256)) * 4,
        "/docs/pic.gif": b"GIF89a" + b"\x00" * 10,
        "/docs/missing": b"",
    })
    context, stats = crawl_and_evaluate(server)

    assert stats.directories == 1
    assert stats.text_files == 3
    assert stats.binary_files == 2
    assert stats.invalid_references == 0
    assert stats.text.smallest == 0
    assert stats.smallest_text_file == "/docs/missing"
    assert stats.text.largest == len(b"A longer text file\r\nwith two lines\r\n.\r\n")
    assert stats.binary.smallest == 16
    assert stats.binary.largest == 1024
    assert stats.sizes == {
        Item(ItemKind.TEXT, "/short.txt"): 13,
        Item(ItemKind.BINARY, "/blob.bin"): 1024,
        Item(ItemKind.TEXT, "/docs/long.txt"): 39,
        Item(ItemKind.BINARY, "/docs/pic.gif"): 16,
        Item(ItemKind.TEXT, "/docs/missing"): 0,
    }

    out = capsys.readouterr().out
    assert "Number of directories: 1\n" in out
    assert "Number of text files: 3\n" in out
    assert "Number of binary files: 2\n" in out
    assert "Number of invalid references: 0\n" in out
    assert "Size of the smallest text file: 0\n" in out
    assert "Size of the largest binary file: 1024\n" in out
    assert "No reference to any external server indexed" in out
    assert "No reference with issue/error found" in out


def test_smallest_text_file_is_printed_without_terminator(gopher_server, capsys):
    server = gopher_server({
        "": menu(entry("0", "/small.txt"), entry("0", "/large.txt")),
        "/small.txt": b"Tiny file\r\n.\r\n",
        "/large.txt": b"This one is quite a bit longer\r\n.\r\n",
    })
    context, stats = crawl_and_evaluate(server)

    assert stats.smallest_text_file == "/small.txt"
    assert server.requests[-1] == "/small.txt"
    out = capsys.readouterr().out
    assert "Content of the smallest text file:\nTiny file\n\nSize of the smallest text file: 14\n" in out


def test_size_limit_boundary(gopher_server, capsys):
    server = gopher_server({
        "": menu(entry("0", "/under.txt"), entry("0", "/exact.txt"), entry("9", "/over.bin")),
        "/under.txt": b"x" * 99,
        "/exact.txt": b"x" * 100,
        "/over.bin": b"x" * 5000,
    })
    context, stats = crawl_and_evaluate(server, file_limit=100)

    assert Item(ItemKind.TOO_LARGE, "/exact.txt") in context.store
    assert Item(ItemKind.TOO_LARGE, "/over.bin") in context.store
    assert Item(ItemKind.TOO_LARGE, "/under.txt") not in context.store
    assert stats.text.smallest == 99
    assert stats.text.largest == 99
    assert stats.binary.smallest is None
    # Too-large files still count as indexed files
    assert stats.text_files == 2
    assert stats.binary_files == 1

    captured = capsys.readouterr()
    assert "File too large: /exact.txt" in captured.err
    assert "Size of the smallest binary file: -1\n" in captured.out
    assert "(File too large) /exact.txt\n" in captured.out


def test_timed_out_file_is_excluded(gopher_server, capsys):
    server = gopher_server({
        "": menu(entry("9", "/stuck.bin"), entry("9", "/ok.bin")),
        "/stuck.bin": stall,
        "/ok.bin": b"12345",
    })
    context, stats = crawl_and_evaluate(server, idle_timeout=0.3)

    assert Item(ItemKind.TIMEOUT, "/stuck.bin") in context.store
    assert stats.binary.smallest == 5
    assert stats.binary.largest == 5
    assert "(Timeout) /stuck.bin\n" in capsys.readouterr().out


def test_invalid_references_are_reported(gopher_server, capsys):
    server = gopher_server({
        "": menu(entry("1", "/gone"), entry("1", "/also-gone")),
    })
    context, stats = crawl_and_evaluate(server)

    assert stats.invalid_references == 2
    out = capsys.readouterr().out
    assert "Number of invalid references: 2\n" in out
    assert "(Invalid reference) /gone\n" in out
    assert "(Invalid reference) /also-gone\n" in out
    assert "No text file available to print" in out


def test_external_servers_are_probed(gopher_server, listener, unused_port, capsys):
    up_port = listener.getsockname()[1]
    server = gopher_server({})
    server.routes[""] = menu(
        f"1Up\t\t127.0.0.1\t{up_port}",
        f"1Down\t\t127.0.0.1\t{unused_port}",
        f"1Self\t\t127.0.0.1\t{server.port}",
    )
    context, stats = crawl_and_evaluate(server)

    assert stats.external_servers == {
        f"127.0.0.1\t{up_port}": True,
        f"127.0.0.1\t{unused_port}": False,
        f"127.0.0.1\t{server.port}": None,
    }
    out = capsys.readouterr().out
    assert f"Server 127.0.0.1 at port {up_port} is up\n" in out
    assert f"Server 127.0.0.1 at port {unused_port} is down\n" in out
    assert f"at port {server.port} is" not in out
