"""Command line entry point: gopher-indexer <hostname> <port>."""

import argparse
import os
import sys

from gopher_indexer.config import (FILE_LIMIT, IDLE_TIMEOUT, PROBE_TIMEOUT,
                                   TRANSFER_TIMEOUT, CrawlConfig)
from gopher_indexer.crawler import Crawler
from gopher_indexer.errors import (AddressResolutionError, ConfigError,
                                   ConnectError, UsageError)
from gopher_indexer.evaluator import Evaluator
from gopher_indexer.prober import parse_port
from gopher_indexer.report import Reporter
from gopher_indexer.session import CrawlContext


class ArgumentParser(argparse.ArgumentParser):
    """argparse, but any command line mistake becomes a UsageError."""

    def error(self, message):
        raise UsageError(message)


def port_number(text):
    port = parse_port(text)
    if port is None:
        raise argparse.ArgumentTypeError(f"invalid port: {text}")
    return port


def build_parser(prog):
    parser = ArgumentParser(prog=prog, description='Index the files of a Gopher server')
    parser.add_argument('hostname', help='Gopher server hostname')
    parser.add_argument('port', type=port_number, help='Gopher server port')
    parser.add_argument('--file-limit', type=int, default=FILE_LIMIT,
                        help=f'Files reaching this many bytes are reported as too large (default: {FILE_LIMIT})')
    parser.add_argument('--idle-timeout', type=float, default=IDLE_TIMEOUT,
                        help=f'Seconds to wait for the first byte of a response (default: {IDLE_TIMEOUT})')
    parser.add_argument('--transfer-timeout', type=float, default=TRANSFER_TIMEOUT,
                        help=f'Seconds allowed between chunks of a response (default: {TRANSFER_TIMEOUT})')
    parser.add_argument('--probe-timeout', type=float, default=PROBE_TIMEOUT,
                        help=f'Seconds to wait for an external server (default: {PROBE_TIMEOUT})')
    return parser


def run(host, port, config=None, reporter=None):
    """Crawl and evaluate one server; returns the CrawlStats."""
    context = CrawlContext(host, port, config=config, reporter=reporter)
    context.resolve()
    Crawler(context).crawl()
    return Evaluator(context).evaluate()


def main(argv=None, reporter=None):
    if argv is None:
        argv = sys.argv
    reporter = reporter if reporter is not None else Reporter()
    prog = os.path.basename(argv[0]) if argv else 'gopher-indexer'

    try:
        args = build_parser(prog).parse_args(argv[1:])
        config = CrawlConfig(file_limit=args.file_limit, idle_timeout=args.idle_timeout,
                             transfer_timeout=args.transfer_timeout, probe_timeout=args.probe_timeout)
    except UsageError:
        reporter.error(f"Usage: {prog} <hostname> <port>")
        return 1
    except ConfigError as e:
        reporter.error(f"Error: {e}")
        return 1

    try:
        run(args.hostname, args.port, config=config, reporter=reporter)
    except (AddressResolutionError, ConnectError) as e:
        reporter.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
