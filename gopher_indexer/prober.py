"""Reachability checks for servers referenced by the crawled one."""

import errno
import select
import socket


def parse_server_record(record):
    """Split a "host\\tport" record; extra fields after the port are ignored."""
    fields = record.split('\t')
    host = fields[0].strip()
    port = fields[1].strip() if len(fields) > 1 else ""
    return host, port


def parse_port(text):
    """Return the port number, or None if text is not a valid TCP port."""
    try:
        port = int(text)
    except ValueError:
        return None
    return port if 0 < port <= 65535 else None


class ExternalProber:
    def __init__(self, context):
        self.context = context

    def is_crawled_server(self, address, port):
        return address == self.context.address and port == self.context.port

    def probe(self, record):
        """Check one external server and print its status.

        Returns True (up), False (down), or None when the record points back
        at the server being crawled and no check was made.

        The probe timeout only bounds the connect. Resolving the hostname
        with gethostbyname() blocks for as long as the system resolver takes.
        """
        host, port_text = parse_server_record(record)
        port = parse_port(port_text)

        is_up = False
        if host and port is not None:
            try:
                address = socket.gethostbyname(host)
            except (OSError, UnicodeError):
                address = None

            if address is not None:
                if self.is_crawled_server(address, port):
                    return None
                is_up = self.check(address, port)

        self.context.reporter.info(f"Server {host} at port {port_text} is {'up' if is_up else 'down'}")
        return is_up

    def check(self, address, port):
        """Non-blocking connect, then wait for it to complete within the probe timeout."""
        s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            s.setblocking(False)
            result = s.connect_ex((address, port))
            if result not in (0, errno.EINPROGRESS, errno.EWOULDBLOCK, errno.EALREADY):
                return False

            _, writable, _ = select.select([], [s], [], self.context.config.probe_timeout)
            if not writable:
                return False
            return s.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR) == 0
        except OSError:
            return False
        finally:
            s.close()
