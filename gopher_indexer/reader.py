"""Draining a Gopher response from a socket into a handler."""

import enum
import socket

CRLF = b"\r\n"


class ReadOutcome(enum.Enum):
    COMPLETE = "complete"  # peer closed the connection after sending data
    EMPTY = "empty"  # peer closed the connection without sending anything
    TIMEOUT = "timeout"  # idle or mid-transfer timeout expired
    ERROR = "error"  # any other receive failure
    STOPPED = "stopped"  # the handler needed no more data


class LineFramer:
    """Splits a byte stream into CRLF-terminated lines.

    Bytes after the last CRLF are kept until more data arrives, so a line
    split across two receive chunks comes out whole.
    """

    def __init__(self):
        self._buffer = bytearray()

    def feed(self, chunk):
        """Add a chunk and return the list of lines it completed."""
        self._buffer += chunk
        lines = []
        start = 0
        while True:
            end = self._buffer.find(CRLF, start)
            if end == -1:
                break
            lines.append(bytes(self._buffer[start:end]))
            start = end + len(CRLF)
        del self._buffer[:start]
        return lines

    def flush(self):
        """Return the unterminated tail left when the stream ended, if any."""
        tail = bytes(self._buffer)
        self._buffer.clear()
        return tail or None


class ResponseReader:
    def __init__(self, reporter, idle_timeout, transfer_timeout, buffer_size):
        self.reporter = reporter
        self.idle_timeout = idle_timeout
        self.transfer_timeout = transfer_timeout
        self.buffer_size = buffer_size

    def drain(self, sock, handler):
        """Receive until the peer closes, a timeout expires or the handler stops.

        The idle timeout bounds the wait for the first byte, the transfer
        timeout bounds every gap between chunks after that.
        """
        received = 0
        sock.settimeout(self.idle_timeout)

        while True:
            try:
                chunk = sock.recv(self.buffer_size)
            except (socket.timeout, BlockingIOError):
                self.reporter.error("Error: Server response timeout")
                return ReadOutcome.TIMEOUT
            except OSError as e:
                self.reporter.error(f"Error: Unable to receive server response ({e})")
                return ReadOutcome.ERROR

            if not chunk:  # Connection closed by server
                if received == 0:
                    self.reporter.info("Empty response from the server")
                    handler.finish()
                    return ReadOutcome.EMPTY
                handler.finish()
                return ReadOutcome.COMPLETE

            if received == 0:
                sock.settimeout(self.transfer_timeout)
            received += len(chunk)

            if not handler.feed(chunk):
                return ReadOutcome.STOPPED
