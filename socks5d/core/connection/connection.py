# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import socket
import logging

from abc import ABC, abstractmethod
from typing import Optional, List

from ...common.constants import DEFAULT_BUFFER_SIZE, DEFAULT_MAX_SEND_SIZE

from .types import tcpConnectionTypes

logger = logging.getLogger(__name__)


class TcpConnectionUninitializedException(Exception):
    pass


class ConnectionTruncated(IOError):
    """Peer closed the connection before a complete message arrived."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            'connection closed after %d of %d bytes' % (received, expected),
        )
        self.expected = expected
        self.received = received


class TcpConnection(ABC):
    """TCP server/client connection abstraction.

    Main motivation of this class is to provide a buffer management
    when reading and writing into the socket.  Sockets are used in
    blocking mode.  Reads go through a read-ahead buffer so that
    protocol parsers can ask for exactly N bytes, writes are queued
    and then flushed as one message.

    Implement the connection property abstract method to return
    a socket connection object.
    """

    def __init__(self, tag: int) -> None:
        self.tag: str = 'upstream' if tag == tcpConnectionTypes.UPSTREAM else 'client'
        self.buffer: List[memoryview] = []
        self.closed: bool = False
        self._num_buffer = 0
        self._rbuf = bytearray()

    @property
    @abstractmethod
    def connection(self) -> socket.socket:
        """Must return the socket connection to use in this class."""
        raise TcpConnectionUninitializedException()     # pragma: no cover

    def send(self, data: bytes) -> int:
        """Users must handle BrokenPipeError exceptions"""
        return self.connection.send(data)

    def recv(
            self, buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> Optional[memoryview]:
        """Users must handle socket.error exceptions.

        Bytes left over in the read-ahead buffer are returned first.
        Returns None once the peer has closed the connection."""
        if self._rbuf:
            data = bytes(self._rbuf[:buffer_size])
            del self._rbuf[:len(data)]
            return memoryview(data)
        data = self.connection.recv(buffer_size)
        if len(data) == 0:
            return None
        logger.debug(
            'received %d bytes from %s' %
            (len(data), self.tag),
        )
        return memoryview(data)

    def read_exact(self, size: int) -> bytes:
        """Blocks until exactly `size` bytes are available.

        Raises ConnectionTruncated if the peer closes first."""
        while len(self._rbuf) < size:
            data = self.connection.recv(DEFAULT_BUFFER_SIZE)
            if len(data) == 0:
                raise ConnectionTruncated(size, len(self._rbuf))
            self._rbuf += data
        chunk = bytes(self._rbuf[:size])
        del self._rbuf[:size]
        return chunk

    def read_byte(self) -> int:
        return self.read_exact(1)[0]

    def has_buffer(self) -> bool:
        return self._num_buffer != 0

    def queue(self, mv: memoryview) -> None:
        self.buffer.append(mv)
        self._num_buffer += 1

    def flush(self) -> int:
        """Users must handle BrokenPipeError exceptions"""
        flushed = 0
        while self.has_buffer():
            mv = self.buffer[0].tobytes()
            sent: int = self.send(mv[:DEFAULT_MAX_SEND_SIZE])
            if sent == len(mv):
                self.buffer.pop(0)
                self._num_buffer -= 1
            else:
                self.buffer[0] = memoryview(mv[sent:])
            del mv
            flushed += sent
        logger.debug('flushed %d bytes to %s' % (flushed, self.tag))
        return flushed

    def write(self, data: bytes) -> int:
        """Queue and flush `data` as a single message."""
        self.queue(memoryview(data))
        return self.flush()

    def close(self) -> bool:
        """Safe to call more than once and from more than one thread.

        Shutdown before close, so that a thread blocked within recv
        on this socket wakes up."""
        if not self.closed:
            conn = self.connection
            self.closed = True
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            finally:
                conn.close()
        return self.closed
