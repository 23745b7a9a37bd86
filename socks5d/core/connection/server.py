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
from typing import Optional

from .types import tcpConnectionTypes
from .connection import TcpConnection, TcpConnectionUninitializedException
from ...common.types import HostPort
from ...common.utils import new_socket_connection
from ...common.constants import DEFAULT_TIMEOUT


class TcpServerConnection(TcpConnection):
    """Buffered connection towards an upstream server."""

    def __init__(self, host: str, port: int) -> None:
        super().__init__(tcpConnectionTypes.UPSTREAM)
        self._conn: Optional[socket.socket] = None
        self.addr: HostPort = (host, port)
        self.closed = True

    @property
    def connection(self) -> socket.socket:
        if self._conn is None:
            raise TcpConnectionUninitializedException()
        return self._conn

    def connect(
            self,
            addr: Optional[HostPort] = None,
            timeout: float = DEFAULT_TIMEOUT,
            source_address: Optional[HostPort] = None,
    ) -> None:
        assert self._conn is None
        self._conn = new_socket_connection(
            addr or self.addr, timeout=timeout, source_address=source_address,
        )
        # Timeout only guards the connect phase, relay blocks until
        # either side closes.
        self._conn.settimeout(None)
        self.closed = False
