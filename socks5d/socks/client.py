# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import logging

from types import TracebackType
from typing import List, Optional, Type

from .auth import write_credentials, check_status
from .reply import read_reply
from .packet import Socks5Reply
from .request import write_request
from .handshake import write_greeting, read_selection
from .exception import DialFailed, NoAcceptableMethods
from .operations import socks5Methods, socks5ReplyCodes
from ..common.types import HostPort
from ..common.constants import DEFAULT_TIMEOUT
from ..core.connection import TcpServerConnection

logger = logging.getLogger(__name__)


class Socks5Client:
    """Blocking SOCKS5 client.

    Useful for chaining proxies and for exercising a running
    server.  After a successful connect() the underlying
    `conn` carries raw bytes to and from the target."""

    def __init__(
            self,
            proxy_addr: HostPort,
            username: Optional[str] = None,
            password: Optional[str] = None,
            timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.proxy_addr = proxy_addr
        self.username = username
        self.password = password
        self.timeout = timeout
        self.conn = TcpServerConnection(proxy_addr[0], proxy_addr[1])

    def __enter__(self) -> 'Socks5Client':
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    @property
    def methods(self) -> List[int]:
        methods = [socks5Methods.NO_AUTHENTICATION_REQUIRED]
        if self.username is not None:
            methods.append(socks5Methods.USERNAME_PASSWORD)
        return methods

    def connect(self, host: str, port: int) -> Socks5Reply:
        """Performs the complete handshake and asks proxy to CONNECT."""
        self.conn.connect(timeout=self.timeout)
        write_greeting(self.conn, self.methods)
        method = read_selection(self.conn)
        if method == socks5Methods.NO_ACCEPTABLE_METHODS:
            raise NoAcceptableMethods(bytes(self.methods))
        if method == socks5Methods.USERNAME_PASSWORD:
            write_credentials(self.conn, self.username or '', self.password or '')
            check_status(self.conn)
        write_request(self.conn, host, port)
        reply = read_reply(self.conn)
        if reply.status != socks5ReplyCodes.SUCCEEDED:
            raise DialFailed(host, port)
        logger.debug(
            'Connected to %s:%d via %s:%d, bound %s:%d',
            host, port, self.proxy_addr[0], self.proxy_addr[1],
            reply.host, reply.port,
        )
        return reply

    def send(self, data: bytes) -> int:
        return self.conn.write(data)

    def recv(self, buffer_size: int = 1024) -> Optional[bytes]:
        data = self.conn.recv(buffer_size)
        return None if data is None else data.tobytes()

    def close(self) -> None:
        self.conn.close()
