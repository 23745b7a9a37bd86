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
import argparse

from typing import Any, Optional

from ..common.flag import flags
from ..common.constants import (
    DEFAULT_PORT, DEFAULT_BACKLOG, DEFAULT_IPV4_HOSTNAME, DEFAULT_ACCEPT_TIMEOUT,
)


flags.add_argument(
    '--hostname',
    type=str,
    default=str(DEFAULT_IPV4_HOSTNAME),
    help='Default: 127.0.0.1. Server IP address.',
)

flags.add_argument(
    '--port',
    type=int,
    default=DEFAULT_PORT,
    help='Default: ' + str(DEFAULT_PORT) + '.  Server port.  '
    'Use 0 to pick an ephemeral port.',
)

flags.add_argument(
    '--backlog',
    type=int,
    default=DEFAULT_BACKLOG,
    help='Default: 100. Maximum number of pending connections to proxy server.',
)

logger = logging.getLogger(__name__)


class TcpSocketListener:
    """Tcp listener."""

    def __init__(self, flags: argparse.Namespace) -> None:
        self.flags = flags
        self._socket: Optional[socket.socket] = None
        # Set after binding to a port.
        #
        # Stored here separately for ephemeral port discovery.
        self._port: Optional[int] = None

    def __enter__(self) -> 'TcpSocketListener':
        self.setup()
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    @property
    def sock(self) -> socket.socket:
        assert self._socket
        return self._socket

    @property
    def port(self) -> Optional[int]:
        return self._port

    def setup(self) -> None:
        self._socket = self.listen()

    def listen(self) -> socket.socket:
        sock = socket.socket(self.flags.family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        sock.bind((str(self.flags.hostname), self.flags.port))
        sock.listen(self.flags.backlog)
        # accept() wakes up periodically so that shutdown gets noticed.
        sock.settimeout(DEFAULT_ACCEPT_TIMEOUT)
        self._port = sock.getsockname()[1]
        logger.info(
            'Listening on %s:%s' %
            (self.flags.hostname, self._port),
        )
        return sock

    def shutdown(self) -> None:
        assert self._socket
        self._socket.close()
