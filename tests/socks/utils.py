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
from typing import Tuple

from socks5d.core.connection import TcpClientConnection

# Upper bound on how long a test waits on a socket before failing.
TEST_SOCKET_TIMEOUT = 5.0


def connection_pair() -> Tuple[TcpClientConnection, socket.socket]:
    """Returns our buffered end of a connected socket pair
    along with the raw peer socket."""
    ours, peer = socket.socketpair()
    ours.settimeout(TEST_SOCKET_TIMEOUT)
    peer.settimeout(TEST_SOCKET_TIMEOUT)
    return TcpClientConnection(ours, ('127.0.0.1', 54382)), peer


def feed(peer: socket.socket, data: bytes, eof: bool = True) -> None:
    peer.sendall(data)
    if eof:
        peer.shutdown(socket.SHUT_WR)


def recv_exact(sock: socket.socket, size: int) -> bytes:
    data = b''
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data
