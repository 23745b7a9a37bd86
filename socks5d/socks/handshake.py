# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    Method negotiation.  Client offers a list of authentication
    methods, server answers with the single method it selected::

        +----+----------+----------+        +----+--------+
        |VER | NMETHODS | METHODS  |        |VER | METHOD |
        +----+----------+----------+        +----+--------+
        | 1  |    1     | 1 to 255 |        | 1  |   1    |
        +----+----------+----------+        +----+--------+
"""
import struct

from typing import Iterable

from .packet import read_version
from .operations import SOCKS5_VERSION, socks5Methods
from ..core.connection import TcpConnection


def read_greeting(conn: TcpConnection) -> bytes:
    """Returns offered method codes in the order client sent them."""
    read_version(conn)
    nmethods = conn.read_byte()
    return conn.read_exact(nmethods)


def write_selection(conn: TcpConnection, method: int) -> None:
    """Policy is the caller's business, see select_method."""
    conn.write(struct.pack('!BB', SOCKS5_VERSION, method))


def select_method(methods: bytes, auth_required: bool) -> int:
    if auth_required:
        wanted = socks5Methods.USERNAME_PASSWORD
    else:
        wanted = socks5Methods.NO_AUTHENTICATION_REQUIRED
    return wanted if wanted in methods else socks5Methods.NO_ACCEPTABLE_METHODS


def write_greeting(conn: TcpConnection, methods: Iterable[int]) -> None:
    offered = bytes(methods)
    conn.write(struct.pack('!BB', SOCKS5_VERSION, len(offered)) + offered)


def read_selection(conn: TcpConnection) -> int:
    read_version(conn)
    return conn.read_byte()
