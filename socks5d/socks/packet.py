# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import NamedTuple

from .operations import SOCKS5_VERSION
from .exception import VersionMismatch
from ..core.connection import TcpConnection


class Socks5Request(NamedTuple):
    """A parsed CONNECT request."""

    host: str
    port: int
    atyp: int
    command: int


class Socks5Reply(NamedTuple):
    """A parsed reply, as seen by the client side."""

    status: int
    atyp: int
    host: str
    port: int


def read_version(conn: TcpConnection) -> None:
    """Every SOCKS5 message starts with a version byte which MUST be 5."""
    version = conn.read_byte()
    if version != SOCKS5_VERSION:
        raise VersionMismatch(version)
