# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    Reply to a connection request::

        +----+-----+-------+------+----------+----------+
        |VER | REP |  RSV  | ATYP | BND.ADDR | BND.PORT |
        +----+-----+-------+------+----------+----------+
        | 1  |  1  | X'00' |  1   | Variable |    2     |
        +----+-----+-------+------+----------+----------+
"""
import struct

from typing import Optional

from .packet import Socks5Reply, read_version
from .address import BoundAddress, decode_address, encode_address
from .operations import SOCKS5_VERSION, RESERVED
from ..core.connection import TcpConnection


# Address and port of a reply sent without a bound address.
ZERO_ADDRESS_AND_PORT = b'\x00' * 6


def build_reply(
        status: int,
        atyp: int,
        bound: Optional[BoundAddress] = None,
) -> bytes:
    pkt = struct.pack('!BBBB', SOCKS5_VERSION, status, RESERVED, atyp)
    if bound is None:
        return pkt + ZERO_ADDRESS_AND_PORT
    return pkt + encode_address(atyp, bound.address) + struct.pack('!H', bound.port)


def write_reply(
        conn: TcpConnection,
        status: int,
        atyp: int,
        bound: Optional[BoundAddress] = None,
) -> None:
    conn.write(build_reply(status, atyp, bound))


def read_reply(conn: TcpConnection) -> Socks5Reply:
    read_version(conn)
    status, _reserved, atyp = conn.read_exact(3)
    host = decode_address(atyp, conn)
    port = struct.unpack('!H', conn.read_exact(2))[0]
    return Socks5Reply(status, atyp, host, port)
