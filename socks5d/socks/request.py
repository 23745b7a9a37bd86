# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    Connection request::

        +----+-----+-------+------+----------+----------+
        |VER | CMD |  RSV  | ATYP | DST.ADDR | DST.PORT |
        +----+-----+-------+------+----------+----------+
        | 1  |  1  | X'00' |  1   | Variable |    2     |
        +----+-----+-------+------+----------+----------+
"""
import struct

from typing import Optional

from .packet import Socks5Request, read_version
from .address import BoundAddress, decode_address, encode_address, pack_host
from .exception import UnsupportedCommand
from .operations import SOCKS5_VERSION, RESERVED, socks5Commands
from ..core.connection import TcpConnection


def read_request(conn: TcpConnection) -> Socks5Request:
    read_version(conn)
    command = conn.read_byte()
    if command != socks5Commands.CONNECT:
        # Rest of the request is left unread, caller must close.
        raise UnsupportedCommand(command)
    _reserved, atyp = conn.read_exact(2)
    host = decode_address(atyp, conn)
    port = struct.unpack('!H', conn.read_exact(2))[0]
    return Socks5Request(host, port, atyp, command)


def write_request(
        conn: TcpConnection,
        host: str,
        port: int,
        atyp: Optional[int] = None,
        command: int = socks5Commands.CONNECT,
) -> None:
    """Client side.  Address type is inferred from host when not given."""
    if atyp is None:
        atyp = BoundAddress.from_host_port(host, port).atyp
    conn.write(
        struct.pack('!BBBB', SOCKS5_VERSION, command, RESERVED, atyp) +
        encode_address(atyp, pack_host(atyp, host)) +
        struct.pack('!H', port),
    )
