# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import struct
import ipaddress

from typing import NamedTuple, Tuple

from .operations import socks5AddressTypes
from .exception import UnknownAddressType
from ..common.utils import bytes_, text_
from ..core.connection import TcpConnection


# Domain names are carried as raw bytes on the wire.  surrogateescape
# keeps non UTF-8 names intact through a decode / encode cycle.
DOMAIN_ENCODING_ERRORS = 'surrogateescape'

IPV4_SIZE = 4
IPV6_SIZE = 16
MAX_DOMAIN_SIZE = 255


def render_address(atyp: int, raw: bytes) -> str:
    """Canonical text form of a wire address."""
    if atyp == socks5AddressTypes.IPV4:
        return str(ipaddress.IPv4Address(raw))
    if atyp == socks5AddressTypes.IPV6:
        # 8 hextets, no zero compression
        return ':'.join('%x' % h for h in struct.unpack('!8H', raw))
    if atyp == socks5AddressTypes.DOMAIN_NAME:
        return text_(raw, errors=DOMAIN_ENCODING_ERRORS)
    raise UnknownAddressType(atyp)


def pack_host(atyp: int, host: str) -> bytes:
    """Inverse of render_address."""
    if atyp == socks5AddressTypes.IPV4:
        return ipaddress.IPv4Address(host).packed
    if atyp == socks5AddressTypes.IPV6:
        return ipaddress.IPv6Address(host).packed
    if atyp == socks5AddressTypes.DOMAIN_NAME:
        return bytes_(host, errors=DOMAIN_ENCODING_ERRORS)
    raise UnknownAddressType(atyp)


def decode_address(atyp: int, conn: TcpConnection) -> str:
    """Reads an address of type `atyp` and returns its text form.

    Short reads surface as ConnectionTruncated from the connection."""
    if atyp == socks5AddressTypes.DOMAIN_NAME:
        size = conn.read_byte()
        return render_address(atyp, conn.read_exact(size))
    if atyp == socks5AddressTypes.IPV4:
        return render_address(atyp, conn.read_exact(IPV4_SIZE))
    if atyp == socks5AddressTypes.IPV6:
        return render_address(atyp, conn.read_exact(IPV6_SIZE))
    raise UnknownAddressType(atyp)


def encode_address(atyp: int, address: bytes) -> bytes:
    """Wire form of `address`, length prefixed for domain names."""
    if atyp == socks5AddressTypes.DOMAIN_NAME:
        if len(address) > MAX_DOMAIN_SIZE:
            raise ValueError('domain name longer than %d bytes' % MAX_DOMAIN_SIZE)
        return struct.pack('!B', len(address)) + address
    if atyp == socks5AddressTypes.IPV4:
        expected = IPV4_SIZE
    elif atyp == socks5AddressTypes.IPV6:
        expected = IPV6_SIZE
    else:
        raise UnknownAddressType(atyp)
    if len(address) != expected:
        raise ValueError(
            'expected %d address bytes, got %d' % (expected, len(address)),
        )
    return address


class BoundAddress(NamedTuple):
    """Address the proxy reports back within a reply.

    Built once when the upstream connection is established."""

    atyp: int
    address: bytes
    port: int

    @classmethod
    def from_host_port(cls, host: str, port: int) -> 'BoundAddress':
        try:
            ip = ipaddress.ip_address(host)
        except ValueError:
            return cls(
                socks5AddressTypes.DOMAIN_NAME,
                pack_host(socks5AddressTypes.DOMAIN_NAME, host),
                port,
            )
        atyp = socks5AddressTypes.IPV4 if ip.version == 4 else socks5AddressTypes.IPV6
        return cls(atyp, ip.packed, port)

    @classmethod
    def from_sockaddr(cls, addr: Tuple[str, int]) -> 'BoundAddress':
        """Accepts both AF_INET and AF_INET6 style socket addresses."""
        return cls.from_host_port(addr[0], addr[1])

    @property
    def host(self) -> str:
        return render_address(self.atyp, self.address)

    def pack(self) -> bytes:
        return encode_address(self.atyp, self.address) + struct.pack('!H', self.port)
