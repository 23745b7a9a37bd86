# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    .. spelling::

       utils
"""
import sys
import socket
import logging
import ipaddress

from typing import Any, Optional

from .types import HostPort
from .constants import IS_WINDOWS, DEFAULT_TIMEOUT

if not IS_WINDOWS:
    import resource

logger = logging.getLogger(__name__)


def is_py2() -> bool:
    """Exists only to avoid mocking :data:`sys.version_info` in tests."""
    return sys.version_info.major == 2


def text_(s: Any, encoding: str = 'utf-8', errors: str = 'strict') -> Any:
    """Decodes bytes into str, ints are stringified.

    Anything else is returned unchanged.  Pass
    ``errors='surrogateescape'`` for wire data that must survive
    a later bytes_() call byte for byte."""
    if isinstance(s, bytes):
        return s.decode(encoding, errors)
    if isinstance(s, int):
        return str(s)
    return s


def bytes_(s: Any, encoding: str = 'utf-8', errors: str = 'strict') -> Any:
    """Encodes str (or a stringified int) into bytes.

    Anything else is returned unchanged."""
    if isinstance(s, int):
        return str(s).encode(encoding, errors)
    if isinstance(s, str):
        return s.encode(encoding, errors)
    return s


def new_socket_connection(
        addr: HostPort,
        timeout: float = DEFAULT_TIMEOUT,
        source_address: Optional[HostPort] = None,
) -> socket.socket:
    """Opens a TCP connection to `addr`.

    IP literals are dialed directly using the matching address family.
    Host names are left to :func:`socket.create_connection` which tries
    every address the resolver returns."""
    try:
        ip = ipaddress.ip_address(addr[0])
    except ValueError:
        return socket.create_connection(
            addr, timeout=timeout, source_address=source_address,
        )
    if ip.version == 4:
        family, sockaddr = socket.AF_INET, (addr[0], addr[1])
    else:
        family, sockaddr = socket.AF_INET6, (addr[0], addr[1], 0, 0)
    conn = socket.socket(family, socket.SOCK_STREAM, 0)
    try:
        conn.settimeout(timeout)
        if source_address is not None:
            conn.bind(source_address)
        conn.connect(sockaddr)
    except OSError:
        conn.close()
        raise
    return conn


def set_open_file_limit(soft_limit: int) -> None:
    """Raises the open file descriptor soft limit, never lowers it.

    No-op on Windows, where the resource module is unavailable."""
    if IS_WINDOWS:
        return
    current, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    if current < soft_limit < hard:
        resource.setrlimit(resource.RLIMIT_NOFILE, (soft_limit, hard))
        logger.debug('Open file soft limit raised to %d', soft_limit)
