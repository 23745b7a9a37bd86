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

from typing import Callable, Tuple

from .address import BoundAddress
from .exception import DialFailed
from ..common.constants import DEFAULT_TIMEOUT
from ..core.connection import TcpConnection, TcpServerConnection

logger = logging.getLogger(__name__)

# (host, port) -> (upstream connection, address reported to the client)
Dialer = Callable[[str, int], Tuple[TcpConnection, BoundAddress]]


def dial(
        host: str,
        port: int,
        timeout: float = DEFAULT_TIMEOUT,
) -> Tuple[TcpServerConnection, BoundAddress]:
    """Connects to host:port.  Bound address is the upstream
    peer address, i.e. where the proxy actually connected to."""
    upstream = TcpServerConnection(host, port)
    try:
        upstream.connect(timeout=timeout)
    except (OSError, ValueError) as e:
        raise DialFailed(host, port, e) from e
    try:
        bound = BoundAddress.from_sockaddr(upstream.connection.getpeername())
    except OSError as e:
        upstream.close()
        raise DialFailed(host, port, e) from e
    logger.debug(
        'Connection established with upstream {0}:{1}'.format(host, port),
    )
    return upstream, bound
