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
import threading

from typing import List, Tuple

from ..common.constants import DEFAULT_CLIENT_RECVBUF_SIZE, DEFAULT_SERVER_RECVBUF_SIZE
from ..core.connection import TcpConnection

logger = logging.getLogger(__name__)


def pipe(src: TcpConnection, dst: TcpConnection, buffer_size: int) -> int:
    """Copies bytes from src into dst until src reaches EOF or
    either side fails.  Returns number of bytes copied."""
    copied = 0
    try:
        while True:
            data = src.recv(buffer_size)
            if data is None:
                logger.debug('Connection closed by %s', src.tag)
                break
            dst.write(data)
            copied += len(data)
    except OSError as e:
        # Also how a direction learns that the other one closed both ends.
        logger.debug('%s -> %s stopped: %r', src.tag, dst.tag, e)
    return copied


def relay(
        upstream: TcpConnection,
        client: TcpConnection,
        client_recvbuf_size: int = DEFAULT_CLIENT_RECVBUF_SIZE,
        server_recvbuf_size: int = DEFAULT_SERVER_RECVBUF_SIZE,
) -> Tuple[int, int]:
    """Pipes client -> upstream and upstream -> client concurrently.

    First direction to finish closes both connections, which in turn
    unblocks the other direction.  Returns bytes copied in each
    direction as (client to upstream, upstream to client)."""
    done = threading.Event()
    copied: List[int] = [0, 0]

    def run(index: int, src: TcpConnection, dst: TcpConnection, size: int) -> None:
        try:
            copied[index] = pipe(src, dst, size)
        finally:
            done.set()

    threads = [
        threading.Thread(
            target=run,
            args=(0, client, upstream, client_recvbuf_size),
            daemon=True,
        ),
        threading.Thread(
            target=run,
            args=(1, upstream, client, server_recvbuf_size),
            daemon=True,
        ),
    ]
    for thread in threads:
        thread.start()
    done.wait()
    upstream.close()
    client.close()
    for thread in threads:
        thread.join()
    return copied[0], copied[1]
