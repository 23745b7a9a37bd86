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
import threading

from typing import Any, Optional, Tuple

from .listener import TcpSocketListener

logger = logging.getLogger(__name__)


def start_threaded_work(
        flags: argparse.Namespace,
        work_klass: Any,
        conn: socket.socket,
        addr: Optional[Tuple[str, int]],
) -> Tuple[Any, threading.Thread]:
    """Utility method to start a work in a new thread."""
    work = work_klass(
        work_klass.create(conn, addr),
        flags=flags,
    )
    thread = threading.Thread(target=work.run)
    thread.daemon = True
    thread.start()
    logger.debug(
        'Started work thread#%s for %r', thread.ident, addr,
    )
    return (work, thread)


class Acceptor(threading.Thread):
    """Accepts client connections and hands each one over to a new
    instance of `work_klass` running within its own thread.

    `work_klass` must provide a `create(conn, addr)` staticmethod and
    a `run()` method, see Socks5ProtocolHandler."""

    def __init__(
            self,
            flags: argparse.Namespace,
            listener: TcpSocketListener,
            work_klass: Any,
    ) -> None:
        super().__init__(daemon=True)
        self.flags = flags
        self.listener = listener
        self.work_klass = work_klass
        self.running = threading.Event()

    def run(self) -> None:
        sock = self.listener.sock
        while not self.running.is_set():
            try:
                conn, addr = sock.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self.running.is_set():
                    break
                logger.exception('Acceptor failed', exc_info=e)
                break
            conn.setblocking(True)
            start_threaded_work(self.flags, self.work_klass, conn, addr)

    def shutdown(self) -> None:
        self.running.set()
        self.join()
