# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import os
import sys
import time
import signal
import logging
import threading
from typing import Any, List, Optional

from .core.acceptor import Acceptor
from .core.listener import TcpSocketListener
from .common.flag import FlagParser, flags
from .common.utils import bytes_
from .common.constants import (
    IS_WINDOWS, DEFAULT_VERSION, DEFAULT_LOG_FILE, DEFAULT_PID_FILE,
    DEFAULT_LOG_LEVEL, DEFAULT_BASIC_AUTH, DEFAULT_LOG_FORMAT,
    DEFAULT_OPEN_FILE_LIMIT,
)
from .socks import Socks5ProtocolHandler


logger = logging.getLogger(__name__)


flags.add_argument(
    '--version',
    '-v',
    action='store_true',
    default=DEFAULT_VERSION,
    help='Prints socks5.py version.',
)

flags.add_argument(
    '--log-level',
    type=str,
    default=DEFAULT_LOG_LEVEL,
    help='Valid options: DEBUG, INFO (default), WARNING, ERROR, CRITICAL. '
    'Both upper and lowercase values are allowed. '
    'You may also simply use the leading character e.g. --log-level d',
)

flags.add_argument(
    '--log-file',
    type=str,
    default=DEFAULT_LOG_FILE,
    help='Default: sys.stdout. Log file destination.',
)

flags.add_argument(
    '--log-format',
    type=str,
    default=DEFAULT_LOG_FORMAT,
    help='Log format for Python logger.',
)

flags.add_argument(
    '--open-file-limit',
    type=int,
    default=DEFAULT_OPEN_FILE_LIMIT,
    help='Default: 1024. Maximum number of files (TCP connections) '
    'that socks5.py can open concurrently.',
)

flags.add_argument(
    '--basic-auth',
    type=str,
    default=DEFAULT_BASIC_AUTH,
    help='Default: No authentication. Specify colon separated user:password '
    'to enable username/password authentication.',
)

flags.add_argument(
    '--pid-file',
    type=str,
    default=DEFAULT_PID_FILE,
    help='Default: None. Save "parent" process ID to a file.',
)


class Socks5Proxy:
    """Socks5Proxy is a context manager to control socks5.py library core.

    Binds the listening socket and starts an :class:`~socks5d.core.acceptor.Acceptor`
    thread.  Every accepted client connection is served by a
    :class:`~socks5d.socks.handler.Socks5ProtocolHandler` running in its own thread.

    Keyword `opts` override command line flags, e.g.
    ``Socks5Proxy(port=0, validator=check)``.
    """

    def __init__(self, input_args: Optional[List[str]] = None, **opts: Any) -> None:
        self.opts = opts
        self.flags = FlagParser.initialize(input_args, **opts)
        self.listener: Optional[TcpSocketListener] = None
        self.acceptor: Optional[Acceptor] = None

    def __enter__(self) -> 'Socks5Proxy':
        self.setup()
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    def setup(self) -> None:
        self._write_pid_file()
        self.listener = TcpSocketListener(flags=self.flags)
        self.listener.setup()
        # Override flags.port to match the actual port
        # we are listening upon.  This is necessary to preserve
        # the server port when `--port=0` is used.
        assert self.listener.port is not None
        self.flags.port = self.listener.port
        self.acceptor = Acceptor(
            flags=self.flags,
            listener=self.listener,
            work_klass=self.opts.get('work_klass', Socks5ProtocolHandler),
        )
        self.acceptor.start()
        if threading.current_thread() == threading.main_thread():
            self._register_signals()

    def shutdown(self) -> None:
        assert self.acceptor
        self.acceptor.shutdown()
        if self.listener:
            self.listener.shutdown()
            self._delete_pid_file()

    def _write_pid_file(self) -> None:
        if self.flags.pid_file:
            with open(self.flags.pid_file, 'wb') as pid_file:
                pid_file.write(bytes_(os.getpid()))

    def _delete_pid_file(self) -> None:
        if self.flags.pid_file \
                and os.path.exists(self.flags.pid_file):
            os.remove(self.flags.pid_file)

    def _register_signals(self) -> None:
        signal.signal(signal.SIGINT, self._handle_exit_signal)
        signal.signal(signal.SIGTERM, self._handle_exit_signal)
        if not IS_WINDOWS:
            signal.signal(signal.SIGHUP, self._handle_exit_signal)
            signal.signal(signal.SIGQUIT, self._handle_exit_signal)

    @staticmethod
    def _handle_exit_signal(signum: int, _frame: Any) -> None:
        logger.debug('Received signal %d' % signum)
        sys.exit(0)


def sleep_loop(p: Optional[Socks5Proxy] = None) -> None:
    while True:
        try:
            time.sleep(1)
        except KeyboardInterrupt:
            break


def main(**opts: Any) -> None:
    with Socks5Proxy(sys.argv[1:], **opts) as p:
        sleep_loop(p)


def entry_point() -> None:
    main()
