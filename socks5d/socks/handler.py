# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import time
import socket
import hashlib
import argparse
import functools
import traceback

from typing import Any, Optional, Tuple
from logged_groups import logged_group, logging_context

from .auth import authenticate
from .relay import relay
from .reply import write_reply
from .packet import Socks5Request
from .dialer import Dialer, dial
from .request import read_request
from .handshake import read_greeting, select_method, write_selection
from .exception import Socks5Exception, AuthenticationFailed, DialFailed
from .exception import NoAcceptableMethods, UnknownAddressType, UnsupportedCommand
from .operations import socks5AddressTypes, socks5Methods, socks5ReplyCodes, socks5States
from ..common.flag import flags
from ..common.types import HostPort
from ..common.constants import DEFAULT_TIMEOUT, DEFAULT_SOCKS5_ACCESS_LOG_FORMAT
from ..common.constants import DEFAULT_CLIENT_RECVBUF_SIZE, DEFAULT_SERVER_RECVBUF_SIZE
from ..core.connection import TcpClientConnection, TcpConnection

flags.add_argument(
    '--timeout',
    type=float,
    default=DEFAULT_TIMEOUT,
    help='Default: ' + str(DEFAULT_TIMEOUT) +
    '.  Number of seconds to wait for upstream connection to establish.',
)

flags.add_argument(
    '--client-recvbuf-size',
    type=int,
    default=DEFAULT_CLIENT_RECVBUF_SIZE,
    help='Default: ' + str(int(DEFAULT_CLIENT_RECVBUF_SIZE / 1024)) +
    ' KB. Maximum amount of data received from the '
    'client in a single recv() operation.',
)

flags.add_argument(
    '--server-recvbuf-size',
    type=int,
    default=DEFAULT_SERVER_RECVBUF_SIZE,
    help='Default: ' + str(int(DEFAULT_SERVER_RECVBUF_SIZE / 1024)) +
    ' KB. Maximum amount of data received from the '
    'upstream server in a single recv() operation.',
)


@logged_group("socks5d.Session")
class Socks5ProtocolHandler:
    """Drives a single SOCKS5 session over an accepted client connection.

    Greeting, optional username/password subnegotiation, CONNECT
    request, upstream dial, reply and finally relay.  First error
    aborts the session.  Client receives a failure reply where the
    protocol has a slot for one (rejected request or failed dial).

    Reference https://www.rfc-editor.org/rfc/rfc1928
    """

    def __init__(
            self,
            work: TcpClientConnection,
            flags: argparse.Namespace,
    ) -> None:
        self.work = work
        self.flags = flags
        self.state: int = socks5States.AWAIT_GREETING
        self.method: Optional[int] = None
        self.username: Optional[str] = None
        self.request: Optional[Socks5Request] = None
        self.upstream: Optional[TcpConnection] = None
        self.start_time: float = time.time()
        self.transferred: Tuple[int, int] = (0, 0)
        self._session_id: Optional[str] = None

    @staticmethod
    def create(conn: socket.socket, addr: Optional[Any]) -> TcpClientConnection:
        # AF_INET6 peers come as 4-tuples
        host_port: Optional[HostPort] = (addr[0], addr[1]) if addr else None
        return TcpClientConnection(conn, host_port)

    @property
    def dialer(self) -> Dialer:
        if self.flags.dialer is not None:
            return self.flags.dialer
        return functools.partial(dial, timeout=self.flags.timeout)

    @property
    def session_id(self) -> str:
        if self._session_id is None:
            seed = '%d-%s' % (time.time_ns(), self.work.address)
            self._session_id = hashlib.md5(seed.encode()).hexdigest()[:7]
        return self._session_id

    def run(self) -> None:
        """Thread entry point, logs instead of raising.

        Every record logged during the session carries its session id."""
        with logging_context(req_id=self.session_id):
            try:
                self.handle()
            except (Socks5Exception, OSError) as err:
                self.info(f'{self.work.address} - {type(err).__name__}: {err}')
            except Exception as err:
                err_tb = traceback.format_exc()
                self.error(f'Exception while handling {self.work.address}: {err}: {err_tb}')

    def handle(self) -> None:
        """Runs the session to completion.  Raises the first error."""
        try:
            self.negotiate()
            self.read_request()
            self.connect_upstream()
            self.relay()
        finally:
            self.shutdown()

    def negotiate(self) -> None:
        methods = read_greeting(self.work)
        self.method = select_method(methods, self.flags.validator is not None)
        write_selection(self.work, self.method)
        if self.method == socks5Methods.NO_ACCEPTABLE_METHODS:
            raise NoAcceptableMethods(methods)
        self.state = socks5States.METHOD_SELECTED
        if self.method == socks5Methods.USERNAME_PASSWORD:
            self.state = socks5States.AUTH_PENDING
            try:
                self.username = authenticate(self.work, self.flags.validator)
            except AuthenticationFailed:
                self.state = socks5States.REJECTED
                raise
            self.state = socks5States.AUTHENTICATED
        self.state = socks5States.AWAIT_REQUEST

    def read_request(self) -> Socks5Request:
        try:
            self.request = read_request(self.work)
        except (UnsupportedCommand, UnknownAddressType) as e:
            self._reply_failure(e.reply_code())
            raise
        self.debug(
            f'{self.work.address} requested CONNECT '
            f'{self.request.host}:{self.request.port}',
        )
        return self.request

    def connect_upstream(self) -> None:
        assert self.request
        self.state = socks5States.DIALING
        host, port = self.request.host, self.request.port
        try:
            self.upstream, bound = self.dialer(host, port)
        except DialFailed as e:
            self._reply_failure(e.reply_code())
            raise
        except (OSError, ValueError) as e:
            failure = DialFailed(host, port, e)
            self._reply_failure(failure.reply_code())
            raise failure from e
        write_reply(self.work, socks5ReplyCodes.SUCCEEDED, bound.atyp, bound)

    def relay(self) -> None:
        assert self.upstream
        self.state = socks5States.RELAYING
        self.transferred = relay(
            self.upstream,
            self.work,
            client_recvbuf_size=self.flags.client_recvbuf_size,
            server_recvbuf_size=self.flags.server_recvbuf_size,
        )
        self._access_log()

    def shutdown(self) -> None:
        if self.upstream:
            self.upstream.close()
        self.work.close()
        self.state = socks5States.CLOSED
        self.debug(f'Client connection {self.work.address} closed')

    def _reply_failure(self, code: Optional[int]) -> None:
        if code is None:
            return
        try:
            write_reply(self.work, code, socks5AddressTypes.IPV4)
        except OSError as e:
            self.debug(f'Unable to send failure reply: {e!r}')

    def _access_log(self) -> None:
        assert self.request
        client_ip, client_port = self.work.addr or (None, None)
        self.info(
            DEFAULT_SOCKS5_ACCESS_LOG_FORMAT.format_map({
                'client_ip': client_ip,
                'client_port': client_port,
                'server_host': self.request.host,
                'server_port': self.request.port,
                'upstream_bytes': self.transferred[0],
                'client_bytes': self.transferred[1],
                'connection_time_ms': '%.2f' % ((time.time() - self.start_time) * 1000),
            }),
        )
