# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    Username/password subnegotiation.

    .. spelling::

       subnegotiation
"""
import struct
import logging

from typing import Tuple

from .packet import read_version
from .exception import AuthenticationFailed
from .operations import SOCKS5_VERSION, socks5AuthStatus
from ..common.types import CredentialValidator
from ..common.utils import bytes_, text_
from ..core.connection import TcpConnection

logger = logging.getLogger(__name__)

MAX_CREDENTIAL_SIZE = 255


def _read_field(conn: TcpConnection) -> str:
    size = conn.read_byte()
    return text_(conn.read_exact(size), errors='surrogateescape')


def _pack_field(value: str) -> bytes:
    raw = bytes_(value, errors='surrogateescape')
    if len(raw) > MAX_CREDENTIAL_SIZE:
        raise ValueError('credential longer than %d bytes' % MAX_CREDENTIAL_SIZE)
    return struct.pack('!B', len(raw)) + raw


def read_credentials(conn: TcpConnection) -> Tuple[str, str]:
    read_version(conn)
    user = _read_field(conn)
    password = _read_field(conn)
    return user, password


def write_status(conn: TcpConnection, passed: bool) -> None:
    status = socks5AuthStatus.PASS if passed else socks5AuthStatus.FAIL
    conn.write(struct.pack('!BB', SOCKS5_VERSION, status))


def authenticate(conn: TcpConnection, validator: CredentialValidator) -> str:
    """Server side of the subnegotiation.

    Reports the validator verdict to the client, returns the
    authenticated username or raises AuthenticationFailed."""
    user, password = read_credentials(conn)
    passed = bool(validator(user, password))
    write_status(conn, passed)
    if not passed:
        raise AuthenticationFailed(user)
    logger.debug('Authenticated user %s', user)
    return user


def write_credentials(conn: TcpConnection, user: str, password: str) -> None:
    conn.write(
        struct.pack('!B', SOCKS5_VERSION) +
        _pack_field(user) +
        _pack_field(password),
    )


def check_status(conn: TcpConnection) -> None:
    read_version(conn)
    status = conn.read_byte()
    if status != socks5AuthStatus.PASS:
        raise AuthenticationFailed()
