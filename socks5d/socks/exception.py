# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import errno
from typing import Optional

from .operations import socks5ReplyCodes
from ..core.connection import ConnectionTruncated


class Socks5Exception(Exception):
    """Top level Socks5Exception exception class.

    All protocol errors raised while driving a SOCKS5 session
    inherit from this class.  Short reads are reported by the
    connection layer as :class:`ConnectionTruncated` (an IOError)
    and transport failures as plain OSError.

    Implement reply_code() to have the session answer the client
    with a failure reply before the connection is closed."""

    def reply_code(self) -> Optional[int]:
        return None


class VersionMismatch(Socks5Exception):
    """Leading version byte of a message was not 5."""

    def __init__(self, version: int) -> None:
        super().__init__('version not 5, got %d' % version)
        self.version = version


class UnsupportedCommand(Socks5Exception):
    """Request command is anything but CONNECT."""

    def __init__(self, command: int) -> None:
        super().__init__('only CONNECT (0x01) is supported, got 0x%02x' % command)
        self.command = command

    def reply_code(self) -> Optional[int]:
        return socks5ReplyCodes.COMMAND_NOT_SUPPORTED


class UnknownAddressType(Socks5Exception):

    def __init__(self, atyp: int) -> None:
        super().__init__('unknown address type 0x%02x' % atyp)
        self.atyp = atyp

    def reply_code(self) -> Optional[int]:
        return socks5ReplyCodes.ADDRESS_TYPE_NOT_SUPPORTED


class AuthenticationFailed(Socks5Exception):
    """Credentials were rejected, either by our validator
    or by the peer we authenticated against."""

    def __init__(self, username: Optional[str] = None) -> None:
        super().__init__('authentication failed')
        self.username = username


class NoAcceptableMethods(Socks5Exception):
    """None of the offered methods is acceptable."""

    def __init__(self, offered: bytes) -> None:
        super().__init__(
            'no acceptable method among %s' % list(offered),
        )
        self.offered = offered


class DialFailed(Socks5Exception):
    """Exception raised when upstream connection could not be established."""

    def __init__(self, host: str, port: int, reason: Optional[BaseException] = None) -> None:
        super().__init__(
            'failed to connect to %s:%d - %s' % (host, port, reason),
        )
        self.host = host
        self.port = port
        self.reason = reason

    def reply_code(self) -> Optional[int]:
        if isinstance(self.reason, ConnectionRefusedError):
            return socks5ReplyCodes.CONNECTION_REFUSED
        if isinstance(self.reason, OSError) and self.reason.errno is not None:
            if self.reason.errno == errno.EHOSTUNREACH:
                return socks5ReplyCodes.HOST_UNREACHABLE
            if self.reason.errno == errno.ENETUNREACH:
                return socks5ReplyCodes.NETWORK_UNREACHABLE
        return socks5ReplyCodes.GENERAL_FAILURE


__all__ = [
    'Socks5Exception',
    'VersionMismatch',
    'ConnectionTruncated',
    'UnsupportedCommand',
    'UnknownAddressType',
    'AuthenticationFailed',
    'NoAcceptableMethods',
    'DialFailed',
]
