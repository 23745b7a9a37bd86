# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .client import Socks5Client
from .dialer import Dialer, dial
from .handler import Socks5ProtocolHandler
from .address import BoundAddress, decode_address, encode_address, pack_host, render_address
from .packet import Socks5Reply, Socks5Request
from .relay import relay
from .operations import (
    SOCKS5_VERSION, socks5AddressTypes, socks5AuthStatus, socks5Commands,
    socks5Methods, socks5ReplyCodes, socks5States,
)
from .exception import (
    AuthenticationFailed, ConnectionTruncated, DialFailed, NoAcceptableMethods,
    Socks5Exception, UnknownAddressType, UnsupportedCommand, VersionMismatch,
)


__all__ = [
    'Socks5Client',
    'Socks5ProtocolHandler',
    'Dialer',
    'dial',
    'relay',
    'BoundAddress',
    'decode_address',
    'encode_address',
    'pack_host',
    'render_address',
    'Socks5Reply',
    'Socks5Request',
    'SOCKS5_VERSION',
    'socks5AddressTypes',
    'socks5AuthStatus',
    'socks5Commands',
    'socks5Methods',
    'socks5ReplyCodes',
    'socks5States',
    'AuthenticationFailed',
    'ConnectionTruncated',
    'DialFailed',
    'NoAcceptableMethods',
    'Socks5Exception',
    'UnknownAddressType',
    'UnsupportedCommand',
    'VersionMismatch',
]
