# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import NamedTuple


SOCKS5_VERSION = 5
# Reserved byte within request and reply messages.
RESERVED = 0x00


Socks5Methods = NamedTuple(
    'Socks5Methods', [
        ('NO_AUTHENTICATION_REQUIRED', int),
        ('GSSAPI', int),
        ('USERNAME_PASSWORD', int),
        ('NO_ACCEPTABLE_METHODS', int),
    ],
)
socks5Methods = Socks5Methods(0x00, 0x01, 0x02, 0xFF)


Socks5Commands = NamedTuple(
    'Socks5Commands', [
        ('CONNECT', int),
        ('BIND', int),
        ('UDP_ASSOCIATE', int),
    ],
)
socks5Commands = Socks5Commands(0x01, 0x02, 0x03)


Socks5AddressTypes = NamedTuple(
    'Socks5AddressTypes', [
        ('IPV4', int),
        ('DOMAIN_NAME', int),
        ('IPV6', int),
    ],
)
socks5AddressTypes = Socks5AddressTypes(0x01, 0x03, 0x04)


Socks5AuthStatus = NamedTuple(
    'Socks5AuthStatus', [
        ('PASS', int),
        ('FAIL', int),
    ],
)
socks5AuthStatus = Socks5AuthStatus(0x00, 0x01)


Socks5ReplyCodes = NamedTuple(
    'Socks5ReplyCodes', [
        ('SUCCEEDED', int),
        ('GENERAL_FAILURE', int),
        ('CONNECTION_NOT_ALLOWED', int),
        ('NETWORK_UNREACHABLE', int),
        ('HOST_UNREACHABLE', int),
        ('CONNECTION_REFUSED', int),
        ('TTL_EXPIRED', int),
        ('COMMAND_NOT_SUPPORTED', int),
        ('ADDRESS_TYPE_NOT_SUPPORTED', int),
    ],
)
socks5ReplyCodes = Socks5ReplyCodes(
    0x00, 0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08,
)


Socks5States = NamedTuple(
    'Socks5States', [
        ('AWAIT_GREETING', int),
        ('METHOD_SELECTED', int),
        ('AUTH_PENDING', int),
        ('AUTHENTICATED', int),
        ('REJECTED', int),
        ('AWAIT_REQUEST', int),
        ('DIALING', int),
        ('RELAYING', int),
        ('CLOSED', int),
    ],
)
socks5States = Socks5States(1, 2, 3, 4, 5, 6, 7, 8, 9)
