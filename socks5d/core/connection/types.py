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


# Role of a connection within a session, also used as its log tag.
TcpConnectionTypes = NamedTuple(
    'TcpConnectionTypes', [
        ('UPSTREAM', int),
        ('CLIENT', int),
    ],
)
tcpConnectionTypes = TcpConnectionTypes(1, 2)
