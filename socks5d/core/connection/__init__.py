# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .connection import TcpConnection, TcpConnectionUninitializedException, ConnectionTruncated
from .client import TcpClientConnection
from .server import TcpServerConnection
from .types import tcpConnectionTypes

__all__ = [
    'TcpConnection',
    'TcpConnectionUninitializedException',
    'ConnectionTruncated',
    'TcpServerConnection',
    'TcpClientConnection',
    'tcpConnectionTypes',
]
