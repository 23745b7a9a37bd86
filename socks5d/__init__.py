# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .proxy import Socks5Proxy, main, sleep_loop, entry_point
from .socks import Socks5Client, Socks5ProtocolHandler


__all__ = [
    # PyPi package entry_point.
    'entry_point',
    # Embed socks5.py.
    'main',
    'Socks5Proxy',
    'Socks5Client',
    'Socks5ProtocolHandler',
    # Utility exposed for demos
    'sleep_loop',
]
