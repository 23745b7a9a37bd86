# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    Version definition.
"""
VERSION = (0, 1, 0)
__version__ = '.'.join(map(str, VERSION[0:3]))


__all__ = '__version__', 'VERSION'
