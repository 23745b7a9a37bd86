# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import Callable, Tuple


HostPort = Tuple[str, int]

# (username, password) -> accepted?
CredentialValidator = Callable[[str, str], bool]
