# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import platform
import ipaddress


SYS_PLATFORM = platform.system()
IS_WINDOWS = SYS_PLATFORM == 'Windows'

COLON = b':'

# Defaults
DEFAULT_BACKLOG = 100
DEFAULT_BASIC_AUTH = None
DEFAULT_MAX_SEND_SIZE = 64 * 1024
DEFAULT_BUFFER_SIZE = 128 * 1024
DEFAULT_CLIENT_RECVBUF_SIZE = DEFAULT_BUFFER_SIZE
DEFAULT_SERVER_RECVBUF_SIZE = DEFAULT_BUFFER_SIZE
DEFAULT_IPV4_HOSTNAME = ipaddress.IPv4Address('127.0.0.1')
DEFAULT_LOG_FILE = None
DEFAULT_LOG_FORMAT = '%(asctime)s - pid:%(process)d [%(levelname)-.1s] %(module)s.%(funcName)s:%(lineno)d - %(message)s'
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_SOCKS5_ACCESS_LOG_FORMAT = '{client_ip}:{client_port} - ' + \
    'CONNECT {server_host}:{server_port} - ' + \
    '{upstream_bytes} / {client_bytes} bytes - {connection_time_ms}ms'
DEFAULT_OPEN_FILE_LIMIT = 1024
DEFAULT_PID_FILE = None
DEFAULT_PORT = 1080
DEFAULT_TIMEOUT = 10.0
DEFAULT_VERSION = False
# Acceptor thread wakes up this often to notice shutdown requests.
DEFAULT_ACCEPT_TIMEOUT = 1.0

PY2_DEPRECATION_MESSAGE = '''DEPRECATION: socks5.py does not support Python 2.7.  Kindly upgrade to Python 3+.'''
