# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import socket

import unittest
from unittest import mock

from socks5d.common.utils import bytes_, text_, new_socket_connection, set_open_file_limit
from socks5d.common.constants import (
    DEFAULT_PORT, DEFAULT_TIMEOUT, DEFAULT_IPV4_HOSTNAME,
)

IPV6_LOOPBACK = '::1'


class TestSocketConnectionUtils(unittest.TestCase):

    def setUp(self) -> None:
        self.addr_ipv4 = (str(DEFAULT_IPV4_HOSTNAME), DEFAULT_PORT)
        self.addr_ipv6 = (IPV6_LOOPBACK, DEFAULT_PORT)
        self.addr_dual = ('example.com', 80)

    @mock.patch('socket.socket')
    def test_new_socket_connection_ipv4(self, mock_socket: mock.Mock) -> None:
        conn = new_socket_connection(self.addr_ipv4)
        mock_socket.assert_called_with(socket.AF_INET, socket.SOCK_STREAM, 0)
        self.assertEqual(conn, mock_socket.return_value)
        mock_socket.return_value.settimeout.assert_called_with(DEFAULT_TIMEOUT)
        mock_socket.return_value.connect.assert_called_with(self.addr_ipv4)

    @mock.patch('socket.socket')
    def test_new_socket_connection_ipv6(self, mock_socket: mock.Mock) -> None:
        conn = new_socket_connection(self.addr_ipv6)
        mock_socket.assert_called_with(socket.AF_INET6, socket.SOCK_STREAM, 0)
        self.assertEqual(conn, mock_socket.return_value)
        mock_socket.return_value.connect.assert_called_with(
            (self.addr_ipv6[0], self.addr_ipv6[1], 0, 0),
        )

    @mock.patch('socket.socket')
    def test_new_socket_connection_closes_on_failure(self, mock_socket: mock.Mock) -> None:
        mock_socket.return_value.connect.side_effect = ConnectionRefusedError()
        with self.assertRaises(ConnectionRefusedError):
            new_socket_connection(self.addr_ipv4, source_address=('127.0.0.1', 0))
        mock_socket.return_value.bind.assert_called_once_with(('127.0.0.1', 0))
        mock_socket.return_value.close.assert_called_once()

    @mock.patch('socket.create_connection')
    def test_new_socket_connection_dual(self, mock_socket: mock.Mock) -> None:
        conn = new_socket_connection(self.addr_dual)
        mock_socket.assert_called_with(
            self.addr_dual, timeout=DEFAULT_TIMEOUT, source_address=None,
        )
        self.assertEqual(conn, mock_socket.return_value)


class TestTextBytes(unittest.TestCase):

    def test_text(self) -> None:
        self.assertEqual(text_(b'hello'), 'hello')

    def test_text_int(self) -> None:
        self.assertEqual(text_(1), '1')

    def test_text_nochange(self) -> None:
        self.assertEqual(text_('hello'), 'hello')

    def test_text_surrogateescape(self) -> None:
        self.assertEqual(
            bytes_(text_(b'\xff', errors='surrogateescape'), errors='surrogateescape'),
            b'\xff',
        )

    def test_bytes(self) -> None:
        self.assertEqual(bytes_('hello'), b'hello')

    def test_bytes_int(self) -> None:
        self.assertEqual(bytes_(1), b'1')

    def test_bytes_nochange(self) -> None:
        self.assertEqual(bytes_(b'hello'), b'hello')


class TestOpenFileLimit(unittest.TestCase):

    @mock.patch('socks5d.common.utils.IS_WINDOWS', False)
    @mock.patch('socks5d.common.utils.resource')
    def test_raises_soft_limit(self, mock_resource: mock.Mock) -> None:
        mock_resource.getrlimit.return_value = (256, 4096)
        set_open_file_limit(1024)
        mock_resource.setrlimit.assert_called_once_with(
            mock_resource.RLIMIT_NOFILE, (1024, 4096),
        )

    @mock.patch('socks5d.common.utils.IS_WINDOWS', False)
    @mock.patch('socks5d.common.utils.resource')
    def test_keeps_higher_soft_limit(self, mock_resource: mock.Mock) -> None:
        mock_resource.getrlimit.return_value = (2048, 4096)
        set_open_file_limit(1024)
        mock_resource.setrlimit.assert_not_called()
