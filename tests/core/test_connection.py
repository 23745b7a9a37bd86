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
from typing import Optional

import unittest
from unittest import mock

from socks5d.common.constants import DEFAULT_IPV4_HOSTNAME, DEFAULT_PORT
from socks5d.core.connection import TcpClientConnection, TcpConnection, TcpConnectionUninitializedException, TcpServerConnection
from socks5d.core.connection import ConnectionTruncated, tcpConnectionTypes

IPV6_LOOPBACK = '::1'


class TestTcpConnection(unittest.TestCase):
    class TcpConnectionToTest(TcpConnection):

        def __init__(
            self, conn: Optional[socket.socket] = None,
            tag: int = tcpConnectionTypes.CLIENT,
        ) -> None:
            super().__init__(tag)
            self._conn = conn

        @property
        def connection(self) -> socket.socket:
            if self._conn is None:
                raise TcpConnectionUninitializedException()
            return self._conn

    def testThrowsKeyErrorIfNoConn(self) -> None:
        self.conn = TestTcpConnection.TcpConnectionToTest()
        with self.assertRaises(TcpConnectionUninitializedException):
            self.conn.send(b'dummy')
        with self.assertRaises(TcpConnectionUninitializedException):
            self.conn.recv()
        with self.assertRaises(TcpConnectionUninitializedException):
            self.conn.close()

    def testClosesIfNotClosed(self) -> None:
        _conn = mock.MagicMock()
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.conn.close()
        _conn.shutdown.assert_called_once_with(socket.SHUT_RDWR)
        _conn.close.assert_called()
        self.assertTrue(self.conn.closed)

    def testClosesEvenIfShutdownFails(self) -> None:
        _conn = mock.MagicMock()
        _conn.shutdown.side_effect = OSError('not connected')
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.assertTrue(self.conn.close())
        _conn.close.assert_called_once()

    def testNoOpIfAlreadyClosed(self) -> None:
        _conn = mock.MagicMock()
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.conn.closed = True
        self.conn.close()
        _conn.close.assert_not_called()
        self.assertTrue(self.conn.closed)

    def testCloseTwice(self) -> None:
        _conn = mock.MagicMock()
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.conn.close()
        self.conn.close()
        _conn.close.assert_called_once()

    def testFlushReturnsIfNoBuffer(self) -> None:
        _conn = mock.MagicMock()
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.assertEqual(self.conn.flush(), 0)
        self.assertTrue(not _conn.send.called)

    def testFlushRetriesPartialSends(self) -> None:
        _conn = mock.MagicMock()
        _conn.send.side_effect = [3, 2]
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.assertEqual(self.conn.write(b'hello'), 5)
        self.assertEqual(
            [c[0][0] for c in _conn.send.call_args_list],
            [b'hello', b'lo'],
        )
        self.assertFalse(self.conn.has_buffer())

    def testReadExactAcrossRecvCalls(self) -> None:
        _conn = mock.MagicMock()
        _conn.recv.side_effect = [b'\x05', b'\x01\x00ab']
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.assertEqual(self.conn.read_byte(), 5)
        self.assertEqual(self.conn.read_exact(2), b'\x01\x00')
        # Leftover is served before hitting the socket again
        self.assertEqual(self.conn.recv(), b'ab')
        self.assertEqual(_conn.recv.call_count, 2)

    def testReadExactZero(self) -> None:
        _conn = mock.MagicMock()
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.assertEqual(self.conn.read_exact(0), b'')
        _conn.recv.assert_not_called()

    def testReadExactRaisesOnEof(self) -> None:
        _conn = mock.MagicMock()
        _conn.recv.side_effect = [b'ab', b'']
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        with self.assertRaises(ConnectionTruncated) as ctx:
            self.conn.read_exact(4)
        self.assertEqual(ctx.exception.expected, 4)
        self.assertEqual(ctx.exception.received, 2)

    def testRecvReturnsNoneOnEof(self) -> None:
        _conn = mock.MagicMock()
        _conn.recv.return_value = b''
        self.conn = TestTcpConnection.TcpConnectionToTest(_conn)
        self.assertIsNone(self.conn.recv())

    @mock.patch('socket.socket')
    def testTcpServerEstablishesIPv6Connection(
            self, mock_socket: mock.Mock,
    ) -> None:
        conn = TcpServerConnection(
            IPV6_LOOPBACK, DEFAULT_PORT,
        )
        conn.connect()
        mock_socket.assert_called()
        mock_socket.return_value.connect.assert_called_with(
            (IPV6_LOOPBACK, DEFAULT_PORT, 0, 0),
        )
        mock_socket.return_value.settimeout.assert_called_with(None)
        self.assertFalse(conn.closed)

    @mock.patch('socket.socket')
    def testTcpServerEstablishesIPv4Connection(
            self, mock_socket: mock.Mock,
    ) -> None:
        conn = TcpServerConnection(
            str(DEFAULT_IPV4_HOSTNAME), DEFAULT_PORT,
        )
        conn.connect()
        mock_socket.assert_called()
        mock_socket.return_value.connect.assert_called_with(
            (str(DEFAULT_IPV4_HOSTNAME), DEFAULT_PORT),
        )

    @mock.patch('socks5d.core.connection.server.new_socket_connection')
    def testTcpServerConnectionProperty(
            self,
            mock_new_socket_connection: mock.Mock,
    ) -> None:
        conn = TcpServerConnection(
            IPV6_LOOPBACK, DEFAULT_PORT,
        )
        conn.connect()
        self.assertEqual(
            conn.connection,
            mock_new_socket_connection.return_value,
        )

    def testTcpServerNotConnectedIsClosed(self) -> None:
        conn = TcpServerConnection(
            str(DEFAULT_IPV4_HOSTNAME), DEFAULT_PORT,
        )
        self.assertEqual(conn.tag, 'upstream')
        self.assertTrue(conn.closed)
        # Nothing to close yet
        self.assertTrue(conn.close())

    def testTcpServerRaisesTcpConnectionUninitializedException(self) -> None:
        conn = TcpServerConnection(
            IPV6_LOOPBACK, DEFAULT_PORT,
        )
        with self.assertRaises(TcpConnectionUninitializedException):
            _ = conn.connection

    def testTcpClientRaisesTcpConnectionUninitializedException(self) -> None:
        _conn = mock.MagicMock()
        conn = TcpClientConnection(_conn, ('127.0.0.1', 1234))
        conn._conn = None
        with self.assertRaises(TcpConnectionUninitializedException):
            _ = conn.connection

    def testTcpClientAddress(self) -> None:
        _conn = mock.MagicMock()
        self.assertEqual(
            TcpClientConnection(_conn, ('127.0.0.1', 1234)).address,
            '127.0.0.1:1234',
        )
        self.assertEqual(TcpClientConnection(_conn).address, 'unknown:client')
