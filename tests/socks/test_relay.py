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
import threading
import unittest

from typing import List, Tuple

from socks5d.socks import relay

from .utils import connection_pair, recv_exact


class TestRelay(unittest.TestCase):

    def setUp(self) -> None:
        self.client, self.client_peer = connection_pair()
        self.upstream, self.upstream_peer = connection_pair()
        self.result: List[Tuple[int, int]] = []
        self.thread = threading.Thread(
            target=lambda: self.result.append(
                relay(self.upstream, self.client, 1024, 1024),
            ),
            daemon=True,
        )
        self.thread.start()

    def tearDown(self) -> None:
        self.thread.join(timeout=5)
        self.client_peer.close()
        self.upstream_peer.close()

    def test_bytes_flow_both_ways(self) -> None:
        self.client_peer.sendall(b'hello')
        self.assertEqual(recv_exact(self.upstream_peer, 5), b'hello')
        self.upstream_peer.sendall(b'world!')
        self.assertEqual(recv_exact(self.client_peer, 6), b'world!')
        self.client_peer.shutdown(socket.SHUT_WR)
        self.thread.join(timeout=5)
        self.assertFalse(self.thread.is_alive())
        self.assertEqual(self.result, [(5, 6)])
        self.assertTrue(self.client.closed)
        self.assertTrue(self.upstream.closed)
        # Upstream sees EOF once the client side went away
        self.assertEqual(self.upstream_peer.recv(1), b'')

    def test_upstream_close_ends_relay(self) -> None:
        self.upstream_peer.sendall(b'bye')
        self.upstream_peer.shutdown(socket.SHUT_WR)
        self.assertEqual(recv_exact(self.client_peer, 3), b'bye')
        self.thread.join(timeout=5)
        self.assertFalse(self.thread.is_alive())
        self.assertEqual(self.result, [(0, 3)])
        self.assertEqual(self.client_peer.recv(1), b'')

    def test_large_payload_is_not_truncated(self) -> None:
        payload = bytes(range(256)) * 1024
        sender = threading.Thread(
            target=self.client_peer.sendall, args=(payload,), daemon=True,
        )
        sender.start()
        self.assertEqual(recv_exact(self.upstream_peer, len(payload)), payload)
        sender.join(timeout=5)
        self.client_peer.shutdown(socket.SHUT_WR)
        self.thread.join(timeout=5)
        self.assertEqual(self.result, [(len(payload), 0)])
