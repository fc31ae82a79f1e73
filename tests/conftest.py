"""Shared fixtures for socket-backed tests."""

from __future__ import annotations

import socket

import pytest


@pytest.fixture
def can_bind() -> None:
    """Skip the test when the sandbox does not allow binding sockets."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
    except PermissionError:
        pytest.skip("Socket bind not permitted in this environment")


@pytest.fixture
def tcp_listener(can_bind):
    """A TCP listener on 127.0.0.1, yielding its port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind(("127.0.0.1", 0))
        sock.listen(1)
        port = sock.getsockname()[1]
        if port < 1024:
            pytest.skip("OS handed out a privileged port")
        yield port
    finally:
        sock.close()


@pytest.fixture
def udp_socket(can_bind):
    """A bound UDP socket on 127.0.0.1, yielding its port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
        if port < 1024:
            pytest.skip("OS handed out a privileged port")
        yield port
    finally:
        sock.close()
