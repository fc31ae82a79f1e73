"""
Bind probes used to decide whether a port is free.

A probe binds a socket to the exact address and port, then releases it
straight away. Nothing is held after a probe returns.
"""

from __future__ import annotations

import errno
import logging
import os
import socket
from collections.abc import Iterable

from port_picker.hosts import IPAddress
from port_picker.protocol import Protocol

logger = logging.getLogger(__name__)

# Failures that blame the address rather than the port
ADDRESS_UNUSABLE_ERRNOS = frozenset({
    errno.EADDRNOTAVAIL,
    errno.EINVAL,
    errno.EAFNOSUPPORT,
})


def _family(host: IPAddress) -> socket.AddressFamily:
    return socket.AF_INET6 if host.version == 6 else socket.AF_INET


def _address_unusable(exc: OSError) -> bool:
    if isinstance(exc, socket.gaierror):
        return True
    return exc.errno in ADDRESS_UNUSABLE_ERRNOS


def is_free_tcp(port: int, host: IPAddress) -> bool:
    """Check whether a TCP listener can be opened on host:port."""
    try:
        with socket.socket(_family(host), socket.SOCK_STREAM) as s:
            # Windows SO_REUSEADDR lets a second socket steal a bound port
            if os.name != "nt":
                s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((str(host), port))
            s.listen(1)
        return True
    except OSError as e:
        return _address_unusable(e)


def is_free_udp(port: int, host: IPAddress) -> bool:
    """Check whether a UDP socket can be bound on host:port."""
    try:
        with socket.socket(_family(host), socket.SOCK_DGRAM) as s:
            s.bind((str(host), port))
        return True
    except OSError as e:
        return _address_unusable(e)


def is_free(port: int, host: IPAddress, protocol: Protocol) -> bool:
    if protocol is Protocol.TCP:
        return is_free_tcp(port, host)
    if protocol is Protocol.UDP:
        return is_free_udp(port, host)
    return is_free_tcp(port, host) and is_free_udp(port, host)


def is_free_in_hosts(port: int, hosts: Iterable[IPAddress], protocol: Protocol) -> bool:
    """
    Check a port on every host, stopping at the first one that blocks it.

    Args:
        port: Port number to check
        hosts: Addresses the port must be free on
        protocol: Transport(s) that must report the port as free

    Returns:
        True if the port is free on all hosts
    """
    for host in hosts:
        if not is_free(port, host, protocol):
            logger.debug(f"Port {port} is not free on {host}")
            return False
    return True
