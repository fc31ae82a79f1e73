"""
Search for a port that is free on every relevant local address.

Typical use::

    from port_picker import PortPicker, Protocol

    port = PortPicker().port_range(3000, 4000).protocol(Protocol.TCP).pick()
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from typing import Optional, Union

from port_picker.errors import InvalidOption, NoAvailablePort
from port_picker.hosts import IPAddress, resolve_hosts
from port_picker.probe import is_free_in_hosts
from port_picker.protocol import Protocol

logger = logging.getLogger(__name__)

MIN_PORT = 1024
MAX_PORT = 65535


class PortPicker:
    """
    Chainable configuration for a single port search.

    Defaults: the whole ``MIN_PORT..MAX_PORT`` range, no exclusions, both
    transports, every local address, sequential order. ``pick()`` does not
    modify the picker, so one instance can serve several searches. The
    port is only probed, never held: another process may take it before
    the caller binds it.
    """

    def __init__(self) -> None:
        self._start = MIN_PORT
        self._end = MAX_PORT
        self._exclude: set[int] = set()
        self._protocol = Protocol.ALL
        self._host: Optional[str] = None
        self._random = False

    def __repr__(self) -> str:
        return (
            f"PortPicker(range={self._start}-{self._end}, exclude={sorted(self._exclude)}, "
            f"protocol={self._protocol.value}, host={self._host!r}, random={self._random})"
        )

    def port_range(self, start: int, end: int) -> PortPicker:
        """Inclusive range to search, within MIN_PORT..MAX_PORT."""
        self._start = start
        self._end = end
        return self

    def exclude(self, ports: Iterable[int]) -> PortPicker:
        """Replace the set of ports that are never returned."""
        self._exclude = set(ports)
        return self

    def exclude_add(self, port: int) -> PortPicker:
        self._exclude.add(port)
        return self

    def protocol(self, protocol: Union[Protocol, str]) -> PortPicker:
        """Transport(s) to check, ``Protocol.ALL`` by default."""
        self._protocol = Protocol(protocol)
        return self

    def host(self, host: str) -> PortPicker:
        """
        Only check availability on this IPv4 or IPv6 address.

        Without a host, every address of every local interface is checked,
        along with 0.0.0.0 and ::.
        """
        self._host = host
        return self

    def random(self, random: bool = True) -> PortPicker:
        """Draw candidates at random instead of scanning in order."""
        self._random = random
        return self

    def _validate(self) -> None:
        if self._start > self._end:
            raise InvalidOption("The start port must be less than or equal to the end port")
        if self._start < MIN_PORT or self._end > MAX_PORT:
            raise InvalidOption(f"The port range must be between {MIN_PORT} and {MAX_PORT}")

    def _sequential_port(self, hosts: set[IPAddress]) -> int:
        for port in range(self._start, self._end + 1):
            if port in self._exclude:
                continue
            if is_free_in_hosts(port, hosts, self._protocol):
                return port
        raise NoAvailablePort()

    def _random_port(self, hosts: set[IPAddress]) -> int:
        # Draws repeat, so this can give up while a free port remains
        for _ in range(self._end - self._start + 1):
            port = random.randint(self._start, self._end)
            if port in self._exclude:
                continue
            if is_free_in_hosts(port, hosts, self._protocol):
                return port
        raise NoAvailablePort()

    def pick(self) -> int:
        """
        Find a free port.

        Returns:
            A port in the configured range, not excluded, free on every
            resolved address for the configured protocol(s)

        Raises:
            InvalidOption: The range or host is invalid; nothing was probed
            NoAvailablePort: The search ended without a free port
        """
        self._validate()
        hosts = resolve_hosts(self._host)

        try:
            port = self._random_port(hosts) if self._random else self._sequential_port(hosts)
        except NoAvailablePort:
            logger.warning(f"No available port found in range {self._start}-{self._end}")
            raise
        logger.debug(f"Picked port {port}")
        return port


def pick_unused_port(
    start: int = MIN_PORT,
    end: int = MAX_PORT,
    exclude: Iterable[int] = (),
    protocol: Union[Protocol, str] = Protocol.ALL,
    host: Optional[str] = None,
    random: bool = False,
) -> int:
    """Build a PortPicker from keyword options and pick a port with it."""
    picker = PortPicker().port_range(start, end).exclude(exclude).protocol(protocol).random(random)
    if host is not None:
        picker.host(host)
    return picker.pick()
