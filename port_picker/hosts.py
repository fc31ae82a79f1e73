"""Resolution of the local addresses a candidate port is checked on."""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Optional, Union

import psutil

from port_picker.errors import InvalidOption

logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

UNSPECIFIED_V4 = ipaddress.IPv4Address("0.0.0.0")
UNSPECIFIED_V6 = ipaddress.IPv6Address("::")

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def parse_host(host: str) -> IPAddress:
    """Parse an IPv4 or IPv6 literal, raising InvalidOption otherwise."""
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        raise InvalidOption(f"The host {host} is not a valid IP address", host=host) from None


def get_local_hosts() -> set[IPAddress]:
    """
    Collect every address bound to a local network interface.

    The IPv4 and IPv6 unspecified addresses are always part of the result,
    whatever the interfaces report. Link-layer entries are ignored. Errors
    from the interface enumeration are not caught.

    Returns:
        Deduplicated set of interface addresses
    """
    result: set[IPAddress] = {UNSPECIFIED_V4, UNSPECIFIED_V6}
    for name, addrs in psutil.net_if_addrs().items():
        for a in addrs:
            if a.family not in _IP_FAMILIES or not a.address:
                continue
            try:
                result.add(ipaddress.ip_address(a.address))
            except ValueError:
                logger.debug(f"Skipping unparseable address {a.address!r} on {name}")
    return result


def resolve_hosts(host: Optional[str] = None) -> set[IPAddress]:
    if host is not None:
        return {parse_host(host)}
    return get_local_hosts()
