from enum import Enum


class Protocol(Enum):
    """Transport(s) that must independently report a port as free."""

    ALL = "all"
    TCP = "tcp"
    UDP = "udp"
