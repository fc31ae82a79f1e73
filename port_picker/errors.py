"""Errors raised by the port picker."""

from __future__ import annotations

from typing import Optional


class PortPickerError(Exception):
    """Base class for port picker errors."""


class InvalidOption(PortPickerError):
    """Raised by ``pick()`` when the configuration cannot be searched."""

    def __init__(self, message: str, host: Optional[str] = None) -> None:
        self.message = message
        self.host = host
        super().__init__(message)


class NoAvailablePort(PortPickerError):
    """Raised when the search ends without a free port."""

    def __init__(self) -> None:
        super().__init__("No available port")
