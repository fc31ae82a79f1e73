"""Pick a free local port by probing candidates with real binds."""

from port_picker.errors import InvalidOption, NoAvailablePort, PortPickerError
from port_picker.picker import MAX_PORT, MIN_PORT, PortPicker, pick_unused_port
from port_picker.protocol import Protocol

__all__ = [
    "PortPicker",
    "Protocol",
    "pick_unused_port",
    "PortPickerError",
    "InvalidOption",
    "NoAvailablePort",
    "MIN_PORT",
    "MAX_PORT",
]
