"""
IP Check-in Azure Function package.

Receives device check-ins (device name + IPv4 address) over HTTP and
upserts them into Azure Table Storage.

Architecture:
    Device → [HTTP POST] → IpCheckin Function → Table Storage
"""

from .config import Settings, settings
from .exceptions import (
    CheckinError,
    ClientInputError,
    ConfigurationError,
    StoreFault,
    StoreRejection,
)

__all__ = [
    "Settings",
    "settings",
    "CheckinError",
    "ClientInputError",
    "ConfigurationError",
    "StoreFault",
    "StoreRejection",
]
