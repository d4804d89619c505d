"""Exception hierarchy for discovery-ec2.

Exception Hierarchy:
    DiscoveryEc2Error (base)
    ├── InvalidRegionError - Region has no known EC2 endpoint
    └── SettingsError - Settings file or value could not be read

Absent settings are never errors. Every option has a default, and a missing
region or endpoint simply leaves the choice to the AWS SDK.
"""

from typing import Optional


class DiscoveryEc2Error(Exception):
    """Base class for all discovery-ec2 errors."""


class InvalidRegionError(DiscoveryEc2Error, ValueError):
    """Raised when a configured region is not in the known region table."""

    def __init__(self, region: str):
        self.region = region
        super().__init__(f"No automatic endpoint could be derived from region [{region}]")


class SettingsError(DiscoveryEc2Error, ValueError):
    """Raised when a settings source cannot be parsed or a value has the wrong type."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)
