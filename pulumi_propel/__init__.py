"""
pulumi-propel - Pulumi dynamic providers for Propel.

Manage Propel Data Sources, Data Pools and Metrics declaratively. Creating a
Data Source or Data Pool blocks until the API reports it ready; deleting one
blocks until the API no longer finds it.
"""

from .errors import (
    ApiError,
    ConfigurationError,
    CreateFailedError,
    Diagnostic,
    PropelError,
    ProvisioningError,
    Severity,
    WaitTimeoutError,
)
from .poller import PollResult, PollState, StatusPoller
from .settings import PropelSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "ApiError",
    "ConfigurationError",
    "CreateFailedError",
    "Diagnostic",
    "PollResult",
    "PollState",
    "PropelError",
    "PropelSettings",
    "ProvisioningError",
    "Severity",
    "StatusPoller",
    "WaitTimeoutError",
    "get_settings",
    "reload_settings",
]
