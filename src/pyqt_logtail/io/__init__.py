"""
Remote log IO.

The ``LogSource`` protocol, its HTTP implementation and the read errors.
"""

from .base import LogSource
from .exceptions import (
    LogReadError,
    MissingCredentials,
    RemoteFailure,
    TransportFailure,
    Unauthorized,
)
from .http_log_source import HttpLogSource, build_auth_header, normalize_host

__all__ = [
    "LogSource",
    "HttpLogSource",
    "build_auth_header",
    "normalize_host",
    "LogReadError",
    "MissingCredentials",
    "RemoteFailure",
    "TransportFailure",
    "Unauthorized",
]
