"""
HTTP lookup client.

Turns lookup arguments into a GET request against a REST endpoint and decodes
the response into at most one record.
"""

from http_lookup.client import HttpPollingClient, LookupResult, LookupStatus
from http_lookup.decoders import JsonResponseDecoder
from http_lookup.query import LookupArg, LookupQueryInfo
from http_lookup.settings import ConfigurationError, Settings
from http_lookup.uri import MalformedURIError

__all__ = [
    "ConfigurationError",
    "HttpPollingClient",
    "JsonResponseDecoder",
    "LookupArg",
    "LookupQueryInfo",
    "LookupResult",
    "LookupStatus",
    "MalformedURIError",
    "Settings",
]
