"""HTTP transport factory for the lookup client."""

import httpx

from http_lookup.settings import Settings


def create_lookup_transport(settings: Settings) -> httpx.Client:
    """
    Build a Client for lookup requests.

    httpx.Client is safe to share between threads, so one instance serves
    every concurrent pull.
    """
    return httpx.Client(timeout=settings.timeout)
