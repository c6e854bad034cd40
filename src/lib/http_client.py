"""
httpx client factory

Every outbound request (README fetch, GitHub lookup, Modrinth PATCH) goes
through one client so timeouts and the User-Agent are set in one place.
Tests swap the network out by passing an httpx.MockTransport as transport.
"""

from typing import Optional

import httpx

from ..config import AppSettings


def client_build(
    settings: AppSettings,
    user_agent: str,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Create an httpx.Client with the configured timeout and User-Agent.

    Args:
        settings: Supplies http_timeout_seconds
        user_agent: Default User-Agent header
        transport: Optional transport override (e.g., httpx.MockTransport)
    """
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers={"User-Agent": user_agent},
        transport=transport,
    )
