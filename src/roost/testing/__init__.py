"""Test utilities for roost applications.

Provides an in-process ASGI test client and helpers for driving
middleware directly::

    from roost.testing import TestClient, make_next, make_request
"""

from roost.testing.client import RecordingNext, TestClient, make_next, make_request

__all__ = [
    "RecordingNext",
    "TestClient",
    "make_next",
    "make_request",
]
