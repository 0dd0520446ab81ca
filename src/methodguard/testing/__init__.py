"""Test utilities for methodguard applications::

    from methodguard.testing import TestClient
"""

from methodguard.testing.client import TestClient

__all__ = ["TestClient"]
