"""Test utilities for htex applications::

    from htex.testing import TestClient
"""

from htex.testing.client import TestClient

__all__ = ["TestClient"]
