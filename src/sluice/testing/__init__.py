"""Test utilities for sluice servers::

    from sluice.testing import TestClient
"""

from sluice.testing.client import TestClient

__all__ = ["TestClient"]
