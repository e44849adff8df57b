"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and that the
settings are read with test values.
"""

import os
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Configure before any app module reads the settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["GEMINI_API_KEY"] = ""
os.environ["ENVIRONMENT"] = "testing"


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Every test starts with empty rate limit windows."""
    from api.middleware import reset_rate_limits

    reset_rate_limits()
    yield
    reset_rate_limits()
