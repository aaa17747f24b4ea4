import os
import sys

import pytest

# Ensure tests can import top-level modules when pytest changes CWD.
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from environment import Environment  # noqa: E402


@pytest.fixture
def global_env():
    """A fresh top-level environment shared across several evaluations."""
    return Environment()
