"""Test configuration and fixtures."""

import logfire
import pytest

from forum.domain.value import Identity
from tests.factories import make_identity

# The app module instruments FastAPI at import time, so logfire must be
# configured before any test imports it. Nothing leaves the process.
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def identity() -> Identity:
    """A regular user."""
    return make_identity()
