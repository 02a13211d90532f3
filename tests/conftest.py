import pytest

from envsync.utils.logging import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _configure_logging():
    """Route structlog through stdlib logging before any module logs."""
    configure_logging()
