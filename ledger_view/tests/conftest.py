# ledger_view/tests/conftest.py

import pytest

@pytest.fixture
def anyio_backend():
    """Runs the anyio-marked async tests on asyncio only."""
    return "asyncio"
