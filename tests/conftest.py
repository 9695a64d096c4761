"""
Pytest fixtures for Imbibe Action tests. RPC is replaced by an in-memory stub connection.
"""

from __future__ import annotations

import pytest
from solders.pubkey import Pubkey

from tests.stubs import OWNER_WALLET, SIGNER_WALLET, StubConnection, registry_data


@pytest.fixture
def owner() -> Pubkey:
    return Pubkey.from_string(OWNER_WALLET)


@pytest.fixture
def signer() -> Pubkey:
    return Pubkey.from_string(SIGNER_WALLET)


@pytest.fixture
def stub_connection(owner) -> StubConnection:
    """Connection whose lookup for 'imbibed' returns `owner`."""
    from imbibe_action.sns.resolver import get_domain_key

    return StubConnection({get_domain_key("imbibed"): registry_data(owner)})


@pytest.fixture
def missing_connection() -> StubConnection:
    """Connection where imbibed.sol has no registry account."""
    return StubConnection()


def _client_for(connection: StubConnection):
    from fastapi.testclient import TestClient

    from imbibe_action.api_server.server import app, get_connection

    app.dependency_overrides[get_connection] = lambda: connection
    return TestClient(app)


@pytest.fixture
def client(stub_connection):
    """FastAPI TestClient with RPC replaced by stub_connection."""
    from imbibe_action.api_server.server import app

    yield _client_for(stub_connection)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(missing_connection):
    """FastAPI TestClient whose SNS lookup finds no owner."""
    from imbibe_action.api_server.server import app

    yield _client_for(missing_connection)
    app.dependency_overrides.clear()
