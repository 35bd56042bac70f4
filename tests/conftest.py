"""Pytest fixtures and shared test configuration.

Fixtures:
    - gateway_config: Explicit gateway settings, independent of the environment
    - mock_gateway: AsyncMock standing in for BackendGateway in unit tests
    - backend_state: Mutable state of the in-memory fake backend
    - gateway: Real BackendGateway talking to the fake backend via ASGITransport
    - workspace: Fully wired session components on top of ``gateway``
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from docmind.gateway.client import BackendGateway
from docmind.gateway.config import GatewayConfig
from docmind.models.schemas import DocumentFile
from docmind.session import Workspace
from tests.fake_backend import FakeBackendState, create_fake_backend


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """Return gateway settings with the stock defaults."""
    return GatewayConfig(
        base_url="http://test",
        timeout=5.0,
        chunk_size=400,
        chunk_overlap=50,
        top_k=5,
    )


@pytest.fixture
def mock_gateway(gateway_config: GatewayConfig) -> MagicMock:
    """Gateway double whose remote calls are AsyncMocks."""
    gateway = MagicMock(spec=BackendGateway)
    gateway.config = gateway_config
    gateway.list_sessions = AsyncMock(return_value=[])
    gateway.create_session = AsyncMock()
    gateway.ask = AsyncMock()
    gateway.get_history = AsyncMock()
    gateway.delete_session = AsyncMock(return_value=None)
    return gateway


@pytest.fixture
def backend_state() -> FakeBackendState:
    return FakeBackendState()


@pytest.fixture
async def gateway(
    backend_state: FakeBackendState, gateway_config: GatewayConfig
) -> AsyncGenerator[BackendGateway]:
    """Create a gateway bound to the fake backend.

    Yields:
        BackendGateway whose requests never leave the process.
    """
    transport = ASGITransport(app=create_fake_backend(backend_state))
    client = AsyncClient(transport=transport, base_url="http://test")
    async with BackendGateway(config=gateway_config, client=client) as gw:
        yield gw


@pytest.fixture
def workspace(gateway: BackendGateway) -> Workspace:
    return Workspace(gateway=gateway)


@pytest.fixture
def sample_document() -> DocumentFile:
    return DocumentFile(
        filename="contract.txt",
        content=b"The agreement may be terminated with 30 days written notice.",
        content_type="text/plain",
    )
