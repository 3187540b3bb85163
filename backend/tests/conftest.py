from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pinbox.deps import get_pinning_gateway
from pinbox.main import app
from pinbox.storage.gateway import PinningGateway
from pinbox.storage.local import LocalFallbackStore
from utils_pin import GATEWAY, no_remote


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def local_gateway(upload_dir):
    return PinningGateway(None, LocalFallbackStore(upload_dir), no_remote, gateway_base=GATEWAY, local_root=upload_dir)


@pytest.fixture
def make_client():
    def _make(gateway: PinningGateway) -> TestClient:
        app.dependency_overrides[get_pinning_gateway] = lambda: gateway
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
