"""Shared test fixtures."""

from dataclasses import replace
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from jsonstore.configs import load_config  # noqa: E402
from jsonstore.providers.StorageProvider.local_provider import LocalStorageProvider  # noqa: E402
from jsonstore.providers.StorageProvider.memory_provider import InMemoryStorageProvider  # noqa: E402


class FakeClock:
    """Deterministic, strictly increasing timestamps."""

    def __init__(self):
        self.tick = 0

    def __call__(self) -> str:
        self.tick += 1
        return f"2024-01-01T00:00:{self.tick:02d}.000000Z"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "store"


@pytest.fixture
def local_storage(storage_root):
    return LocalStorageProvider(str(storage_root))


@pytest.fixture
def memory_storage():
    return InMemoryStorageProvider()


@pytest.fixture(params=["local", "memory"])
def storage(request, storage_root):
    """Run a test against both storage providers."""
    if request.param == "local":
        return LocalStorageProvider(str(storage_root))
    return InMemoryStorageProvider()


@pytest.fixture
def cfg(storage_root):
    return replace(
        load_config(),
        storage_root=str(storage_root),
        tenant_override_header="X-Host",
        tenant_key_includes_port=True,
        enforce_unique_display_name=True,
        require_display_name=False,
        duplicate_name_status=409,
        default_config_path="",
        serialize_tenant_writes=False,
    )


@pytest.fixture
def app(cfg):
    from WebAPI import create_app

    app = create_app(cfg)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
