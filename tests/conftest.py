import pytest
from fastapi.testclient import TestClient

from image_gateway.config import Settings
from image_gateway.dependencies import get_settings, get_storage_gateway
from image_gateway.errors import UpstreamError
from image_gateway.main import app
from image_gateway.models.storage import DeleteOutcome, DeleteStatus, StoredAsset


class FakeGateway:
    """Records every call and echoes the storage key back as the asset identifier."""

    def __init__(self) -> None:
        self.store_calls: list[tuple[bytes, str, str | None]] = []
        self.delete_calls: list[str] = []
        self.exists_calls: list[str] = []
        self.delete_results: dict[str, DeleteOutcome] = {}
        self.missing: set[str] = set()
        self.store_error: str | None = None
        self.store_exception: Exception | None = None
        self.delete_error: str | None = None

    async def store(self, data: bytes, key: str, folder: str | None = None) -> StoredAsset:
        self.store_calls.append((data, key, folder))
        if self.store_error:
            raise UpstreamError(self.store_error, error="Failed to upload image")
        if self.store_exception is not None:
            raise self.store_exception
        return StoredAsset(url=f"https://x/{key}", public_id=key)

    async def delete(self, public_id: str) -> DeleteOutcome:
        self.delete_calls.append(public_id)
        if self.delete_error:
            raise UpstreamError(self.delete_error, error="Failed to delete image")
        return self.delete_results.get(public_id, DeleteOutcome(status=DeleteStatus.OK, raw="ok"))

    async def exists(self, public_id: str) -> bool:
        self.exists_calls.append(public_id)
        return public_id not in self.missing


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, upload_folder="uploads")


@pytest.fixture
def client(fake_gateway: FakeGateway, test_settings: Settings):
    app.dependency_overrides[get_storage_gateway] = lambda: fake_gateway
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
