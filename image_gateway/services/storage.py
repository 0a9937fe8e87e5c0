import time
from typing import Protocol
from uuid import uuid4

from loguru import logger

from image_gateway.errors import ClientInputError, NotFoundError, UpstreamError
from image_gateway.models.responses import DeleteResponse, HealthResponse
from image_gateway.models.storage import DeleteOutcome, DeleteStatus, StoredAsset
from image_gateway.models.upload import UploadResponse, UploadUrls

DEFAULT_FILENAME = "image"


class StorageGateway(Protocol):
    async def store(self, data: bytes, key: str, folder: str | None = None) -> StoredAsset: ...

    async def delete(self, public_id: str) -> DeleteOutcome: ...

    async def exists(self, public_id: str) -> bool: ...


def build_storage_key(filename: str | None, now_ms: int | None = None, unique_suffix: bool = False) -> str:
    """Return ``{millis}-{filename}``, optionally with a random component after the timestamp.

    Keys are not guaranteed unique: two uploads of the same filename in the same
    millisecond collide unless ``unique_suffix`` is set.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    name = filename or DEFAULT_FILENAME
    if unique_suffix:
        return f"{now_ms}-{uuid4().hex[:8]}-{name}"
    return f"{now_ms}-{name}"


async def handle_upload(
    gateway: StorageGateway,
    data: bytes | None,
    filename: str | None,
    folder: str | None = None,
    unique_suffix: bool = False,
) -> UploadResponse:
    if not data:
        logger.warning("Upload rejected filename={} reason=no_file", filename)
        raise ClientInputError("No image file provided", error="No file provided")

    storage_key = build_storage_key(filename, unique_suffix=unique_suffix)
    logger.info("Upload dispatched storage_key={} folder={} size_bytes={}", storage_key, folder, len(data))
    asset = await gateway.store(data, storage_key, folder)
    logger.info("Upload stored storage_key={} public_id={} url={}", storage_key, asset.public_id, asset.url)

    return UploadResponse(urls=UploadUrls(cloud_url=asset.url, public_id=asset.public_id))


async def handle_delete(gateway: StorageGateway, public_id: str | None, probe: bool = False) -> DeleteResponse:
    if not public_id:
        logger.warning("Delete rejected reason=missing_public_id")
        raise ClientInputError("public_id is required", error="Missing identifier")

    # The probe only buys a clearer message; destroy reports "not found" on its own.
    if probe and not await gateway.exists(public_id):
        logger.warning("Delete probe found no asset public_id={}", public_id)
        raise NotFoundError(f"Image with public_id '{public_id}' does not exist")

    outcome = await gateway.delete(public_id)
    if outcome.status == DeleteStatus.OK:
        logger.info("Image deleted public_id={}", public_id)
        return DeleteResponse(message="Image deleted successfully", result=outcome.raw or "ok")
    if outcome.status == DeleteStatus.NOT_FOUND:
        logger.warning("Delete target not found public_id={}", public_id)
        raise NotFoundError(f"Image with public_id '{public_id}' was not found")

    logger.error("Delete returned unexpected result public_id={} result={}", public_id, outcome.raw)
    raise UpstreamError(f"Unexpected delete result: {outcome.raw}", error="Failed to delete image")


def health_check() -> HealthResponse:
    return HealthResponse(message="Image gateway is running")
