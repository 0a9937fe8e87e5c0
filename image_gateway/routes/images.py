from fastapi import APIRouter, Body, Depends
from loguru import logger

from image_gateway.config import Settings
from image_gateway.dependencies import get_settings, get_storage_gateway
from image_gateway.models.responses import DeleteImageRequest, DeleteResponse
from image_gateway.services.storage import StorageGateway, handle_delete

router = APIRouter(tags=["images"])


@router.delete("/delete-image", response_model=DeleteResponse)
async def delete_image(
    payload: DeleteImageRequest | None = Body(default=None),
    gateway: StorageGateway = Depends(get_storage_gateway),
    app_settings: Settings = Depends(get_settings),
) -> DeleteResponse:
    public_id = payload.public_id if payload is not None else None
    logger.info("Delete request public_id={} probe={}", public_id, app_settings.probe_before_delete)
    return await handle_delete(gateway, public_id, probe=app_settings.probe_before_delete)
