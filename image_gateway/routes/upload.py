from fastapi import APIRouter, Depends, File, UploadFile
from loguru import logger

from image_gateway.config import Settings
from image_gateway.dependencies import get_settings, get_storage_gateway
from image_gateway.models.upload import UploadResponse
from image_gateway.services.storage import StorageGateway, handle_upload

router = APIRouter(tags=["images"])


@router.post("/upload-image", response_model=UploadResponse)
async def upload_image(
    image: UploadFile | None = File(default=None),
    gateway: StorageGateway = Depends(get_storage_gateway),
    app_settings: Settings = Depends(get_settings),
) -> UploadResponse:
    data: bytes | None = None
    filename: str | None = None
    content_type: str | None = None
    if image is not None:
        data = await image.read()
        filename = image.filename
        content_type = image.content_type
    logger.info(
        "Upload request filename={} content_type={} size_bytes={}",
        filename,
        content_type,
        len(data or b""),
    )
    return await handle_upload(
        gateway,
        data,
        filename,
        folder=app_settings.upload_folder,
        unique_suffix=app_settings.unique_key_suffix,
    )
