from fastapi import Request

from image_gateway.config import Settings
from image_gateway.services.storage import StorageGateway


def get_storage_gateway(request: Request) -> StorageGateway:
    return request.app.state.storage_gateway


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
