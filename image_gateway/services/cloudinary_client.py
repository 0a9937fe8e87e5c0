import io
from pathlib import PurePosixPath
from typing import Any

import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from cloudinary.exceptions import NotFound
from fastapi.concurrency import run_in_threadpool
from loguru import logger

from image_gateway.config import StorageConfig
from image_gateway.errors import UpstreamError
from image_gateway.models.storage import DeleteOutcome, DeleteStatus, StoredAsset

RESOURCE_TYPE = "image"


def _public_id_for(key: str) -> str:
    # Cloudinary appends the detected format to the delivery URL.
    return PurePosixPath(key).stem or key


class CloudinaryGateway:
    """Storage gateway backed by the Cloudinary SDK.

    Every call carries its own credentials, so the SDK's process-wide
    configuration is never touched.
    """

    def __init__(self, config: StorageConfig) -> None:
        self.config = config

    def _call_options(self) -> dict[str, Any]:
        if not self.config.has_credentials:
            logger.error("Cloudinary credentials missing; refusing storage call")
            raise UpstreamError("Cloudinary credentials are not configured")
        options: dict[str, Any] = {
            "cloud_name": self.config.cloud_name,
            "api_key": self.config.api_key,
            "api_secret": self.config.api_secret,
            "resource_type": RESOURCE_TYPE,
        }
        if self.config.timeout_seconds is not None:
            options["timeout"] = self.config.timeout_seconds
        return options

    async def store(self, data: bytes, key: str, folder: str | None = None) -> StoredAsset:
        options = self._call_options()
        options["public_id"] = _public_id_for(key)
        options["folder"] = folder or self.config.folder
        try:
            logger.debug(
                "Calling Cloudinary upload public_id={} folder={} size_bytes={}",
                options["public_id"],
                options["folder"],
                len(data),
            )
            result = await run_in_threadpool(cloudinary.uploader.upload, io.BytesIO(data), **options)
            return StoredAsset(url=result["secure_url"], public_id=result["public_id"])
        except CloudinaryError as exc:
            logger.error("Cloudinary upload failed public_id={} error={}", options["public_id"], str(exc))
            raise UpstreamError(str(exc), error="Failed to upload image") from exc
        except KeyError as exc:
            logger.error("Cloudinary upload response incomplete public_id={} missing={}", options["public_id"], exc.args[0])
            raise UpstreamError(
                f"Cloudinary upload response missing {exc.args[0]}", error="Failed to upload image"
            ) from exc
        except Exception as exc:
            logger.exception("Cloudinary upload error public_id={} error={}", options["public_id"], str(exc))
            raise UpstreamError(str(exc), error="Failed to upload image") from exc

    async def delete(self, public_id: str) -> DeleteOutcome:
        options = self._call_options()
        try:
            logger.debug("Calling Cloudinary destroy public_id={}", public_id)
            result = await run_in_threadpool(cloudinary.uploader.destroy, public_id, **options)
        except CloudinaryError as exc:
            logger.error("Cloudinary destroy failed public_id={} error={}", public_id, str(exc))
            raise UpstreamError(str(exc), error="Failed to delete image") from exc
        except Exception as exc:
            logger.exception("Cloudinary destroy error public_id={} error={}", public_id, str(exc))
            raise UpstreamError(str(exc), error="Failed to delete image") from exc

        raw = str(result.get("result", ""))
        if raw == "ok":
            return DeleteOutcome(status=DeleteStatus.OK, raw=raw)
        if raw == "not found":
            return DeleteOutcome(status=DeleteStatus.NOT_FOUND, raw=raw)
        return DeleteOutcome(status=DeleteStatus.OTHER, raw=raw)

    async def exists(self, public_id: str) -> bool:
        options = self._call_options()
        try:
            await run_in_threadpool(cloudinary.api.resource, public_id, **options)
        except NotFound:
            return False
        except CloudinaryError as exc:
            logger.error("Cloudinary resource lookup failed public_id={} error={}", public_id, str(exc))
            raise UpstreamError(str(exc), error="Failed to look up image") from exc
        except Exception as exc:
            logger.exception("Cloudinary resource lookup error public_id={} error={}", public_id, str(exc))
            raise UpstreamError(str(exc), error="Failed to look up image") from exc
        return True
