from pydantic import BaseModel, ConfigDict, Field


class UploadUrls(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cloud_url: str = Field(alias="cloudURL")
    public_id: str | None = Field(default=None, alias="publicId")


class UploadResponse(BaseModel):
    success: bool = True
    urls: UploadUrls
