from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    cloud_name: str | None = None
    api_key: str | None = None
    api_secret: str | None = None
    folder: str = "uploads"
    timeout_seconds: float | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Image Gateway"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    upload_folder: str = "uploads"
    storage_timeout_seconds: float | None = Field(default=None, gt=0)
    probe_before_delete: bool = False
    unique_key_suffix: bool = False

    def storage_config(self) -> StorageConfig:
        return StorageConfig(
            cloud_name=self.cloudinary_cloud_name,
            api_key=self.cloudinary_api_key,
            api_secret=self.cloudinary_api_secret,
            folder=self.upload_folder,
            timeout_seconds=self.storage_timeout_seconds,
        )


settings = Settings()
