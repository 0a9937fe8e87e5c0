from pydantic import BaseModel, ConfigDict


class DeleteImageRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    public_id: str | None = None


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    result: str


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    message: str


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str
