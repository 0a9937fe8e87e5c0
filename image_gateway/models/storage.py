from enum import Enum

from pydantic import BaseModel


class DeleteStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    OTHER = "other"


class StoredAsset(BaseModel):
    url: str
    public_id: str


class DeleteOutcome(BaseModel):
    status: DeleteStatus
    raw: str | None = None
