from pydantic import BaseModel, Field, SecretStr
from typing import List, Optional


class PublisherStartRequest(BaseModel):
    channel: str = Field(..., min_length=1)
    password: SecretStr


class OperationResponse(BaseModel):
    status: str
    message: str


class PublisherStatusResponse(BaseModel):
    state: str
    channel: Optional[str] = None
    last_error: Optional[str] = None
    cycles: int = 0
    overruns: int = 0


class ChannelResponse(BaseModel):
    id: str
    name: str


class ChannelListResponse(BaseModel):
    channels: List[ChannelResponse]
