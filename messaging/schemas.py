from pydantic import BaseModel
from typing import Optional


class MessageEnvelope(BaseModel):
    recipient: str
    body: str
    api_key: str = ""
    endpoint_url: Optional[str] = None
    subject: Optional[str] = None


class MessageResult(BaseModel):
    success: bool
    message: str
