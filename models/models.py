from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    username: str = Field(min_length=1)


class NewMessage(BaseModel):
    username: str = Field(min_length=1)
    message: str = Field(min_length=1)
    # Always replaced with the server time before the message is stored
    sent_at: Optional[datetime] = None


class ChatMessage(BaseModel):
    username: str
    message: str
    sent_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    status: str = "ok"
