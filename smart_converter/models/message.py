# Role: Single conversation-history entry. Stored in the SessionContext and passed to the LLM as context
# (role + content + timestamp). Pydantic makes it easy to serialize/debug.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["user", "model"]


class Message(BaseModel):
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
