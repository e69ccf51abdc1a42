"""Activity log schemas"""
from datetime import datetime

from pydantic import BaseModel


class ActivityLogResponse(BaseModel):
    id: int
    user_id: int | None = None
    user_name: str
    action: str
    detail: str = ""
    ts: datetime | None = None

    model_config = {"from_attributes": True}
