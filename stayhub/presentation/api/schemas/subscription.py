from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan_id: Optional[str] = Field(default=None, alias="planId")
