from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BookingCreatePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    property_id: Optional[str] = Field(default=None, alias="propertyId")
    check_in: Optional[str] = Field(default=None, alias="checkIn")
    check_out: Optional[str] = Field(default=None, alias="checkOut")
    guests: Optional[Any] = None


class BookingStatusPayload(BaseModel):
    status: Optional[str] = None
