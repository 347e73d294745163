"""Pydantic schemas for listing endpoints.

Count fields accept any JSON value; the listing service applies the
parsing rules and defaults.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel


class PropertyPayload(BaseModel):
    """Fields an owner can supply when creating or editing a listing."""

    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    price: Optional[Union[float, str]] = None
    type: Optional[str] = None
    bedrooms: Optional[Any] = None
    bathrooms: Optional[Any] = None
    guests: Optional[Any] = None
    amenities: Optional[Union[List[str], str]] = None
    images: Optional[List[str]] = None
    instant: Optional[bool] = None
