from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional

from shortlink_app.exceptions import InvalidLinkError
from shortlink_app.models.link import normalize_url, validate_slug


class LinkCreate(BaseModel):
    """Request body for creating a link; slug is generated when omitted"""

    slug: Optional[str] = Field(None, description="Custom slug for the short URL")
    url: str = Field(..., description="Destination URL, https is assumed without a scheme")

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value.strip() == "":
            return None
        try:
            return validate_slug(value)
        except InvalidLinkError as e:
            raise ValueError(e.message) from e

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        try:
            return normalize_url(value)
        except InvalidLinkError as e:
            raise ValueError(e.message) from e


class LinkResponse(BaseModel):
    """Response schema that serializes a Link model

    - from_attributes=True reads straight from the Link instance
    - short_url is filled in by the route, which knows the request host
    """
    slug: str
    url: str
    clicks: int
    short_url: str

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)
