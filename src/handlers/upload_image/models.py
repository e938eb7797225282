"""Pydantic models for image upload response."""

from pydantic import BaseModel, ConfigDict, Field


class ImageUploadResponse(BaseModel):
    """Response model for successful image upload."""

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl", description="Hosted image URL")
