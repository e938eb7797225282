"""Pydantic models for delete food request/response."""

from pydantic import BaseModel, ConfigDict, Field


class DeleteFoodRequest(BaseModel):
    """Validation model for delete food request."""

    model_config = ConfigDict(str_strip_whitespace=True)
    food_id: str = Field(
        ...,
        min_length=1,
        description="Food ID to delete",
    )


class DeleteFoodResponse(BaseModel):
    """Response model for successful food deletion."""

    message: str = Field(..., description="Success message")
