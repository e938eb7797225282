"""Pydantic models for create food request."""

from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.food import FoodFields
from core.utils.constants import MAX_TAGS, NAME_MAX_LENGTH, TAG_MAX_LENGTH
from core.utils.validators import normalize_string_list

logger = Logger(UTC=True)


class CreateFoodRequest(BaseModel):
    """Validation model for create food form fields.

    Form values arrive as strings; ``tags`` and ``origins`` may be a
    comma-separated string or a list and are normalized to ``list[str]``.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH, description="Display name")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Unit price")
    tags: list[str] = Field(default_factory=list, description="Tags (max 20)")
    origins: list[str] = Field(..., min_length=1, description="Origins, in order")
    cook_time: str = Field(..., min_length=1, alias="cookTime", description="Cook time label")

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value: Any) -> list[str]:
        tags = normalize_string_list(value, field_name="tags") or []

        if len(tags) > MAX_TAGS:
            logger.error(f"Tag validation error: Maximum {MAX_TAGS} tags allowed")
            raise ValueError(f"Maximum {MAX_TAGS} tags allowed")

        if any(len(tag) > TAG_MAX_LENGTH for tag in tags):
            raise ValueError(f"Tags must be at most {TAG_MAX_LENGTH} characters")

        return tags

    @field_validator("origins", mode="before")
    @classmethod
    def validate_origins(cls, value: Any) -> list[str] | None:
        return normalize_string_list(value, field_name="origins", dedupe=False)

    def to_fields(self) -> FoodFields:
        return FoodFields(
            name=self.name,
            price=self.price,
            tags=self.tags,
            origins=self.origins,
            cook_time=self.cook_time,
        )
