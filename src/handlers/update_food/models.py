"""Pydantic models for update food request."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.food import FoodFields
from core.utils.constants import FOOD_ID_PATTERN, MAX_TAGS, NAME_MAX_LENGTH, TAG_MAX_LENGTH
from core.utils.validators import normalize_string_list


class UpdateFoodRequest(BaseModel):
    """Validation model for a full replacement of a food item.

    ``favorite`` keeps its stored value when omitted. ``imageUrl`` is used
    only when no new image file is sent with the request.
    """

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    food_id: str = Field(..., alias="id", pattern=FOOD_ID_PATTERN, description="Food ID to update")
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    tags: list[str] = Field(default_factory=list)
    origins: list[str] = Field(..., min_length=1)
    cook_time: str = Field(..., min_length=1, alias="cookTime")
    favorite: bool | None = Field(None, description="Favorite flag")
    image_url: str | None = Field(None, alias="imageUrl", description="Existing hosted image URL")

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, value: Any) -> list[str]:
        tags = normalize_string_list(value, field_name="tags") or []

        if len(tags) > MAX_TAGS:
            raise ValueError(f"Maximum {MAX_TAGS} tags allowed")

        if any(len(tag) > TAG_MAX_LENGTH for tag in tags):
            raise ValueError(f"Tags must be at most {TAG_MAX_LENGTH} characters")

        return tags

    @field_validator("origins", mode="before")
    @classmethod
    def validate_origins(cls, value: Any) -> list[str] | None:
        return normalize_string_list(value, field_name="origins", dedupe=False)

    @field_validator("image_url")
    @classmethod
    def blank_image_url_is_absent(cls, value: str | None) -> str | None:
        return value or None

    def to_fields(self) -> FoodFields:
        return FoodFields(
            name=self.name,
            price=self.price,
            tags=self.tags,
            origins=self.origins,
            cook_time=self.cook_time,
        )
