"""Shared catalog item models."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr


class FoodFields(BaseModel):
    """Caller-editable catalog fields, already normalized by the request layer."""

    model_config = ConfigDict(populate_by_name=True)

    name: StrictStr = Field(..., min_length=1)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    tags: list[StrictStr] = Field(default_factory=list)
    origins: list[StrictStr] = Field(..., min_length=1)
    cook_time: StrictStr = Field(..., min_length=1, alias="cookTime")


class FoodItem(BaseModel):
    """Catalog item as stored in DynamoDB and returned by the Food API.

    Attribute names are snake_case in storage; the HTTP representation uses
    the camelCase aliases (``model_dump(by_alias=True)``).
    """

    model_config = ConfigDict(populate_by_name=True)

    food_id: StrictStr = Field(..., alias="id", description="Unique food identifier")
    name: StrictStr = Field(..., min_length=1, description="Display name")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Unit price")

    tags: list[StrictStr] = Field(default_factory=list, description="Unordered tags")
    origins: list[StrictStr] = Field(..., min_length=1, description="Ordered origins")
    cook_time: StrictStr = Field(..., alias="cookTime", description="Cook time label")

    image_url: StrictStr | None = Field(None, alias="imageUrl", description="Hosted image URL")
    favorite: StrictBool = Field(False, description="Favorite flag")

    created_at: StrictStr = Field(..., alias="createdAt", description="ISO-8601 creation timestamp (UTC)")

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "FoodItem":
        """Build a model from a raw DynamoDB item (prices come back as Decimal)."""
        data = dict(item)
        if isinstance(data.get("price"), Decimal):
            data["price"] = float(data["price"])
        return cls.model_validate(data)

    def to_item(self) -> dict[str, Any]:
        """Return the DynamoDB item for this model."""
        item = self.model_dump()
        item["price"] = Decimal(str(self.price))
        return item

    def to_response(self) -> dict[str, Any]:
        """Return the JSON-ready API representation."""
        return self.model_dump(by_alias=True)


class TagCount(BaseModel):
    """Number of catalog items carrying a tag."""

    name: StrictStr = Field(..., description="Tag name")
    count: StrictInt = Field(..., ge=0, description="Number of items with this tag")
