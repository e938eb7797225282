"""Unit tests for create food request validation."""

import pytest
from pydantic import ValidationError

from handlers.create_food.models import CreateFoodRequest


def form(**overrides):
    data = {
        "name": "  Taco ",
        "price": "4.5",
        "tags": "",
        "origins": "Mexico",
        "cookTime": "10-20",
    }
    data.update(overrides)
    return data


class TestCreateFoodRequest:
    def test_form_strings_are_normalized(self) -> None:
        request = CreateFoodRequest.model_validate(form())

        assert request.name == "Taco"
        assert request.price == 4.5
        assert request.tags == []
        assert request.origins == ["Mexico"]
        assert request.cook_time == "10-20"

    def test_comma_separated_and_repeated_values(self) -> None:
        request = CreateFoodRequest.model_validate(
            form(tags=["spicy, hot", "spicy"], origins="Mexico, US,,")
        )

        assert request.tags == ["spicy", "hot"]
        assert request.origins == ["Mexico", "US"]

    def test_repeated_origins_are_kept(self) -> None:
        request = CreateFoodRequest.model_validate(form(origins=["Mexico", "US", "Mexico"], tags="a, a"))

        assert request.origins == ["Mexico", "US", "Mexico"]
        assert request.tags == ["a"]

    def test_tags_may_be_omitted(self) -> None:
        data = form()
        del data["tags"]

        assert CreateFoodRequest.model_validate(data).tags == []

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "   "},
            {"price": "0"},
            {"price": "free"},
            {"price": "inf"},
            {"price": "1e400"},
            {"price": "nan"},
            {"origins": ""},
            {"cookTime": ""},
            {"tags": ",".join(f"t{i}" for i in range(21))},
            {"tags": "x" * 51},
            {"tags": 5},
        ],
    )
    def test_invalid_values_rejected(self, overrides) -> None:
        with pytest.raises(ValidationError):
            CreateFoodRequest.model_validate(form(**overrides))

    def test_to_fields(self) -> None:
        fields = CreateFoodRequest.model_validate(form(tags="a")).to_fields()

        assert fields.name == "Taco"
        assert fields.tags == ["a"]
        assert fields.cook_time == "10-20"
