#!/usr/bin/env python3
"""
Seed script to populate the food catalog via API endpoints.

Run:
    python seed/seed_foods.py \
      --api-id <API-ID> \
      --admin-token <TOKEN>
"""

import argparse
import base64
import json
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")


FOODS_API_URL = "http://localhost:4566/restapis/{0}/snd/_user_request_/api/foods"

# 1x1 PNG used when a sample image file is not present
PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed foods via Food Catalog API")

    parser.add_argument(
        "--api-id",
        required=True,
        help="Base API ID (e.g. LocalStack API Gateway ID)",
    )
    parser.add_argument(
        "--admin-token",
        default=None,
        help="Bearer token accepted by the admin authorizer",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=5,
        help="Number of foods to seed",
    )

    return parser.parse_args()


def load_sample_data() -> dict[str, Any]:
    data_file = Path(__file__).parent / "data" / "foods.json"
    with open(data_file, encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


def read_image(name: str) -> bytes:
    image_path = Path(__file__).parent / "images" / name

    if not image_path.exists():
        logger.warning("Image file not found, using placeholder", extra={"path": str(image_path)})
        return PLACEHOLDER_PNG

    return image_path.read_bytes()


def seed_foods() -> None:
    try:
        args = parse_args()
        data = load_sample_data()

        headers: dict[str, str] = {}
        if args.admin_token:
            headers["Authorization"] = f"Bearer {args.admin_token}"

        foods_url = FOODS_API_URL.format(args.api_id)

        logger.info(
            "Starting seeding process",
            extra={"api_base_url": foods_url},
        )

        for item in cast(list[dict[str, Any]], data.get("foods", []))[: args.limit]:
            form = {
                "name": item["name"],
                "price": str(item["price"]),
                "tags": ",".join(item.get("tags", [])),
                "origins": ",".join(item["origins"]),
                "cookTime": item["cookTime"],
            }
            files = {"image": (item["image"], read_image(item["image"]), "image/png")}

            response = requests.post(
                foods_url,
                headers=headers,
                data=form,
                files=files,
                timeout=30,
            )

            response_json = cast(dict[str, Any], response.json())

            if response.status_code == 201:
                logger.info(
                    "Seeded food",
                    extra={"food_name": item["name"], "food_id": response_json.get("id")},
                )
            else:
                logger.error(
                    "Failed to seed food",
                    extra={
                        "food_name": item["name"],
                        "status": response.status_code,
                        "response": response_json,
                    },
                )

        logger.info("Seeding completed")

        tags_response = requests.get(f"{foods_url}/tags", headers=headers, timeout=30)

        logger.info(
            "Tags response",
            extra={
                "status": tags_response.status_code,
                "response": tags_response.json() if tags_response.ok else tags_response.text,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_foods()
