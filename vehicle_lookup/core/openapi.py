"""OpenAPI tag metadata, kept out of the app factory."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA: list[dict[str, str]] = [
    {
        "name": "Lookup",
        "description": (
            "Vehicle lookup by VIN (decoded via NHTSA vPIC) or by license plate "
            "and state. Rate limited per client IP."
        ),
    },
    {
        "name": "Health",
        "description": "Liveness checks.",
    },
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tag descriptions and the
    shared error response schema."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        components = schema.setdefault("components", {})
        components.setdefault("schemas", {}).setdefault(
            "ErrorResponse",
            {
                "type": "object",
                "properties": {"error": {"type": "string"}},
                "required": ["error"],
            },
        )

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
