"""Canned OpenAPI response objects for the standard response envelope."""

import copy
from typing import Any, Dict


def _envelope(description: str, success: bool, message: str, **extra_properties) -> Dict[str, Any]:
    properties = {
        "success": {"type": "boolean", "example": success},
        "message": {"type": "string", "example": message},
    }
    properties.update(extra_properties)
    return {
        "description": description,
        "content": {
            "application/json": {
                "schema": {"type": "object", "properties": properties},
            },
        },
    }


_COMMON_RESPONSES = {
    "Success": _envelope(
        "Success", True, "Operation successful",
        data={"type": "object"},
    ),
    "ValidationError": _envelope(
        "Validation Error", False, "Validation failed",
        errors={
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "field": {"type": "string"},
                    "message": {"type": "string"},
                },
            },
        },
    ),
    "Unauthorized": _envelope("Unauthorized - Invalid or missing token", False, "Unauthorized"),
    "Forbidden": _envelope("Forbidden - Insufficient permissions", False, "Forbidden"),
    "NotFound": _envelope("Resource not found", False, "Resource not found"),
    "InternalError": _envelope("Internal server error", False, "Internal server error"),
}


def get_common_responses() -> Dict[str, Dict[str, Any]]:
    """Return a fresh copy of the six common responses; callers may mutate it."""
    return copy.deepcopy(_COMMON_RESPONSES)
