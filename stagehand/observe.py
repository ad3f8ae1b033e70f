"""Helpers for observation: response formats, parsing and self-healing."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Sequence

from stagehand.types.page import ObserveElementSchema, ObserveResult

log = logging.getLogger(__name__)

_OBSERVE_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "elements": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "element_id": {"type": "integer"},
                    "description": {"type": "string"},
                    "method": {"type": "string"},
                    "arguments": {
                        "type": "array",
                        "items": {"type": "string"},
                    },
                },
                "required": ["element_id", "description", "method", "arguments"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["elements"],
    "additionalProperties": False,
}


def _json_schema_format(name: str, schema: Any) -> dict:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": name,
            "schema": json.loads(json.dumps(schema)),
            "strict": False,
        },
    }


def observe_response_format() -> dict:
    """Response format asking the model for a list of observed elements."""
    return _json_schema_format("observe_inference", _OBSERVE_SCHEMA)


def build_extract_response_format(schema: Any) -> Optional[dict]:
    """Wrap an extraction schema as a response format, or None without one."""
    if schema is None:
        return None
    return _json_schema_format("extraction_schema", schema)


def _parse_element_list(items: Any) -> list[ObserveElementSchema]:
    if not isinstance(items, list):
        raise ValueError("expected a list of elements")
    return [ObserveElementSchema.from_dict(item) for item in items]


def parse_observe_elements(content: str) -> list[ObserveElementSchema]:
    """Read observed elements from a model reply.

    The reply may be a bare list of elements or an object holding them under
    ``elements``. Anything unreadable yields an empty list.
    """
    try:
        value = json.loads(content)
    except (json.JSONDecodeError, TypeError) as err:
        log.error("Failed to parse observe response: %s", err)
        return []

    try:
        return _parse_element_list(value)
    except ValueError:
        pass

    if isinstance(value, dict) and "elements" in value:
        try:
            return _parse_element_list(value["elements"])
        except ValueError:
            return []
    return []


def substitute_variables(
    args: Sequence[str], variables: Mapping[str, str]
) -> list[str]:
    """Replace every ``%name%`` token in each argument with its value."""
    result = []
    for arg in args:
        for key, value in variables.items():
            arg = arg.replace(f"%{key}%", value)
        result.append(arg)
    return result


def _ascii_lower(text: str) -> str:
    return "".join(ch.lower() if "A" <= ch <= "Z" else ch for ch in text)


def build_self_heal_command(result: ObserveResult) -> Optional[str]:
    """Build a fallback action command from an observed element."""
    method = (result.method or "").strip()
    description = result.description.strip()

    if not method and not description:
        return None

    if method and description and _ascii_lower(description).startswith(
        _ascii_lower(method)
    ):
        return description

    if method:
        combined = f"{method} {description}".strip()
        if combined:
            return combined

    return description or None