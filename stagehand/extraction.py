"""Post-processing of extraction results: link targets, key names and schemas."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from stagehand.types.page import DefaultExtractSchema

log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _as_node_id(value: Any) -> Optional[str]:
    """Return the canonical id text for an integer-like value, if it is one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _INTEGER.fullmatch(text):
            return None
        number = int(text)
    else:
        return None
    if not _I64_MIN <= number <= _I64_MAX:
        return None
    return str(number)


def inject_urls(value: Any, id_to_url: Mapping[str, str]) -> Any:
    """Replace node ids with link targets under every key mentioning ``url``.

    Dictionaries and lists are changed in place; the value is also returned.
    """
    if isinstance(value, dict):
        for key in value:
            if "url" in key.lower():
                node_id = _as_node_id(value[key])
                if node_id is not None and node_id in id_to_url:
                    value[key] = id_to_url[node_id]
            inject_urls(value[key], id_to_url)
    elif isinstance(value, list):
        for item in value:
            inject_urls(item, id_to_url)
    return value


def validate_against_schema(schema: Any, data: Any) -> None:
    """Check ``data`` against a JSON schema.

    Raises ValueError with every problem found, joined by ``"; "``, or with the
    reason the schema itself is unusable.
    """
    try:
        validator_cls = validator_for(schema, default=Draft7Validator)
        validator_cls.check_schema(schema)
    except SchemaError as err:
        raise ValueError(err.message) from err
    except Exception as err:  # malformed schema values such as non-objects
        raise ValueError(str(err)) from err

    problems = [error.message for error in validator_cls(schema).iter_errors(data)]
    if problems:
        raise ValueError("; ".join(problems))


def camel_to_snake_case(text: str) -> str:
    """Turn a camelCase or kebab-case name into snake_case."""
    result: list[str] = []
    prev: Optional[str] = None

    def ends_with_underscore() -> bool:
        return bool(result) and result[-1] == "_"

    for position, ch in enumerate(text):
        if "A" <= ch <= "Z":
            following = text[position + 1] if position + 1 < len(text) else ""
            next_is_lower = "a" <= following <= "z" if following else False
            prev_is_lower_or_digit = prev is not None and (
                "a" <= prev <= "z" or "0" <= prev <= "9"
            )
            if result and (prev_is_lower_or_digit or next_is_lower):
                if not ends_with_underscore():
                    result.append("_")
            result.append(ch.lower())
        elif ch == "-":
            if not ends_with_underscore():
                result.append("_")
        else:
            result.append(ch)
        prev = ch

    return "".join(result)


def convert_keys_to_snake_case(value: Any) -> Any:
    """Return a copy of ``value`` with every object key in snake_case."""
    if isinstance(value, dict):
        return {
            camel_to_snake_case(key): convert_keys_to_snake_case(val)
            for key, val in value.items()
        }
    if isinstance(value, list):
        return [convert_keys_to_snake_case(item) for item in value]
    return value


def coerce_extract_data(
    data: Any, schema: Any, logger: Optional[logging.Logger] = None
) -> Any:
    """Fit extracted data to the requested schema where possible.

    With a schema, data that fails validation is retried with snake_case keys;
    if that fails too, the raw data is returned. Without a schema, data that
    matches the default extraction shape is reduced to that shape.
    """
    logger = logger or log

    if schema is None:
        try:
            return DefaultExtractSchema.from_dict(data).to_dict()
        except ValueError:
            return data

    try:
        validate_against_schema(schema, data)
        return data
    except ValueError as first_error:
        logger.debug("Schema validation failed for extract data: %s", first_error)
        normalized = convert_keys_to_snake_case(data)
        try:
            validate_against_schema(schema, normalized)
        except ValueError as second_error:
            logger.error(
                "Failed to validate extract data against schema: %s. "
                "Normalization retry also failed: %s. Returning raw data.",
                first_error,
                second_error,
            )
            return data
        logger.debug("Schema validation succeeded after camelCase normalization")
        return normalized