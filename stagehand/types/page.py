"""Options and results of the act, observe and extract commands."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _dump_camel(obj: Any) -> dict:
    result = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is not None:
            result[_camel(f.name)] = value
    return result


def _expect_dict(data: Any, owner: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object for {owner}")
    return data


def _expect_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


@dataclass
class DefaultExtractSchema:
    extraction: str

    @classmethod
    def from_dict(cls, data: Any) -> "DefaultExtractSchema":
        data = _expect_dict(data, cls.__name__)
        return cls(extraction=_expect_str(data, "extraction"))

    def to_dict(self) -> dict:
        return {"extraction": self.extraction}


@dataclass
class EmptyExtractSchema:
    page_text: str


@dataclass
class ObserveElementSchema:
    """Element reported by the model during observation."""

    element_id: int
    description: str
    method: str
    arguments: list[str]

    @classmethod
    def from_dict(cls, data: Any) -> "ObserveElementSchema":
        data = _expect_dict(data, cls.__name__)
        element_id = data.get("element_id")
        if isinstance(element_id, bool) or not isinstance(element_id, int):
            raise ValueError("field 'element_id' must be an integer")
        arguments = data.get("arguments")
        if not isinstance(arguments, list) or not all(isinstance(a, str) for a in arguments):
            raise ValueError("field 'arguments' must be a list of strings")
        return cls(
            element_id=element_id,
            description=_expect_str(data, "description"),
            method=_expect_str(data, "method"),
            arguments=list(arguments),
        )

    def to_dict(self) -> dict:
        return {
            "element_id": self.element_id,
            "description": self.description,
            "method": self.method,
            "arguments": list(self.arguments),
        }


@dataclass
class ObserveInferenceSchema:
    elements: list[ObserveElementSchema]


@dataclass
class MetadataSchema:
    completed: bool
    progress: str


@dataclass
class ActOptions:
    action: str
    variables: Optional[dict[str, str]] = None
    model_name: Optional[str] = None
    dom_settle_timeout_ms: Optional[int] = None
    timeout_ms: Optional[int] = None
    model_client_options: Any = None

    def to_dict(self) -> dict:
        return _dump_camel(self)


@dataclass
class ActResult:
    success: bool
    message: str
    action: str

    def to_dict(self) -> dict:
        return _dump_camel(self)


@dataclass
class ObserveOptions:
    instruction: str
    model_name: Optional[str] = None
    draw_overlay: Optional[bool] = None
    dom_settle_timeout_ms: Optional[int] = None
    model_client_options: Any = None

    def to_dict(self) -> dict:
        return _dump_camel(self)


@dataclass
class ObserveResult:
    """Element located by observation, addressed by selector."""

    selector: str
    description: str
    backend_node_id: Optional[int] = None
    method: Optional[str] = None
    arguments: Optional[list[str]] = None

    def to_dict(self) -> dict:
        return _dump_camel(self)

    @classmethod
    def from_dict(cls, data: Any) -> "ObserveResult":
        data = _expect_dict(data, cls.__name__)
        arguments = data.get("arguments")
        return cls(
            selector=_expect_str(data, "selector"),
            description=_expect_str(data, "description"),
            backend_node_id=data.get("backendNodeId"),
            method=data.get("method"),
            arguments=None if arguments is None else list(arguments),
        )


@dataclass
class ExtractOptions:
    instruction: str
    model_name: Optional[str] = None
    selector: Optional[str] = None
    schema_definition: Any = None
    use_text_extract: Optional[bool] = None
    dom_settle_timeout_ms: Optional[int] = None
    model_client_options: Any = None

    def to_dict(self) -> dict:
        return _dump_camel(self)


@dataclass
class ExtractResult:
    data: Any = None

    def to_dict(self) -> dict:
        return _dump_camel(self)


@dataclass
class NavigateOptions:
    referer: Optional[str] = None
    timeout: Optional[int] = None
    wait_until: Optional[str] = None

    def to_dict(self) -> dict:
        return _dump_camel(self)