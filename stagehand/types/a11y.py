"""Accessibility tree data models exchanged with the browser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeVar

_T = TypeVar("_T")


def _require(data: dict, key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ValueError(f"missing field '{key}'")
    return value


def _optional(data: dict, key: str, convert: Callable[[Any], _T]) -> Optional[_T]:
    value = data.get(key)
    return None if value is None else convert(value)


def _prune(pairs: Iterable[tuple[str, Any]]) -> dict:
    return {key: value for key, value in pairs if value is not None}


@dataclass
class AxProperty:
    """A named accessibility property with an arbitrary JSON value."""

    name: str
    value: Any = None

    def to_dict(self) -> dict:
        return _prune([("name", self.name), ("value", self.value)])

    @classmethod
    def from_dict(cls, data: dict) -> "AxProperty":
        return cls(name=_require(data, "name"), value=data.get("value"))


@dataclass
class AxValue:
    """An accessibility value together with its primitive type name."""

    value_type: str
    value: Any = None

    def to_dict(self) -> dict:
        return _prune([("type", self.value_type), ("value", self.value)])

    @classmethod
    def from_dict(cls, data: dict) -> "AxValue":
        return cls(value_type=_require(data, "type"), value=data.get("value"))


@dataclass
class AxNode:
    """Raw accessibility node as reported by the DevTools protocol."""

    node_id: str
    role: Optional[AxValue] = None
    name: Optional[AxValue] = None
    description: Optional[AxValue] = None
    value: Optional[AxValue] = None
    backend_dom_node_id: Optional[int] = None
    parent_id: Optional[str] = None
    child_ids: Optional[list[str]] = None
    properties: Optional[list[AxProperty]] = None

    def to_dict(self) -> dict:
        def dump(ax: Optional[AxValue]) -> Optional[dict]:
            return None if ax is None else ax.to_dict()

        return _prune(
            [
                ("nodeId", self.node_id),
                ("role", dump(self.role)),
                ("name", dump(self.name)),
                ("description", dump(self.description)),
                ("value", dump(self.value)),
                ("backendDOMNodeId", self.backend_dom_node_id),
                ("parentId", self.parent_id),
                ("childIds", None if self.child_ids is None else list(self.child_ids)),
                (
                    "properties",
                    None
                    if self.properties is None
                    else [prop.to_dict() for prop in self.properties],
                ),
            ]
        )

    @classmethod
    def from_dict(cls, data: dict) -> "AxNode":
        return cls(
            node_id=_require(data, "nodeId"),
            role=_optional(data, "role", AxValue.from_dict),
            name=_optional(data, "name", AxValue.from_dict),
            description=_optional(data, "description", AxValue.from_dict),
            value=_optional(data, "value", AxValue.from_dict),
            backend_dom_node_id=data.get("backendDOMNodeId"),
            parent_id=data.get("parentId"),
            child_ids=_optional(data, "childIds", list),
            properties=_optional(
                data, "properties", lambda items: [AxProperty.from_dict(p) for p in items]
            ),
        )


@dataclass
class AccessibilityNode:
    """Simplified accessibility node used when building the page outline."""

    node_id: Optional[str] = None
    role: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    value: Optional[str] = None
    backend_dom_node_id: Optional[int] = None
    parent_id: Optional[str] = None
    child_ids: Optional[list[str]] = None
    children: Optional[list["AccessibilityNode"]] = None
    properties: Optional[list[AxProperty]] = None

    def to_dict(self) -> dict:
        return _prune(
            [
                ("nodeId", self.node_id),
                ("role", self.role),
                ("name", self.name),
                ("description", self.description),
                ("value", self.value),
                ("backendDOMNodeId", self.backend_dom_node_id),
                ("parentId", self.parent_id),
                ("childIds", None if self.child_ids is None else list(self.child_ids)),
                (
                    "children",
                    None
                    if self.children is None
                    else [child.to_dict() for child in self.children],
                ),
                (
                    "properties",
                    None
                    if self.properties is None
                    else [prop.to_dict() for prop in self.properties],
                ),
            ]
        )

    @classmethod
    def from_dict(cls, data: dict) -> "AccessibilityNode":
        return cls(
            node_id=data.get("nodeId"),
            role=data.get("role"),
            name=data.get("name"),
            description=data.get("description"),
            value=data.get("value"),
            backend_dom_node_id=data.get("backendDOMNodeId"),
            parent_id=data.get("parentId"),
            child_ids=_optional(data, "childIds", list),
            children=_optional(
                data, "children", lambda items: [cls.from_dict(c) for c in items]
            ),
            properties=_optional(
                data, "properties", lambda items: [AxProperty.from_dict(p) for p in items]
            ),
        )


@dataclass
class TreeResult:
    """Accessibility tree, its text outline, iframes and link targets."""

    tree: list[AccessibilityNode]
    simplified: str
    iframes: list[AccessibilityNode]
    id_to_url: dict[str, str]

    def to_dict(self) -> dict:
        return {
            "tree": [node.to_dict() for node in self.tree],
            "simplified": self.simplified,
            "iframes": [node.to_dict() for node in self.iframes],
            "idToUrl": dict(self.id_to_url),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TreeResult":
        return cls(
            tree=[AccessibilityNode.from_dict(n) for n in _require(data, "tree")],
            simplified=_require(data, "simplified"),
            iframes=[AccessibilityNode.from_dict(n) for n in _require(data, "iframes")],
            id_to_url=dict(_require(data, "idToUrl")),
        )


class PlaywrightCommandError(Exception):
    """Raised when a browser command fails."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Playwright command failed: {detail}")
        self.detail = detail


class PlaywrightMethodNotSupportedError(Exception):
    """Raised when a requested browser method is not supported."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Playwright method not supported: {detail}")
        self.detail = detail