"""Chat messages and their content parts for model requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ChatMessageTextContent:
    text: str


@dataclass
class ChatMessageImageUrl:
    url: str


@dataclass
class ChatMessageSource:
    source_type: str
    media_type: str
    data: str


@dataclass
class ChatMessageImageContent:
    image_url: Optional[ChatMessageImageUrl] = None
    text: Optional[str] = None
    source: Optional[ChatMessageSource] = None


ContentPart = Union[ChatMessageTextContent, ChatMessageImageContent]
ChatMessageContent = Union[str, list[ContentPart]]


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


def _parse_part(data: Any) -> ContentPart:
    if not isinstance(data, dict):
        raise ValueError("content part must be an object")
    kind = data.get("type")
    if kind == "text":
        return ChatMessageTextContent(text=_require_str(data, "text"))
    if kind == "image_url":
        image_url = data.get("image_url")
        source = data.get("source")
        return ChatMessageImageContent(
            image_url=None
            if image_url is None
            else ChatMessageImageUrl(url=_require_str(image_url, "url")),
            text=data.get("text"),
            source=None
            if source is None
            else ChatMessageSource(
                source_type=_require_str(source, "type"),
                media_type=_require_str(source, "media_type"),
                data=_require_str(source, "data"),
            ),
        )
    raise ValueError(f"unknown content part type: {kind!r}")


def _dump_part(part: ContentPart) -> dict:
    if isinstance(part, ChatMessageTextContent):
        return {"type": "text", "text": part.text}
    if isinstance(part, ChatMessageImageContent):
        body: dict[str, Any] = {"type": "image_url"}
        if part.image_url is not None:
            body["image_url"] = {"url": part.image_url.url}
        if part.text is not None:
            body["text"] = part.text
        if part.source is not None:
            body["source"] = {
                "type": part.source.source_type,
                "media_type": part.source.media_type,
                "data": part.source.data,
            }
        return body
    raise TypeError(f"not a content part: {type(part).__name__}")


def parse_content(data: Any) -> ChatMessageContent:
    """Read message content: either plain text or a list of parts."""
    if isinstance(data, str):
        return data
    if isinstance(data, list):
        return [_parse_part(part) for part in data]
    raise ValueError("content must be a string or a list of parts")


def dump_content(content: ChatMessageContent) -> Union[str, list[dict]]:
    """Render message content in its JSON form."""
    if isinstance(content, str):
        return content
    return [_dump_part(part) for part in content]


@dataclass
class ChatMessage:
    role: ChatRole
    content: ChatMessageContent

    def to_dict(self) -> dict:
        return {"role": ChatRole(self.role).value, "content": dump_content(self.content)}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        if "content" not in data:
            raise ValueError("missing field 'content'")
        return cls(role=ChatRole(data.get("role")), content=parse_content(data["content"]))