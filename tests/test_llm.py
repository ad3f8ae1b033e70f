import pytest

from stagehand.types.llm import (
    ChatMessage,
    ChatMessageImageContent,
    ChatMessageImageUrl,
    ChatMessageSource,
    ChatMessageTextContent,
    ChatRole,
    dump_content,
    parse_content,
)


def test_serialize_text_message():
    msg = ChatMessage(role=ChatRole.USER, content="Hello")
    assert msg.to_dict() == {"role": "user", "content": "Hello"}


def test_deserialize_multimodal_message():
    raw = {
        "role": "assistant",
        "content": [
            {"type": "text", "text": "Here is an image"},
            {"type": "image_url", "image_url": {"url": "https://example.com/img.png"}},
        ],
    }
    message = ChatMessage.from_dict(raw)
    assert message.role is ChatRole.ASSISTANT
    assert isinstance(message.content, list)
    assert len(message.content) == 2
    assert message.content[0] == ChatMessageTextContent(text="Here is an image")
    assert message.content[1].image_url == ChatMessageImageUrl(
        url="https://example.com/img.png"
    )
    assert message.to_dict() == raw


def test_image_source_round_trip():
    content = [
        ChatMessageImageContent(
            source=ChatMessageSource(source_type="base64", media_type="image/png", data="AAAA")
        )
    ]
    dumped = dump_content(content)
    assert dumped[0]["source"]["type"] == "base64"
    assert parse_content(dumped) == content


def test_invalid_role_raises():
    with pytest.raises(ValueError):
        ChatMessage.from_dict({"role": "robot", "content": "hi"})


def test_unknown_part_type_raises():
    with pytest.raises(ValueError):
        parse_content([{"type": "audio", "data": "x"}])


def test_content_of_wrong_shape_raises():
    with pytest.raises(ValueError):
        parse_content(42)