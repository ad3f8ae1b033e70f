import pytest

from stagehand.types.agent import (
    AgentAction,
    AgentResult,
    AgentUsage,
    ClickAction,
    DoubleClickAction,
    DragAction,
    FunctionAction,
    FunctionArguments,
    KeyPressAction,
    Point,
    ScreenshotAction,
    TypeAction,
    WaitAction,
    dump_action_payload,
    parse_action_payload,
)


def test_deserialize_double_click_alias():
    payload = parse_action_payload({"type": "doubleClick", "x": 10, "y": 20})
    assert isinstance(payload, DoubleClickAction)
    assert payload.x == 10
    assert payload.y == 20


def test_serialize_agent_action():
    action = ClickAction(x=1, y=2, button="left")
    assert dump_action_payload(action) == {
        "type": "click",
        "x": 1,
        "y": 2,
        "button": "left",
    }


def test_double_click_dumps_canonical_tag():
    assert dump_action_payload(DoubleClickAction(x=3, y=4))["type"] == "double_click"


@pytest.mark.parametrize(
    "action",
    [
        ClickAction(x=5, y=6),
        TypeAction(text="hello", press_enter_after=True),
        KeyPressAction(keys=["Control", "a"]),
        DragAction(path=[Point(x=0, y=0), Point(x=10, y=12)]),
        WaitAction(miliseconds=250),
        WaitAction(),
        ScreenshotAction(),
        FunctionAction(name="goto", arguments=FunctionArguments(url="https://example.com")),
        FunctionAction(name="back"),
    ],
)
def test_action_round_trip(action):
    assert parse_action_payload(dump_action_payload(action)) == action


def test_optional_fields_are_omitted():
    assert dump_action_payload(ClickAction(x=1, y=2)) == {"type": "click", "x": 1, "y": 2}


def test_unknown_action_type_raises():
    with pytest.raises(ValueError):
        parse_action_payload({"type": "teleport", "x": 1})


def test_missing_required_field_raises():
    with pytest.raises(ValueError):
        parse_action_payload({"type": "click", "x": 1})


def test_dump_rejects_non_action():
    with pytest.raises(TypeError):
        dump_action_payload(Point(x=1, y=2))


def test_agent_action_round_trip():
    action = AgentAction(
        action_type="click",
        action=ClickAction(x=1, y=2),
        reasoning="press the button",
    )
    dumped = action.to_dict()
    assert dumped["action"] == {"type": "click", "x": 1, "y": 2}
    assert "status" not in dumped
    assert AgentAction.from_dict(dumped) == action


def test_agent_result_round_trip():
    result = AgentResult(
        actions=[ClickAction(x=1, y=2), ScreenshotAction()],
        completed=True,
        message="done",
        usage=AgentUsage(input_tokens=10, output_tokens=5, inference_time_ms=300),
    )
    assert AgentResult.from_dict(result.to_dict()) == result


def test_agent_result_requires_completed():
    with pytest.raises(ValueError):
        AgentResult.from_dict({"actions": []})