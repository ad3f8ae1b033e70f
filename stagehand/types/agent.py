"""Agent configuration, actions and results."""

from __future__ import annotations

from dataclasses import MISSING, asdict, dataclass, fields
from typing import Any, Optional, Union


def _require(data: dict, key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ValueError(f"missing field '{key}'")
    return value


def _build(cls, data: Any):
    if not isinstance(data, dict):
        raise ValueError(f"expected an object for {cls.__name__}")
    kwargs = {}
    for f in fields(cls):
        value = data.get(f.name)
        if value is None:
            if f.default is MISSING and f.default_factory is MISSING:
                raise ValueError(f"missing field '{f.name}'")
            continue
        kwargs[f.name] = value
    return cls(**kwargs)


def _prune(data: dict) -> dict:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class AgentConfig:
    model: Optional[str] = None
    instructions: Optional[str] = None
    options: Optional[dict[str, Any]] = None
    max_steps: Optional[int] = None


@dataclass
class ClickAction:
    x: int
    y: int
    button: Optional[str] = None


@dataclass
class DoubleClickAction:
    x: int
    y: int


@dataclass
class TypeAction:
    text: str
    x: Optional[int] = None
    y: Optional[int] = None
    press_enter_after: Optional[bool] = None


@dataclass
class KeyPressAction:
    keys: list[str]


@dataclass
class ScrollAction:
    x: int
    y: int
    scroll_x: Optional[int] = None
    scroll_y: Optional[int] = None


@dataclass
class Point:
    x: int
    y: int


@dataclass
class DragAction:
    path: list[Point]


@dataclass
class MoveAction:
    x: int
    y: int


@dataclass
class WaitAction:
    miliseconds: Optional[int] = None


@dataclass
class ScreenshotAction:
    pass


@dataclass
class FunctionArguments:
    url: str


@dataclass
class FunctionAction:
    name: str
    arguments: Optional[FunctionArguments] = None


@dataclass
class KeyAction:
    text: str


ActionPayload = Union[
    ClickAction,
    DoubleClickAction,
    TypeAction,
    KeyPressAction,
    ScrollAction,
    DragAction,
    MoveAction,
    WaitAction,
    ScreenshotAction,
    FunctionAction,
    KeyAction,
]

_TAGS: dict[str, type] = {
    "click": ClickAction,
    "double_click": DoubleClickAction,
    "type": TypeAction,
    "keypress": KeyPressAction,
    "scroll": ScrollAction,
    "drag": DragAction,
    "move": MoveAction,
    "wait": WaitAction,
    "screenshot": ScreenshotAction,
    "function": FunctionAction,
    "key": KeyAction,
}
_ALIASES = {"doubleClick": "double_click"}
_TAG_OF = {cls: tag for tag, cls in _TAGS.items()}


def parse_action_payload(data: dict) -> ActionPayload:
    """Build an action from its tagged JSON form."""
    if not isinstance(data, dict):
        raise ValueError("action payload must be an object")
    tag = data.get("type")
    tag = _ALIASES.get(tag, tag)
    cls = _TAGS.get(tag)
    if cls is None:
        raise ValueError(f"unknown action type: {data.get('type')!r}")
    if cls is DragAction:
        return DragAction(path=[_build(Point, p) for p in _require(data, "path")])
    if cls is FunctionAction:
        arguments = data.get("arguments")
        return FunctionAction(
            name=_require(data, "name"),
            arguments=None if arguments is None else _build(FunctionArguments, arguments),
        )
    return _build(cls, data)


def dump_action_payload(action: ActionPayload) -> dict:
    """Render an action in its tagged JSON form."""
    tag = _TAG_OF.get(type(action))
    if tag is None:
        raise TypeError(f"not an agent action: {type(action).__name__}")
    return {"type": tag, **_prune(asdict(action))}


@dataclass
class AgentAction:
    """A single agent action with its metadata."""

    action_type: str
    action: ActionPayload
    reasoning: Optional[str] = None
    status: Optional[str] = None
    step: Optional[list[dict[str, Any]]] = None

    def to_dict(self) -> dict:
        return _prune(
            {
                "action_type": self.action_type,
                "reasoning": self.reasoning,
                "action": dump_action_payload(self.action),
                "status": self.status,
                "step": self.step,
            }
        )

    @classmethod
    def from_dict(cls, data: dict) -> "AgentAction":
        return cls(
            action_type=_require(data, "action_type"),
            action=parse_action_payload(_require(data, "action")),
            reasoning=data.get("reasoning"),
            status=data.get("status"),
            step=data.get("step"),
        )


@dataclass
class AgentUsage:
    input_tokens: int
    output_tokens: int
    inference_time_ms: int


@dataclass
class AgentResult:
    """Summary of an agent run."""

    actions: list[ActionPayload]
    completed: bool
    message: Optional[str] = None
    usage: Optional[AgentUsage] = None

    def to_dict(self) -> dict:
        return _prune(
            {
                "actions": [dump_action_payload(a) for a in self.actions],
                "message": self.message,
                "usage": None if self.usage is None else asdict(self.usage),
                "completed": self.completed,
            }
        )

    @classmethod
    def from_dict(cls, data: dict) -> "AgentResult":
        usage = data.get("usage")
        completed = data.get("completed")
        if not isinstance(completed, bool):
            raise ValueError("field 'completed' must be a boolean")
        return cls(
            actions=[parse_action_payload(a) for a in _require(data, "actions")],
            completed=completed,
            message=data.get("message"),
            usage=None if usage is None else _build(AgentUsage, usage),
        )


@dataclass
class ActionExecutionResult:
    success: bool
    error: Optional[str] = None


@dataclass
class AgentClientOptions:
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model_name: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    wait_between_actions: Optional[int] = None


@dataclass
class AgentHandlerOptions:
    model_name: str
    client_options: Optional[AgentClientOptions] = None
    user_provided_instructions: Optional[str] = None


@dataclass
class AgentExecuteOptions:
    instruction: str
    max_steps: Optional[int] = None
    auto_screenshot: Optional[bool] = None
    wait_between_actions: Optional[int] = None
    context: Optional[str] = None


@dataclass
class EnvState:
    screenshot: bytes
    url: str