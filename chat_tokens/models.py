# chat_tokens/models.py
"""
Pydantic v2 data models used throughout chat-tokens.

Messages are modelled as one tagged variant per role so the estimator can
handle each role explicitly. Plain OpenAI-style dicts are accepted at every
public entry point and validated into these models; a dict that does not fit
raises pydantic's ValidationError straight away.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field

from .constants import (
    DEFAULT_PROFILE,
    TOKENS_FUNCTION_CALL_AUTO,
    TOKENS_FUNCTION_CALL_NAMED,
    TOKENS_FUNCTION_CALL_NONE,
    TOKENS_FUNCTION_ROLE,
    TOKENS_FUNCTIONS_BLOCK,
    TOKENS_PER_COMPLETION,
    TOKENS_PER_FUNCTION_CALL,
    TOKENS_PER_MESSAGE,
    TOKENS_PER_NAME,
    TOKENS_SYSTEM_WITH_FUNCTIONS,
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class FunctionCall(_Frozen):
    """A function invocation requested by the assistant."""

    name: str
    arguments: str = Field(..., description="Raw JSON argument string, counted verbatim.")


class SystemMessage(_Frozen):
    role: Literal["system"] = "system"
    content: str | None = None
    name: str | None = Field(
        default=None,
        description="Set on few-shot exemplar messages, e.g. 'example_user'.",
    )


class UserMessage(_Frozen):
    role: Literal["user"] = "user"
    content: str | list[dict[str, Any]] | None = Field(
        default=None,
        description="Only plain string content is counted; content parts are undercounted.",
    )
    name: str | None = None


class AssistantMessage(_Frozen):
    role: Literal["assistant"] = "assistant"
    content: str | None = None
    name: str | None = None
    function_call: FunctionCall | None = None


class FunctionMessage(_Frozen):
    role: Literal["function"] = "function"
    name: str = Field(..., description="Name of the function whose result this is.")
    content: str | None = None


ChatMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, FunctionMessage],
    Field(discriminator="role"),
]

_MESSAGE_ADAPTER: TypeAdapter[ChatMessage] = TypeAdapter(ChatMessage)


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


class FunctionDefinition(_Frozen):
    """
    A callable function the model may invoke.

    ``parameters`` is kept as the raw JSON-schema tree: property order is
    significant to the rendered prompt, so it is never normalised.
    """

    name: str
    description: str | None = None
    parameters: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )


class FunctionCallOption(_Frozen):
    """Forces the model to call the named function."""

    name: str


FunctionCallDirective = Union[Literal["none", "auto"], FunctionCallOption, None]

_DIRECTIVE_ADAPTER: TypeAdapter[FunctionCallDirective] = TypeAdapter(FunctionCallDirective)


# ---------------------------------------------------------------------------
# Correction constants & results
# ---------------------------------------------------------------------------


class TokenOverheads(_Frozen):
    """
    The fitted correction constants for one hosted-model generation.

    Each value is independently adjustable; see constants.py for what each
    one accounts for.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(default=DEFAULT_PROFILE, description="Model generation these were observed on.")
    per_message: int = TOKENS_PER_MESSAGE
    per_name: int = TOKENS_PER_NAME
    function_role: int = TOKENS_FUNCTION_ROLE
    function_call: int = TOKENS_PER_FUNCTION_CALL
    completion: int = TOKENS_PER_COMPLETION
    functions_block: int = TOKENS_FUNCTIONS_BLOCK
    system_with_functions: int = TOKENS_SYSTEM_WITH_FUNCTIONS
    function_call_auto: int = TOKENS_FUNCTION_CALL_AUTO
    function_call_none: int = TOKENS_FUNCTION_CALL_NONE
    function_call_named: int = TOKENS_FUNCTION_CALL_NAMED


class PromptTokenBreakdown(BaseModel):
    """Where the tokens of a prompt estimate come from."""

    messages: list[int] = Field(default_factory=list, description="Cost of each message, in order.")
    completion: int = 0
    functions: int = 0
    system_with_functions: int = 0
    function_call: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return (
            sum(self.messages)
            + self.completion
            + self.functions
            + self.system_with_functions
            + self.function_call
        )


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def parse_message(message: Any) -> SystemMessage | UserMessage | AssistantMessage | FunctionMessage:
    """Validate an OpenAI-style dict (or pass through a message model)."""
    if isinstance(message, (SystemMessage, UserMessage, AssistantMessage, FunctionMessage)):
        return message
    return _MESSAGE_ADAPTER.validate_python(message)


def parse_function(function: Any) -> FunctionDefinition:
    if isinstance(function, FunctionDefinition):
        return function
    return FunctionDefinition.model_validate(function)


def parse_function_call(directive: Any) -> FunctionCallDirective:
    if directive is None or isinstance(directive, FunctionCallOption):
        return directive
    return _DIRECTIVE_ADAPTER.validate_python(directive)
