# chat_tokens/engine/estimator.py
"""
Prompt token estimation.

Estimates how many prompt tokens a chat completion request will be billed
for, without calling the API. A prompt is costed bottom-up:

  1. Each message: role + content + name (+ function_call name/arguments),
     plus fixed per-message overheads.
  2. One reply primer per request.
  3. The rendered function-definitions block, if functions are sent.
  4. Prompt-level corrections for how the hidden prompt constructor merges
     functions into the system message and encodes the function_call mode.

The overhead constants come from the TokenOverheads profile selected by
EstimatorConfig. They are fitted, not derived, so the result is an estimate.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Iterable, Sequence

from ..config import EstimatorConfig
from ..models import (
    AssistantMessage,
    FunctionCallDirective,
    FunctionDefinition,
    FunctionMessage,
    PromptTokenBreakdown,
    SystemMessage,
    TokenOverheads,
    parse_function,
    parse_function_call,
    parse_message,
)
from .encoder import TokenEncoder, get_encoder
from .functions import render_function_definitions

logger = logging.getLogger(__name__)


class PromptEstimator:
    """
    Offline prompt token estimator.

    Parameters
    ----------
    config:
        Selects the model generation (and so the overhead constants and
        tokenizer). Defaults to ``EstimatorConfig()``.
    encoder:
        Token encoder to count with. Defaults to the shared encoder for the
        configured encoding; pass one explicitly to isolate tests or to use a
        custom vocabulary.
    """

    def __init__(
        self,
        config: EstimatorConfig | None = None,
        encoder: TokenEncoder | None = None,
    ) -> None:
        self._config = config or EstimatorConfig()
        self._overheads = self._config.resolve_overheads()
        self._encoder = encoder or get_encoder(self._config.resolve_encoding())

    @property
    def config(self) -> EstimatorConfig:
        return self._config

    @property
    def overheads(self) -> TokenOverheads:
        return self._overheads

    @property
    def encoder(self) -> TokenEncoder:
        return self._encoder

    # ------------------------------------------------------------------
    # Factory methods
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> "PromptEstimator":
        """Construct from a plain Python dictionary."""
        return cls(EstimatorConfig.from_dict(data, **kwargs))

    @classmethod
    def from_yaml(cls, path: str, **kwargs: Any) -> "PromptEstimator":
        """Construct from a YAML config file."""
        return cls(EstimatorConfig.from_yaml(path, **kwargs))

    @classmethod
    def from_env(cls, **kwargs: Any) -> "PromptEstimator":
        """Construct from environment variables."""
        return cls(EstimatorConfig.from_env(**kwargs))

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def count_string_tokens(self, text: str) -> int:
        return self._encoder.count(text)

    def estimate_message_tokens(self, message: Any) -> int:
        """
        Estimate the tokens used by a single message.

        Using the message inside a prompt adds prompt-level tokens on top of
        this, so prefer estimate_prompt_tokens() for budgeting.
        """
        msg = parse_message(message)
        overheads = self._overheads

        function_call = msg.function_call if isinstance(msg, AssistantMessage) else None

        components = [msg.role]
        if isinstance(msg.content, str):
            components.append(msg.content)
        if msg.name:
            components.append(msg.name)
        if function_call is not None:
            components.append(function_call.name)
            components.append(function_call.arguments)

        tokens = sum(self.count_string_tokens(component) for component in components)
        tokens += overheads.per_message
        if msg.name:
            tokens += overheads.per_name
        if isinstance(msg, FunctionMessage):
            tokens += overheads.function_role
        if function_call is not None:
            tokens += overheads.function_call
        return tokens

    def estimate_functions_tokens(self, functions: Iterable[FunctionDefinition | dict[str, Any]]) -> int:
        """
        Estimate the tokens used by the injected function-definitions block.

        Like estimate_message_tokens(), this excludes the prompt-level
        corrections applied by estimate_prompt_tokens().
        """
        rendered = render_function_definitions(functions)
        return self.count_string_tokens(rendered) + self._overheads.functions_block

    # ------------------------------------------------------------------
    # Whole prompt
    # ------------------------------------------------------------------

    def estimate_prompt_breakdown(
        self,
        messages: Sequence[Any],
        functions: Sequence[FunctionDefinition | dict[str, Any]] | None = None,
        function_call: Any = None,
    ) -> PromptTokenBreakdown:
        """Estimate a prompt and report where each token comes from."""
        parsed = [parse_message(message) for message in messages]
        # An empty list still counts as supplied: the block and corrections apply.
        has_functions = functions is not None
        definitions = [parse_function(function) for function in functions or ()]
        directive = parse_function_call(function_call)
        overheads = self._overheads

        breakdown = PromptTokenBreakdown(completion=overheads.completion)

        # With functions present the first system message gains a trailing
        # newline. Only a local copy is padded.
        padded = False
        for msg in parsed:
            if has_functions and not padded and isinstance(msg, SystemMessage):
                msg = msg.model_copy(update={"content": (msg.content or "") + "\n"})
                padded = True
            breakdown.messages.append(self.estimate_message_tokens(msg))

        if has_functions:
            breakdown.functions = self.estimate_functions_tokens(definitions)
            if any(isinstance(msg, SystemMessage) for msg in parsed):
                breakdown.system_with_functions = overheads.system_with_functions

        breakdown.function_call = self._function_call_tokens(directive)

        logger.debug(
            "Estimated %d prompt tokens (%d messages, functions=%d, function_call=%d)",
            breakdown.total,
            len(parsed),
            breakdown.functions,
            breakdown.function_call,
        )
        return breakdown

    def estimate_prompt_tokens(
        self,
        messages: Sequence[Any],
        functions: Sequence[FunctionDefinition | dict[str, Any]] | None = None,
        function_call: Any = None,
    ) -> int:
        """
        Estimate the number of prompt tokens a chat completion request will use.

        Parameters
        ----------
        messages:
            Chat messages, as message models or OpenAI-style dicts.
        functions:
            Optional function definitions sent with the request.
        function_call:
            Optional directive: ``"none"``, ``"auto"`` or ``{"name": ...}``.

        Returns
        -------
        int
            Estimated prompt token count.
        """
        return self.estimate_prompt_breakdown(messages, functions, function_call).total

    def _function_call_tokens(self, directive: FunctionCallDirective) -> int:
        if directive is None:
            return 0
        if directive == "auto":
            return self._overheads.function_call_auto
        if directive == "none":
            return self._overheads.function_call_none
        return self._overheads.function_call_named + self.count_string_tokens(directive.name)


# ---------------------------------------------------------------------------
# Module-level convenience API (default model profile)
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1)
def default_estimator() -> PromptEstimator:
    """The shared estimator for the default model. Cheap; the encoder loads lazily."""
    return PromptEstimator()


def estimate_prompt_tokens(
    messages: Sequence[Any],
    functions: Sequence[FunctionDefinition | dict[str, Any]] | None = None,
    function_call: Any = None,
) -> int:
    """Estimate the prompt tokens of a request. See PromptEstimator.estimate_prompt_tokens."""
    return default_estimator().estimate_prompt_tokens(messages, functions, function_call)


def estimate_prompt_breakdown(
    messages: Sequence[Any],
    functions: Sequence[FunctionDefinition | dict[str, Any]] | None = None,
    function_call: Any = None,
) -> PromptTokenBreakdown:
    return default_estimator().estimate_prompt_breakdown(messages, functions, function_call)


def estimate_message_tokens(message: Any) -> int:
    return default_estimator().estimate_message_tokens(message)


def estimate_functions_tokens(functions: Iterable[FunctionDefinition | dict[str, Any]]) -> int:
    return default_estimator().estimate_functions_tokens(functions)
