# chat_tokens/__init__.py
"""
chat-tokens — Offline prompt token estimates for function-calling chat models.

Public API surface:
  estimate_prompt_tokens      — tokens a whole request will be billed for
  estimate_prompt_breakdown   — the same estimate, itemised
  estimate_message_tokens     — tokens for one message in isolation
  estimate_functions_tokens   — tokens for the injected function block
  count_string_tokens         — raw BPE token count of a string
  render_function_definitions — the function block as the model sees it
  PromptEstimator             — estimator bound to a model profile / encoder
  EstimatorConfig             — selects model, encoding and overrides
  ChatTokensError             — base class of all library errors
"""

from .config import EstimatorConfig
from .engine.encoder import TokenEncoder, count_string_tokens, get_encoder
from .engine.estimator import (
    PromptEstimator,
    estimate_functions_tokens,
    estimate_message_tokens,
    estimate_prompt_breakdown,
    estimate_prompt_tokens,
)
from .engine.functions import render_function_definitions
from .exceptions import (
    ChatTokensError,
    UnknownModelError,
    UnsupportedSchemaError,
    VocabularyUnavailableError,
)
from .models import (
    AssistantMessage,
    FunctionCall,
    FunctionCallOption,
    FunctionDefinition,
    FunctionMessage,
    PromptTokenBreakdown,
    SystemMessage,
    TokenOverheads,
    UserMessage,
)

__all__ = [
    "estimate_prompt_tokens",
    "estimate_prompt_breakdown",
    "estimate_message_tokens",
    "estimate_functions_tokens",
    "count_string_tokens",
    "render_function_definitions",
    "get_encoder",
    "TokenEncoder",
    "PromptEstimator",
    "EstimatorConfig",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "FunctionMessage",
    "FunctionCall",
    "FunctionCallOption",
    "FunctionDefinition",
    "TokenOverheads",
    "PromptTokenBreakdown",
    "ChatTokensError",
    "VocabularyUnavailableError",
    "UnknownModelError",
    "UnsupportedSchemaError",
]

__version__ = "0.1.0"
