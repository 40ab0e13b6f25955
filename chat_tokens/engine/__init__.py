from .encoder import TokenEncoder, count_string_tokens, get_encoder
from .estimator import (
    PromptEstimator,
    default_estimator,
    estimate_functions_tokens,
    estimate_message_tokens,
    estimate_prompt_breakdown,
    estimate_prompt_tokens,
)
from .functions import render_function_definitions

__all__ = [
    "TokenEncoder",
    "count_string_tokens",
    "get_encoder",
    "PromptEstimator",
    "default_estimator",
    "estimate_functions_tokens",
    "estimate_message_tokens",
    "estimate_prompt_breakdown",
    "estimate_prompt_tokens",
    "render_function_definitions",
]
