# chat_tokens/constants.py
"""
Default constants for chat-tokens.

Every correction constant below was fitted empirically by comparing estimates
against the ``usage.prompt_tokens`` reported by the hosted API. None of them can
be derived from the tokenizer alone, and they go stale whenever the hosted
prompt format changes, so each set is tagged with the model generation it was
observed on.
"""

# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------
DEFAULT_ENCODING: str = "cl100k_base"
"""BPE vocabulary used by the gpt-3.5-turbo / gpt-4 chat models."""

DEFAULT_MODEL: str = "gpt-3.5-turbo"

# ---------------------------------------------------------------------------
# Per-message overheads (cl100k, June 2023 function-calling format)
# ---------------------------------------------------------------------------
TOKENS_PER_MESSAGE: int = 3
"""Role/separator wrapper around every message."""

TOKENS_PER_NAME: int = 1
"""Delimiter added when a message carries a ``name``."""

TOKENS_FUNCTION_ROLE: int = -2
"""Function-result messages use a cheaper wrapper than name + role predicts."""

TOKENS_PER_FUNCTION_CALL: int = 3
"""Wrapper around an assistant ``function_call`` payload."""

# ---------------------------------------------------------------------------
# Prompt-level overheads
# ---------------------------------------------------------------------------
TOKENS_PER_COMPLETION: int = 3
"""Reply primer appended once per request."""

TOKENS_FUNCTIONS_BLOCK: int = 9
"""Wrapper around the injected function-definitions block."""

TOKENS_SYSTEM_WITH_FUNCTIONS: int = -4
"""
Functions are injected into a system message. When the prompt already has
one it is reused, so part of the block wrapper is counted twice.
"""

TOKENS_FUNCTION_CALL_AUTO: int = 0
TOKENS_FUNCTION_CALL_NONE: int = 1
TOKENS_FUNCTION_CALL_NAMED: int = 4
"""Added on top of the token count of the forced function's name."""

# ---------------------------------------------------------------------------
# Constant table — one row per observed model generation
# ---------------------------------------------------------------------------
DEFAULT_PROFILE: str = "cl100k-2023-06"

OVERHEAD_PROFILES: dict[str, dict[str, int]] = {
    "cl100k-2023-06": {
        "per_message": TOKENS_PER_MESSAGE,
        "per_name": TOKENS_PER_NAME,
        "function_role": TOKENS_FUNCTION_ROLE,
        "function_call": TOKENS_PER_FUNCTION_CALL,
        "completion": TOKENS_PER_COMPLETION,
        "functions_block": TOKENS_FUNCTIONS_BLOCK,
        "system_with_functions": TOKENS_SYSTEM_WITH_FUNCTIONS,
        "function_call_auto": TOKENS_FUNCTION_CALL_AUTO,
        "function_call_none": TOKENS_FUNCTION_CALL_NONE,
        "function_call_named": TOKENS_FUNCTION_CALL_NAMED,
    },
}

PROFILE_ENCODINGS: dict[str, str] = {
    "cl100k-2023-06": "cl100k_base",
}

MODEL_PROFILES: dict[str, str] = {
    "gpt-3.5-turbo": "cl100k-2023-06",
    "gpt-3.5-turbo-16k": "cl100k-2023-06",
    "gpt-4": "cl100k-2023-06",
    "gpt-4-32k": "cl100k-2023-06",
    "gpt-4-turbo": "cl100k-2023-06",
}
"""
Exact model names. Dated snapshots (``gpt-4-0613``) resolve through the
longest matching prefix.
"""

# ---------------------------------------------------------------------------
# Environment variables read by EstimatorConfig.from_env()
# ---------------------------------------------------------------------------
ENV_MODEL: str = "CHAT_TOKENS_MODEL"
ENV_ENCODING: str = "CHAT_TOKENS_ENCODING"
