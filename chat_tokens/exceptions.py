# chat_tokens/exceptions.py
"""
Custom exceptions for chat-tokens.

All public exceptions inherit from ChatTokensError so callers can catch
the whole family with a single except clause if preferred. Malformed
messages and function definitions are reported by pydantic's own
ValidationError and are not wrapped.
"""

from __future__ import annotations


class ChatTokensError(Exception):
    """Base exception for all estimator errors."""


class VocabularyUnavailableError(ChatTokensError):
    """
    Raised when the BPE vocabulary cannot be loaded on first use.

    Attributes
    ----------
    encoding:
        Name of the tiktoken encoding that failed to load.
    """

    def __init__(self, encoding: str, reason: str) -> None:
        self.encoding = encoding
        super().__init__(f"Could not load tokenizer vocabulary '{encoding}': {reason}")


class UnknownModelError(ChatTokensError):
    """Raised when no correction-constant profile is registered for a model."""

    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"No token overhead profile is known for model '{model}'")


class UnsupportedSchemaError(ChatTokensError, ValueError):
    """Raised when a function parameter schema uses a type the formatter cannot render."""
