# chat_tokens/engine/encoder.py
"""
Token Encoder — maps text to a BPE token count.

The hosted chat models tokenise with a fixed, versioned tiktoken vocabulary.
Loading it is expensive (it may be downloaded on first use), so each
TokenEncoder loads lazily, exactly once, behind a lock. get_encoder() hands
out one shared instance per encoding name for the life of the process.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from ..constants import DEFAULT_ENCODING
from ..exceptions import VocabularyUnavailableError

logger = logging.getLogger(__name__)


class TokenEncoder:
    """
    Lazily-loaded wrapper around a tiktoken Encoding.

    Parameters
    ----------
    encoding_name:
        tiktoken encoding to load, e.g. ``"cl100k_base"``.
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING) -> None:
        self.encoding_name = encoding_name
        self._encoding: Any = None
        self._load_lock = threading.Lock()

    def __repr__(self) -> str:
        state = "loaded" if self._encoding is not None else "unloaded"
        return f"TokenEncoder({self.encoding_name!r}, {state})"

    # ------------------------------------------------------------------
    # Lazy initialisation
    # ------------------------------------------------------------------

    def _ensure_loaded(self) -> Any:
        if self._encoding is not None:
            return self._encoding
        with self._load_lock:
            if self._encoding is not None:
                return self._encoding
            self._encoding = _load_encoding(self.encoding_name)
            return self._encoding

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def count(self, text: str) -> int:
        """Return the number of tokens in *text*."""
        if not text:
            return 0
        encoding = self._ensure_loaded()
        # Special-token markers in user text are ordinary text to the API.
        return len(encoding.encode(text, disallowed_special=()))


def _load_encoding(encoding_name: str) -> Any:
    try:
        import tiktoken  # type: ignore[import]
    except ImportError as exc:
        raise VocabularyUnavailableError(
            encoding_name, "tiktoken is not installed. Install it with: pip install tiktoken"
        ) from exc

    try:
        encoding = tiktoken.get_encoding(encoding_name)
    except Exception as exc:
        logger.error("Failed to load tiktoken encoding %s", encoding_name, exc_info=True)
        raise VocabularyUnavailableError(encoding_name, str(exc)) from exc

    logger.debug("Loaded tiktoken encoding %s (%d tokens)", encoding_name, encoding.n_vocab)
    return encoding


_encoders: dict[str, TokenEncoder] = {}
_encoders_lock = threading.Lock()


def get_encoder(encoding_name: str = DEFAULT_ENCODING) -> TokenEncoder:
    """Shared TokenEncoder for *encoding_name*. The vocabulary loads on first count."""
    with _encoders_lock:
        encoder = _encoders.get(encoding_name)
        if encoder is None:
            encoder = _encoders[encoding_name] = TokenEncoder(encoding_name)
        return encoder


def count_string_tokens(text: str, encoding_name: str = DEFAULT_ENCODING) -> int:
    """Count the tokens in a string using the shared encoder."""
    return get_encoder(encoding_name).count(text)
