# chat_tokens/config.py
"""
EstimatorConfig — selects the model generation an estimate is calibrated for.

Supports construction from:
  - Python dict   → EstimatorConfig.from_dict(data)
  - YAML file     → EstimatorConfig.from_yaml("chat_tokens.yaml")
  - Environment   → EstimatorConfig.from_env()
"""

from __future__ import annotations

import os
import re
from typing import Any

from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_MODEL,
    ENV_ENCODING,
    ENV_MODEL,
    MODEL_PROFILES,
    OVERHEAD_PROFILES,
    PROFILE_ENCODINGS,
)
from .exceptions import UnknownModelError
from .models import TokenOverheads


class EstimatorConfig(BaseModel):
    """
    Top-level configuration for PromptEstimator.

    Instantiate directly or use one of the factory class methods:
      EstimatorConfig.from_dict(data)
      EstimatorConfig.from_yaml(path)
      EstimatorConfig.from_env()
    """

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Model name (or dated snapshot) whose prompt format is being estimated.",
    )
    encoding: str | None = Field(
        default=None,
        description="tiktoken encoding override. Defaults to the encoding of the model's profile.",
    )
    overheads: dict[str, int] = Field(
        default_factory=dict,
        description="Per-constant overrides applied on top of the model's profile.",
    )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_profile(self) -> str:
        """Name of the constant profile for ``model`` (exact match, then longest prefix)."""
        if self.model in MODEL_PROFILES:
            return MODEL_PROFILES[self.model]
        prefixes = [name for name in MODEL_PROFILES if self.model.startswith(name + "-")]
        if not prefixes:
            raise UnknownModelError(self.model)
        return MODEL_PROFILES[max(prefixes, key=len)]

    def resolve_encoding(self) -> str:
        if self.encoding:
            return self.encoding
        return PROFILE_ENCODINGS[self.resolve_profile()]

    def resolve_overheads(self) -> TokenOverheads:
        profile = self.resolve_profile()
        values: dict[str, Any] = {"version": profile, **OVERHEAD_PROFILES[profile]}
        values.update(self.overheads)
        return TokenOverheads.model_validate(values)

    # ------------------------------------------------------------------
    # Factory methods
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> "EstimatorConfig":
        """Build config from a plain Python dictionary."""
        merged = {**data, **kwargs}
        return cls.model_validate(merged)

    @classmethod
    def from_yaml(cls, path: str, **kwargs: Any) -> "EstimatorConfig":
        """
        Build config from a YAML file.

        Environment variable interpolation is supported:
          model: "${CHAT_MODEL}"
        """
        try:
            import yaml  # type: ignore[import]
        except ImportError as exc:
            raise ImportError(
                "PyYAML is required for from_yaml(). Install it with: pip install pyyaml"
            ) from exc

        with open(path) as f:
            raw = f.read()

        def _replace(match: re.Match) -> str:  # type: ignore[type-arg]
            var = match.group(1)
            value = os.environ.get(var)
            if value is None:
                raise EnvironmentError(
                    f"Environment variable '{var}' referenced in '{path}' is not set."
                )
            return value

        raw = re.sub(r"\$\{([^}]+)\}", _replace, raw)
        data = yaml.safe_load(raw) or {}
        return cls.from_dict(data, **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "EstimatorConfig":
        """
        Build config from environment variables.

          CHAT_TOKENS_MODEL    → model
          CHAT_TOKENS_ENCODING → encoding
        """
        data: dict[str, Any] = {}

        model = os.environ.get(ENV_MODEL)
        if model:
            data["model"] = model

        encoding = os.environ.get(ENV_ENCODING)
        if encoding:
            data["encoding"] = encoding

        data.update(kwargs)
        return cls.from_dict(data)
