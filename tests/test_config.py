# tests/test_config.py
"""
Tests for EstimatorConfig: profile resolution and the dict / YAML / env factories.
"""

from __future__ import annotations

import pytest

from chat_tokens.config import EstimatorConfig
from chat_tokens.exceptions import UnknownModelError


class TestResolution:
    def test_defaults(self):
        cfg = EstimatorConfig()
        assert cfg.model == "gpt-3.5-turbo"
        assert cfg.resolve_encoding() == "cl100k_base"
        assert cfg.resolve_overheads().version == "cl100k-2023-06"

    @pytest.mark.parametrize(
        "model", ["gpt-4", "gpt-4-0613", "gpt-3.5-turbo-0613", "gpt-3.5-turbo-16k-0613", "gpt-4-turbo-2024-04-09"]
    )
    def test_known_models(self, model):
        assert EstimatorConfig(model=model).resolve_profile() == "cl100k-2023-06"

    @pytest.mark.parametrize("model", ["claude-3", "gpt-4o", "gpt-40"])
    def test_unknown_model(self, model):
        with pytest.raises(UnknownModelError) as exc_info:
            EstimatorConfig(model=model).resolve_overheads()
        assert exc_info.value.model == model

    def test_encoding_override(self):
        cfg = EstimatorConfig(encoding="p50k_base")
        assert cfg.resolve_encoding() == "p50k_base"

    def test_overhead_override(self):
        overheads = EstimatorConfig(overheads={"functions_block": 10}).resolve_overheads()
        assert overheads.functions_block == 10
        assert overheads.per_message == 3

    def test_override_does_not_touch_table(self):
        EstimatorConfig(overheads={"per_message": 99}).resolve_overheads()
        assert EstimatorConfig().resolve_overheads().per_message == 3


class TestFactories:
    def test_from_dict_kwargs_win(self):
        cfg = EstimatorConfig.from_dict({"model": "gpt-4"}, model="gpt-4-0613")
        assert cfg.model == "gpt-4-0613"

    def test_from_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MY_MODEL", "gpt-4")
        path = tmp_path / "chat_tokens.yaml"
        path.write_text('model: "${MY_MODEL}"\noverheads:\n  completion: 2\n')
        cfg = EstimatorConfig.from_yaml(str(path))
        assert cfg.model == "gpt-4"
        assert cfg.resolve_overheads().completion == 2

    def test_from_yaml_missing_env(self, tmp_path):
        path = tmp_path / "chat_tokens.yaml"
        path.write_text('model: "${CHAT_TOKENS_DOES_NOT_EXIST}"\n')
        with pytest.raises(EnvironmentError, match="CHAT_TOKENS_DOES_NOT_EXIST"):
            EstimatorConfig.from_yaml(str(path))

    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "chat_tokens.yaml"
        path.write_text("")
        assert EstimatorConfig.from_yaml(str(path)) == EstimatorConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CHAT_TOKENS_MODEL", "gpt-4")
        monkeypatch.setenv("CHAT_TOKENS_ENCODING", "cl100k_base")
        cfg = EstimatorConfig.from_env()
        assert cfg.model == "gpt-4"
        assert cfg.encoding == "cl100k_base"

    def test_from_env_defaults(self):
        assert EstimatorConfig.from_env() == EstimatorConfig()
