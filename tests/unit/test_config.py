"""Tests for configuration loading."""

from coachflow.config import load_config
from coachflow.llm import ScriptedModelClient, get_model_client
from coachflow.llm.pydantic_ai_client import PydanticAIChatClient


def test_load_config_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("COACHFLOW_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("COACHFLOW_MODEL", raising=False)
    monkeypatch.delenv("COACHFLOW_MODEL_BACKEND", raising=False)
    monkeypatch.delenv("COACHFLOW_LOG_LEVEL", raising=False)

    config = load_config()
    assert config.model.backend == "pydantic_ai"
    assert config.context.recent_turns_max == 16
    assert config.context.snapshot_max_chars == 8000
    assert config.quality.threshold == 8


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "coachflow.yaml"
    config_path.write_text(
        """
model:
  backend: scripted
  name: test:model
context:
  recent_turns_max: 4
quality:
  threshold: 6
log_level: DEBUG
"""
    )
    monkeypatch.setenv("COACHFLOW_CONFIG", str(config_path))
    monkeypatch.delenv("COACHFLOW_MODEL", raising=False)
    monkeypatch.delenv("COACHFLOW_MODEL_BACKEND", raising=False)
    monkeypatch.delenv("COACHFLOW_LOG_LEVEL", raising=False)

    config = load_config()
    assert config.model.backend == "scripted"
    assert config.model.name == "test:model"
    assert config.context.recent_turns_max == 4
    assert config.context.snapshot_max_chars == 8000
    assert config.quality.threshold == 6
    assert config.log_level == "DEBUG"


def test_env_overrides_win(tmp_path, monkeypatch):
    monkeypatch.setenv("COACHFLOW_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("COACHFLOW_MODEL", "openai:gpt-4o")
    monkeypatch.setenv("COACHFLOW_MODEL_BACKEND", "SCRIPTED")
    monkeypatch.setenv("COACHFLOW_LOG_LEVEL", "WARNING")

    config = load_config()
    assert config.model.name == "openai:gpt-4o"
    assert config.model.backend == "scripted"
    assert config.log_level == "WARNING"


def test_get_model_client_uses_config(tmp_path, monkeypatch):
    config_path = tmp_path / "coachflow.yaml"
    config_path.write_text("model:\n  backend: scripted\n")
    monkeypatch.setenv("COACHFLOW_CONFIG", str(config_path))
    monkeypatch.delenv("COACHFLOW_MODEL_BACKEND", raising=False)

    assert isinstance(get_model_client(), ScriptedModelClient)
    client = get_model_client("pydantic_ai")
    assert isinstance(client, PydanticAIChatClient)
