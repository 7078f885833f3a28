from __future__ import annotations

import logging
import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel

from .constants import (
    DEFAULT_QUALITY_THRESHOLD,
    DEFAULT_RECENT_TURNS_MAX,
    DEFAULT_SNAPSHOT_MAX_CHARS,
)


class ModelConfig(BaseModel):
    """Settings for the language model client."""

    backend: Literal["pydantic_ai", "scripted"] = "pydantic_ai"
    name: str = "openai:gpt-4o-mini"
    system_prompt: Optional[str] = None


class ContextConfig(BaseModel):
    """Limits applied when assembling chat context."""

    recent_turns_max: int = DEFAULT_RECENT_TURNS_MAX
    snapshot_max_chars: int = DEFAULT_SNAPSHOT_MAX_CHARS


class QualityConfig(BaseModel):
    """Acceptance settings for judged generations."""

    threshold: int = DEFAULT_QUALITY_THRESHOLD


class CoachflowConfig(BaseModel):
    """Top-level configuration model."""

    model: ModelConfig = ModelConfig()
    context: ContextConfig = ContextConfig()
    quality: QualityConfig = QualityConfig()
    log_level: str = "INFO"


def load_config(path: Optional[str] = None) -> CoachflowConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to COACHFLOW_CONFIG env
            variable or 'coachflow.yaml' in the current directory.
    """

    config_path = path or os.getenv("COACHFLOW_CONFIG", "coachflow.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = CoachflowConfig(**data)
    else:
        config = CoachflowConfig()

    env_model = os.getenv("COACHFLOW_MODEL")
    if env_model:
        config.model.name = env_model
    env_backend = os.getenv("COACHFLOW_MODEL_BACKEND")
    if env_backend:
        config.model = ModelConfig(
            **{**config.model.model_dump(), "backend": env_backend.lower()}
        )
    env_level = os.getenv("COACHFLOW_LOG_LEVEL")
    if env_level:
        config.log_level = env_level
    return config


def configure_logging(level: str | int = "INFO") -> None:
    """Route coachflow log records to stderr at ``level``."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
