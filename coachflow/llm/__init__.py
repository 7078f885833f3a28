"""Model client factory and implementations."""

from __future__ import annotations

import os
from typing import Optional

from ..config import CoachflowConfig, load_config
from .base import ChatOptions, ModelClient
from .scripted import ScriptedModelClient


def get_model_client(
    backend: Optional[str] = None, config: Optional[CoachflowConfig] = None
) -> ModelClient:
    """Factory function to get the configured model client."""

    config = config or load_config()
    backend = (
        backend
        or os.getenv("COACHFLOW_MODEL_BACKEND")
        or config.model.backend
    ).lower()

    if backend == "scripted":
        return ScriptedModelClient(default_reply="(offline) Noted.")
    elif backend == "pydantic_ai":
        from .pydantic_ai_client import PydanticAIChatClient

        return PydanticAIChatClient(
            model=config.model.name, system_prompt=config.model.system_prompt
        )
    else:
        raise ValueError(f"Unsupported model backend: {backend}")


__all__ = ["ChatOptions", "ModelClient", "ScriptedModelClient", "get_model_client"]
