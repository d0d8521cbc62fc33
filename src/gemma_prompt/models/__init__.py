"""Configuration models for gemma-prompt."""

from .info import ModelInfo, PromptWrapping
from .presets import known_models, model_info_for

__all__ = [
    "ModelInfo",
    "PromptWrapping",
    "known_models",
    "model_info_for",
]
