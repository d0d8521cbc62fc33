"""Model configuration consumed by the prompt wrapper."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PromptWrapping(StrEnum):
    """How a model family expects its prompts to be framed.

    Code that branches on this enum must handle every member and end in
    ``typing.assert_never`` so that adding a member breaks loudly.
    """

    PRETRAINED = "pretrained"
    INSTRUCTION_TUNED = "instruction_tuned"
    PALIGEMMA = "paligemma"
    VISION_LANGUAGE = "vision_language"


class ModelInfo(BaseModel):
    """Read-only description of the model a prompt is built for."""

    model_config = ConfigDict(frozen=True)

    wrapping: PromptWrapping
    name: str | None = None
    max_image_batch_size: int | None = Field(default=None, gt=0)
