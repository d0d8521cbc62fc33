"""Turn templates applied to prompt text before tokenization."""

from __future__ import annotations

from typing import assert_never

from gemma_prompt.constants import CONTINUE_USER_TURN, START_OF_MODEL_TURN, START_OF_USER_TURN
from gemma_prompt.models.info import ModelInfo, PromptWrapping


def wrap(info: ModelInfo, pos: int, prompt: str) -> str:
    """Apply the model's turn template to ``prompt``.

    Instruction-tuned models expect control tokens around each user turn.
    A turn that continues an existing dialogue (``pos > 0``) first closes
    the previous model turn. All other wrapping modes return the prompt
    unchanged.
    """
    wrapping = info.wrapping
    if wrapping is PromptWrapping.INSTRUCTION_TUNED:
        start = START_OF_USER_TURN if pos == 0 else CONTINUE_USER_TURN
        return f"{start}{prompt}{START_OF_MODEL_TURN}"
    elif wrapping is PromptWrapping.PRETRAINED:
        return prompt
    elif wrapping is PromptWrapping.PALIGEMMA:
        return prompt
    elif wrapping is PromptWrapping.VISION_LANGUAGE:
        return prompt
    else:
        assert_never(wrapping)
