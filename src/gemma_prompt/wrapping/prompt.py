"""Prompt-to-token-sequence construction.

Turns a prompt, a conversation position and a ``ModelInfo`` into the
token ids fed to the model:

1. the turn template is applied to the prompt text;
2. the text is encoded by the tokenizer;
3. ``BOS_ID`` is prepended when ``pos == 0`` (every wrapping mode);
4. PaliGemma prompts get the ``"\\n"`` separator appended, encoded on its
   own so it never merges with the prompt's last sub-word.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import assert_never

from gemma_prompt.constants import BOS_ID, SEPARATOR
from gemma_prompt.models.info import ModelInfo, PromptWrapping
from gemma_prompt.protocols.tokenizer import Tokenizer

from .templates import wrap

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WrappedPrompt:
    """The rewritten prompt text together with its final token ids."""

    text: str
    tokens: list[int]


def check_position(pos: int) -> None:
    """Raise ``TypeError`` or ``ValueError`` unless ``pos`` is a non-negative int."""
    if isinstance(pos, bool) or not isinstance(pos, int):
        msg = f"pos must be an int, got {type(pos).__name__}"
        raise TypeError(msg)
    if pos < 0:
        msg = f"pos must be non-negative, got {pos}"
        raise ValueError(msg)


def needs_separator(wrapping: PromptWrapping) -> bool:
    """Whether prompts for this wrapping mode end with the ``"\\n"`` separator.

    Only PaliGemma uses it. Vision-language prompts are deliberately left
    without it; whether they should get one is unresolved upstream.
    """
    if wrapping is PromptWrapping.PALIGEMMA:
        return True
    elif wrapping is PromptWrapping.VISION_LANGUAGE:
        return False
    elif wrapping is PromptWrapping.PRETRAINED:
        return False
    elif wrapping is PromptWrapping.INSTRUCTION_TUNED:
        return False
    else:
        assert_never(wrapping)


def wrap_prompt(tokenizer: Tokenizer, info: ModelInfo, pos: int, prompt: str) -> WrappedPrompt:
    """Wrap and tokenize ``prompt``, keeping the rewritten text.

    Parameters:
        tokenizer: A loaded tokenizer.
        info: The target model's configuration.
        pos: Tokens already consumed in this conversation; ``0`` starts a
            new conversation.
        prompt: The raw prompt text.

    Returns:
        A ``WrappedPrompt`` holding the templated text and its token ids.

    Raises:
        TokenizationError: If the tokenizer fails to encode the prompt or
            the separator. Nothing is returned in that case.
        ValueError: If ``pos`` is negative.
    """
    check_position(pos)
    text = wrap(info, pos, prompt)
    tokens = list(tokenizer.encode(text))

    # Both pre-trained and instruction-tuned require BOS as first token.
    if pos == 0:
        tokens.insert(0, BOS_ID)

    if needs_separator(info.wrapping):
        tokens.extend(tokenizer.encode(SEPARATOR))

    logger.debug(
        "Wrapped prompt for %s at pos=%d into %d tokens",
        info.wrapping,
        pos,
        len(tokens),
    )
    return WrappedPrompt(text=text, tokens=tokens)


def wrap_and_tokenize(tokenizer: Tokenizer, info: ModelInfo, pos: int, prompt: str) -> list[int]:
    """Return the token ids for ``prompt`` framed for ``info``'s wrapping mode.

    See :func:`wrap_prompt` for parameters and errors.
    """
    return wrap_prompt(tokenizer, info, pos, prompt).tokens
