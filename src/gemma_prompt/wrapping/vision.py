"""Image placeholder expansion for vision-language prompts."""

from __future__ import annotations

import logging
from typing import NamedTuple

from gemma_prompt._math import div_ceil
from gemma_prompt.constants import BEGIN_IMAGE_PROMPT, END_IMAGE_PROMPT, IMAGE_PLACEHOLDER_ID
from gemma_prompt.exceptions import WrappingModeError
from gemma_prompt.models.info import ModelInfo, PromptWrapping
from gemma_prompt.protocols.tokenizer import Tokenizer

from .prompt import wrap_and_tokenize

logger = logging.getLogger(__name__)


class ImageBlockLayout(NamedTuple):
    """Shape of the image blocks :func:`wrap_vlm` prepends to a sequence.

    Each block is ``begin_len`` marker tokens, ``image_batch_size``
    placeholders and ``end_len`` marker tokens.
    """

    num_images: int
    image_batch_size: int
    begin_len: int
    end_len: int

    @property
    def block_len(self) -> int:
        return self.begin_len + self.image_batch_size + self.end_len

    @property
    def prefix_len(self) -> int:
        """Number of tokens the blocks add in front of the original sequence."""
        return self.num_images * self.block_len

    def placeholder_spans(self) -> list[range]:
        """Index ranges holding placeholder tokens, one per block."""
        spans = []
        for i in range(self.num_images):
            start = i * self.block_len + self.begin_len
            spans.append(range(start, start + self.image_batch_size))
        return spans


def num_image_blocks(image_batch_size: int, max_image_batch_size: int) -> int:
    """How many image blocks a batch of ``image_batch_size`` tokens needs."""
    if image_batch_size < 0:
        msg = f"image_batch_size must be non-negative, got {image_batch_size}"
        raise ValueError(msg)
    if max_image_batch_size <= 0:
        msg = f"max_image_batch_size must be positive, got {max_image_batch_size}"
        raise ValueError(msg)
    return div_ceil(image_batch_size, max_image_batch_size)


def _require_vision_language(info: ModelInfo) -> None:
    if info.wrapping is not PromptWrapping.VISION_LANGUAGE:
        msg = (
            f"Image blocks require {PromptWrapping.VISION_LANGUAGE.value!r} wrapping, "
            f"got {info.wrapping.value!r}"
        )
        raise WrappingModeError(msg)


def image_block_layout(
    tokenizer: Tokenizer,
    info: ModelInfo,
    pos: int,
    image_batch_size: int,
    max_image_batch_size: int,
) -> ImageBlockLayout:
    """Re-derive the block layout :func:`wrap_vlm` produces for the same arguments.

    Callers substituting image embeddings use this to locate placeholder
    positions without scanning the sequence.
    """
    _require_vision_language(info)
    num_images = num_image_blocks(image_batch_size, max_image_batch_size)
    begin = wrap_and_tokenize(tokenizer, info, pos, BEGIN_IMAGE_PROMPT)
    end = wrap_and_tokenize(tokenizer, info, pos, END_IMAGE_PROMPT)
    return ImageBlockLayout(num_images, image_batch_size, len(begin), len(end))


def wrap_vlm(
    tokenizer: Tokenizer,
    info: ModelInfo,
    pos: int,
    tokens: list[int],
    image_batch_size: int,
    max_image_batch_size: int,
) -> list[int]:
    """Prepend image blocks to an already wrapped token sequence.

    Each block is the tokens for ``"\\n\\n<start_of_image>"``, then
    ``image_batch_size`` copies of ``IMAGE_PLACEHOLDER_ID``, then the tokens
    for ``"<end_of_image>\\n\\n"``. A batch larger than
    ``max_image_batch_size`` is split into
    ``ceil(image_batch_size / max_image_batch_size)`` identical blocks.

    The marker tokens are built with :func:`wrap_and_tokenize` at ``pos``,
    so at ``pos == 0`` every block starts with ``BOS_ID``.

    Parameters:
        tokenizer: A loaded tokenizer.
        info: The target model's configuration; must use
            ``PromptWrapping.VISION_LANGUAGE``.
        pos: Conversation position the markers are tokenized at.
        tokens: The wrapped prompt tokens. Mutated in place.
        image_batch_size: Placeholder tokens per block.
        max_image_batch_size: Largest image batch the model accepts at once.

    Returns:
        ``tokens``, now starting with the image blocks.

    Raises:
        WrappingModeError: If ``info`` is not a vision-language model.
        ValueError: If the batch sizes are out of range.
        TokenizationError: If the marker text cannot be encoded.
    """
    _require_vision_language(info)
    num_images = num_image_blocks(image_batch_size, max_image_batch_size)

    begin_image_tokens = wrap_and_tokenize(tokenizer, info, pos, BEGIN_IMAGE_PROMPT)
    end_image_tokens = wrap_and_tokenize(tokenizer, info, pos, END_IMAGE_PROMPT)
    block = [
        *begin_image_tokens,
        *([IMAGE_PLACEHOLDER_ID] * image_batch_size),
        *end_image_tokens,
    ]

    for _ in range(num_images):
        tokens[0:0] = block

    logger.debug(
        "Prepended %d image block(s) of %d placeholders (%d tokens total)",
        num_images,
        image_batch_size,
        len(tokens),
    )
    return tokens


def count_placeholders(tokens: list[int]) -> int:
    """Number of image placeholder slots in ``tokens``."""
    return tokens.count(IMAGE_PLACEHOLDER_ID)


def placeholder_spans(tokens: list[int]) -> list[range]:
    """Index ranges of each contiguous run of placeholder tokens."""
    spans = []
    start = None
    for i, token in enumerate(tokens):
        if token == IMAGE_PLACEHOLDER_ID:
            if start is None:
                start = i
        elif start is not None:
            spans.append(range(start, i))
            start = None
    if start is not None:
        spans.append(range(start, len(tokens)))
    return spans
