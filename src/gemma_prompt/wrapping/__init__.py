"""Prompt wrapping: turn templates, BOS/separator rules and image blocks."""

from .prompt import WrappedPrompt, check_position, needs_separator, wrap_and_tokenize, wrap_prompt
from .templates import wrap
from .vision import (
    ImageBlockLayout,
    count_placeholders,
    image_block_layout,
    num_image_blocks,
    placeholder_spans,
    wrap_vlm,
)

__all__ = [
    "ImageBlockLayout",
    "WrappedPrompt",
    "check_position",
    "count_placeholders",
    "image_block_layout",
    "needs_separator",
    "num_image_blocks",
    "placeholder_spans",
    "wrap",
    "wrap_and_tokenize",
    "wrap_prompt",
    "wrap_vlm",
]
