"""gemma-prompt: Prompt-to-token construction for Gemma-family models.

Wrapping:
    wrap, wrap_prompt, wrap_and_tokenize, wrap_vlm, WrappedPrompt,
    ImageBlockLayout, image_block_layout, num_image_blocks,
    count_placeholders, placeholder_spans

Models & Configuration:
    ModelInfo, PromptWrapping, known_models, model_info_for

Protocols (extension points):
    Tokenizer

Tokenizers:
    SentencePieceTokenizer

Constants:
    BOS_ID, EOS_ID, IMAGE_PLACEHOLDER_ID

Exceptions:
    GemmaPromptError, TokenizationError, TokenizerLoadError,
    UnknownModelError, WrappingModeError
"""

from importlib.metadata import PackageNotFoundError, version

from gemma_prompt.constants import BOS_ID, EOS_ID, IMAGE_PLACEHOLDER_ID
from gemma_prompt.exceptions import (
    GemmaPromptError,
    TokenizationError,
    TokenizerLoadError,
    UnknownModelError,
    WrappingModeError,
)
from gemma_prompt.models import ModelInfo, PromptWrapping, known_models, model_info_for
from gemma_prompt.protocols import Tokenizer
from gemma_prompt.tokens import SentencePieceTokenizer
from gemma_prompt.wrapping import (
    ImageBlockLayout,
    WrappedPrompt,
    count_placeholders,
    image_block_layout,
    num_image_blocks,
    placeholder_spans,
    wrap,
    wrap_and_tokenize,
    wrap_prompt,
    wrap_vlm,
)

try:
    __version__ = version("gemma-prompt")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "BOS_ID",
    "EOS_ID",
    "IMAGE_PLACEHOLDER_ID",
    "GemmaPromptError",
    "ImageBlockLayout",
    "ModelInfo",
    "PromptWrapping",
    "SentencePieceTokenizer",
    "TokenizationError",
    "Tokenizer",
    "TokenizerLoadError",
    "UnknownModelError",
    "WrappedPrompt",
    "WrappingModeError",
    "count_placeholders",
    "image_block_layout",
    "known_models",
    "model_info_for",
    "num_image_blocks",
    "placeholder_spans",
    "wrap",
    "wrap_and_tokenize",
    "wrap_prompt",
    "wrap_vlm",
]
