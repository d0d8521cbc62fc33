"""Preset ``ModelInfo`` configurations for known Gemma checkpoints.

These are convenience factories; any configuration can be expressed by
constructing a ``ModelInfo`` directly.
"""

from __future__ import annotations

from gemma_prompt.exceptions import UnknownModelError

from .info import ModelInfo, PromptWrapping

_PRESETS: dict[str, ModelInfo] = {
    "gemma-2b-pt": ModelInfo(name="gemma-2b-pt", wrapping=PromptWrapping.PRETRAINED),
    "gemma-2b-it": ModelInfo(name="gemma-2b-it", wrapping=PromptWrapping.INSTRUCTION_TUNED),
    "gemma-7b-pt": ModelInfo(name="gemma-7b-pt", wrapping=PromptWrapping.PRETRAINED),
    "gemma-7b-it": ModelInfo(name="gemma-7b-it", wrapping=PromptWrapping.INSTRUCTION_TUNED),
    "gemma2-2b-pt": ModelInfo(name="gemma2-2b-pt", wrapping=PromptWrapping.PRETRAINED),
    "gemma2-2b-it": ModelInfo(name="gemma2-2b-it", wrapping=PromptWrapping.INSTRUCTION_TUNED),
    "gemma2-9b-pt": ModelInfo(name="gemma2-9b-pt", wrapping=PromptWrapping.PRETRAINED),
    "gemma2-9b-it": ModelInfo(name="gemma2-9b-it", wrapping=PromptWrapping.INSTRUCTION_TUNED),
    "paligemma-3b-224": ModelInfo(
        name="paligemma-3b-224",
        wrapping=PromptWrapping.PALIGEMMA,
        max_image_batch_size=256,
    ),
    "paligemma2-3b-448": ModelInfo(
        name="paligemma2-3b-448",
        wrapping=PromptWrapping.PALIGEMMA,
        max_image_batch_size=1024,
    ),
    "gemma3-4b-vlm": ModelInfo(
        name="gemma3-4b-vlm",
        wrapping=PromptWrapping.VISION_LANGUAGE,
        max_image_batch_size=256,
    ),
    "gemma3-12b-vlm": ModelInfo(
        name="gemma3-12b-vlm",
        wrapping=PromptWrapping.VISION_LANGUAGE,
        max_image_batch_size=256,
    ),
}


def known_models() -> list[str]:
    """Return the registered preset names, sorted."""
    return sorted(_PRESETS)


def model_info_for(name: str) -> ModelInfo:
    """Look up the ``ModelInfo`` preset for a model name.

    Parameters:
        name: A preset name such as ``"gemma2-2b-it"``. Matching is
            case-insensitive.

    Returns:
        The frozen ``ModelInfo`` for that model.

    Raises:
        UnknownModelError: If no preset is registered under ``name``.
    """
    info = _PRESETS.get(name.strip().lower())
    if info is None:
        msg = f"Unknown model {name!r}; expected one of: {', '.join(known_models())}"
        raise UnknownModelError(msg)
    return info
