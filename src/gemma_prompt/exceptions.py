"""Custom exceptions for gemma-prompt."""

from __future__ import annotations

__all__ = [
    "GemmaPromptError",
    "TokenizationError",
    "TokenizerLoadError",
    "UnknownModelError",
    "WrappingModeError",
]


class GemmaPromptError(Exception):
    """Base exception for all gemma-prompt errors."""


class TokenizerLoadError(GemmaPromptError):
    """Raised when a tokenizer model cannot be loaded or deserialized.

    This is a deployment defect (missing or corrupt model file), not a
    condition callers are expected to recover from.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class TokenizationError(GemmaPromptError):
    """Raised when encoding or decoding fails on a loaded tokenizer."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


class WrappingModeError(GemmaPromptError):
    """Raised when an operation is called for a model with the wrong wrapping mode."""


class UnknownModelError(GemmaPromptError):
    """Raised when a model preset name is not registered."""
