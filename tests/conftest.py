"""Shared fixtures for gemma-prompt tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from gemma_prompt.exceptions import TokenizationError
from gemma_prompt.models.info import ModelInfo, PromptWrapping

# Offset keeps every fake id clear of BOS_ID, EOS_ID and the placeholder.
_OFFSET = 3


class FakeTokenizer:
    """A character-level tokenizer for testing.

    Each character maps to ``ord(ch) + 3``, so encoding is deterministic,
    context-free and exactly invertible. Satisfies the Tokenizer protocol
    without a SentencePiece model file. Every encoded text is recorded in
    ``calls``.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []

    def encode(self, text: str) -> list[int]:
        self.calls.append(text)
        return [ord(ch) + _OFFSET for ch in text]

    def encode_pieces(self, text: str) -> list[str]:
        return list(text)

    def decode(self, ids: Sequence[int]) -> str:
        return "".join(chr(i - _OFFSET) for i in ids)


class FailingTokenizer:
    """Tokenizer whose every operation fails, like one with no model loaded."""

    def encode(self, text: str) -> list[int]:
        raise TokenizationError("encode failed", operation="encode")

    def encode_pieces(self, text: str) -> list[str]:
        raise TokenizationError("encode_pieces failed", operation="encode_pieces")

    def decode(self, ids: Sequence[int]) -> str:
        raise TokenizationError("decode failed", operation="decode")


class SeparatorFailingTokenizer(FakeTokenizer):
    """Encodes prompts normally but fails on the bare ``"\\n"`` separator."""

    def encode(self, text: str) -> list[int]:
        if text == "\n":
            raise TokenizationError("separator failed", operation="encode")
        return super().encode(text)


def make_info(wrapping: PromptWrapping, **kwargs: object) -> ModelInfo:
    """Create a ModelInfo for the given wrapping mode."""
    return ModelInfo(wrapping=wrapping, **kwargs)


@pytest.fixture
def tokenizer() -> FakeTokenizer:
    return FakeTokenizer()


@pytest.fixture(params=list(PromptWrapping), ids=lambda w: w.value)
def any_wrapping(request: pytest.FixtureRequest) -> PromptWrapping:
    return request.param
