"""Tokenizer protocol consumed by the prompt wrapper."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Tokenizer(Protocol):
    """Protocol for text-to-ids and ids-to-text conversion.

    The default implementation wraps a SentencePiece model, but any
    backend (HuggingFace tokenizers, a byte-level codec) can be plugged in.
    Implementations signal failure by raising
    :class:`~gemma_prompt.exceptions.TokenizationError`; they must never
    return partial output.
    """

    def encode(self, text: str) -> list[int]:
        """Encode text into vocabulary ids.

        Parameters:
            text: The input text. Control markup such as
                ``<start_of_turn>`` is encoded like any other text.

        Returns:
            The token ids in order. Every id is non-negative.
        """
        ...

    def encode_pieces(self, text: str) -> list[str]:
        """Encode text into sub-word pieces.

        Parameters:
            text: The input text.

        Returns:
            The string pieces, aligned one-to-one with ``encode(text)``.
        """
        ...

    def decode(self, ids: Sequence[int]) -> str:
        """Decode vocabulary ids back into text.

        Parameters:
            ids: Token ids. Placeholder sentinels are not valid input.

        Returns:
            The detokenized text.
        """
        ...
