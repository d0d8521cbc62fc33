"""SentencePiece-backed Gemma tokenizer."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from os import PathLike

import sentencepiece as spm

from gemma_prompt.exceptions import TokenizationError, TokenizerLoadError

logger = logging.getLogger(__name__)


class SentencePieceTokenizer:
    """Gemma tokenizer backed by a SentencePiece model.

    Implements the Tokenizer protocol via structural subtyping. A
    tokenizer built without a model is valid but fails every
    encode/decode call, so a missing model surfaces as an error rather
    than as empty token sequences.

    Set ``show_tokenization=True`` to log every encoded id at DEBUG level.
    """

    __slots__ = ("_processor", "show_tokenization")

    def __init__(
        self,
        model_path: str | PathLike[str] | None = None,
        *,
        show_tokenization: bool = False,
    ) -> None:
        self._processor: spm.SentencePieceProcessor | None = None
        self.show_tokenization = show_tokenization
        if model_path is not None:
            self._processor = _load_from_file(str(model_path))

    @classmethod
    def from_serialized(
        cls, model_proto: bytes, *, show_tokenization: bool = False
    ) -> SentencePieceTokenizer:
        """Build a tokenizer from a serialized SentencePiece model proto."""
        tokenizer = cls(show_tokenization=show_tokenization)
        tokenizer.deserialize(model_proto)
        return tokenizer

    @property
    def is_loaded(self) -> bool:
        return self._processor is not None

    @property
    def vocab_size(self) -> int:
        return self._require("vocab_size").GetPieceSize()

    def serialize(self) -> bytes:
        """Return the loaded model as a serialized proto."""
        return self._require("serialize").serialized_model_proto()

    def deserialize(self, model_proto: bytes) -> None:
        """Replace the loaded model with one read from a serialized proto."""
        self._processor = _load_from_proto(model_proto)

    def encode(self, text: str) -> list[int]:
        """Encode text into vocabulary ids."""
        processor = self._require("encode")
        try:
            ids: list[int] = processor.EncodeAsIds(text)
        except (RuntimeError, TypeError, ValueError) as exc:
            msg = f"Failed to encode {len(text)} characters"
            raise TokenizationError(msg, operation="encode") from exc
        if self.show_tokenization:
            for i, token_id in enumerate(ids):
                logger.debug("%3d: %d", i, token_id)
        return ids

    def encode_pieces(self, text: str) -> list[str]:
        """Encode text into sub-word pieces."""
        processor = self._require("encode_pieces")
        try:
            return processor.EncodeAsPieces(text)
        except (RuntimeError, TypeError, ValueError) as exc:
            msg = f"Failed to encode {len(text)} characters into pieces"
            raise TokenizationError(msg, operation="encode_pieces") from exc

    def decode(self, ids: Sequence[int]) -> str:
        """Decode vocabulary ids back into text."""
        processor = self._require("decode")
        try:
            return processor.DecodeIds(list(ids))
        except (RuntimeError, TypeError, ValueError, IndexError) as exc:
            msg = f"Failed to decode {len(ids)} token ids"
            raise TokenizationError(msg, operation="decode") from exc

    def _require(self, operation: str) -> spm.SentencePieceProcessor:
        if self._processor is None:
            msg = f"Cannot {operation}: no tokenizer model is loaded"
            raise TokenizationError(msg, operation=operation)
        return self._processor

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "empty"
        return f"{type(self).__name__}({state})"


def _load_from_file(path: str) -> spm.SentencePieceProcessor:
    logger.debug("Loading tokenizer model from %s", path)
    processor = spm.SentencePieceProcessor()
    try:
        ok = processor.Load(path)
    except (OSError, RuntimeError) as exc:
        msg = f"Failed to load the tokenizer file {path!r}"
        raise TokenizerLoadError(msg, source=path) from exc
    if ok is False:
        msg = f"Failed to load the tokenizer file {path!r}"
        raise TokenizerLoadError(msg, source=path)
    return processor


def _load_from_proto(model_proto: bytes) -> spm.SentencePieceProcessor:
    source = f"serialized proto size={len(model_proto)}"
    logger.debug("Loading tokenizer model from %s", source)
    processor = spm.SentencePieceProcessor()
    try:
        ok = processor.LoadFromSerializedProto(model_proto)
    except (OSError, RuntimeError, TypeError, ValueError) as exc:
        msg = f"Failed to load the tokenizer from serialized proto ({source})"
        raise TokenizerLoadError(msg, source=source) from exc
    if ok is False:
        msg = f"Failed to load the tokenizer from serialized proto ({source})"
        raise TokenizerLoadError(msg, source=source)
    return processor
