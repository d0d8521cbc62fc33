"""Tests for gemma_prompt.wrapping.vision (image block expansion)."""

from __future__ import annotations

import logging

import pytest

from gemma_prompt.constants import BOS_ID, IMAGE_PLACEHOLDER_ID
from gemma_prompt.exceptions import TokenizationError, WrappingModeError
from gemma_prompt.models.info import PromptWrapping
from gemma_prompt.wrapping.prompt import wrap_and_tokenize
from gemma_prompt.wrapping.vision import (
    ImageBlockLayout,
    count_placeholders,
    image_block_layout,
    num_image_blocks,
    placeholder_spans,
    wrap_vlm,
)
from tests.conftest import FailingTokenizer, FakeTokenizer, make_info

VLM = make_info(PromptWrapping.VISION_LANGUAGE)


def _block(tokenizer: FakeTokenizer, pos: int, image_batch_size: int) -> list[int]:
    begin = wrap_and_tokenize(tokenizer, VLM, pos, "\n\n<start_of_image>")
    end = wrap_and_tokenize(tokenizer, VLM, pos, "<end_of_image>\n\n")
    return [*begin, *([IMAGE_PLACEHOLDER_ID] * image_batch_size), *end]


# ---------------------------------------------------------------------------
# num_image_blocks
# ---------------------------------------------------------------------------


class TestNumImageBlocks:
    """Ceil-division of the image batch."""

    @pytest.mark.parametrize(
        ("batch", "max_batch", "expected"),
        [(10, 4, 3), (8, 4, 2), (1, 256, 1), (256, 256, 1), (257, 256, 2), (0, 4, 0)],
    )
    def test_values(self, batch: int, max_batch: int, expected: int) -> None:
        assert num_image_blocks(batch, max_batch) == expected

    def test_negative_batch_raises(self) -> None:
        with pytest.raises(ValueError, match="image_batch_size"):
            num_image_blocks(-1, 4)

    def test_zero_max_batch_raises(self) -> None:
        with pytest.raises(ValueError, match="max_image_batch_size"):
            num_image_blocks(4, 0)


# ---------------------------------------------------------------------------
# wrap_vlm
# ---------------------------------------------------------------------------


class TestWrapVLM:
    """Image blocks are prepended in front of the original tokens."""

    def test_three_blocks_for_ten_over_four(self, tokenizer: FakeTokenizer) -> None:
        tail = wrap_and_tokenize(tokenizer, VLM, 5, "What is in the picture?")
        original = list(tail)
        result = wrap_vlm(tokenizer, VLM, 5, tail, 10, 4)

        block = _block(tokenizer, 5, 10)
        assert result == block * 3 + original

    def test_placeholder_count(self, tokenizer: FakeTokenizer) -> None:
        result = wrap_vlm(tokenizer, VLM, 5, [100, 101], 10, 4)
        assert count_placeholders(result) == 10 * 3

    def test_tail_unchanged(self, tokenizer: FakeTokenizer) -> None:
        tail = [100, 101, 102]
        result = wrap_vlm(tokenizer, VLM, 3, list(tail), 6, 4)
        assert result[-3:] == tail

    def test_mutates_and_returns_same_list(self, tokenizer: FakeTokenizer) -> None:
        tokens = [100]
        result = wrap_vlm(tokenizer, VLM, 1, tokens, 2, 4)
        assert result is tokens
        assert len(tokens) > 1

    def test_single_block(self, tokenizer: FakeTokenizer) -> None:
        result = wrap_vlm(tokenizer, VLM, 1, [100], 4, 4)
        assert result == _block(tokenizer, 1, 4) + [100]

    def test_marker_text(self, tokenizer: FakeTokenizer) -> None:
        result = wrap_vlm(tokenizer, VLM, 1, [], 2, 2)
        begin_len = len("\n\n<start_of_image>")
        assert tokenizer.decode(result[:begin_len]) == "\n\n<start_of_image>"
        assert result[begin_len : begin_len + 2] == [IMAGE_PLACEHOLDER_ID] * 2
        assert tokenizer.decode(result[begin_len + 2 :]) == "<end_of_image>\n\n"

    def test_markers_encoded_once(self, tokenizer: FakeTokenizer) -> None:
        wrap_vlm(tokenizer, VLM, 1, [], 12, 4)
        assert tokenizer.calls == ["\n\n<start_of_image>", "<end_of_image>\n\n"]

    def test_pos_zero_blocks_start_with_bos(self, tokenizer: FakeTokenizer) -> None:
        result = wrap_vlm(tokenizer, VLM, 0, [], 3, 4)
        assert result[0] == BOS_ID
        assert result == _block(tokenizer, 0, 3)

    def test_zero_batch_does_not_crash(self, tokenizer: FakeTokenizer) -> None:
        tokens = [100, 101]
        result = wrap_vlm(tokenizer, VLM, 1, tokens, 0, 4)
        assert result == [100, 101]
        assert count_placeholders(result) == 0

    @pytest.mark.parametrize(
        "wrapping",
        [
            PromptWrapping.PRETRAINED,
            PromptWrapping.INSTRUCTION_TUNED,
            PromptWrapping.PALIGEMMA,
        ],
    )
    def test_rejects_non_vision_language(
        self, tokenizer: FakeTokenizer, wrapping: PromptWrapping
    ) -> None:
        tokens = [100]
        with pytest.raises(WrappingModeError, match="vision_language"):
            wrap_vlm(tokenizer, make_info(wrapping), 0, tokens, 4, 4)
        assert tokens == [100]
        assert tokenizer.calls == []

    def test_invalid_max_batch_raises(self, tokenizer: FakeTokenizer) -> None:
        with pytest.raises(ValueError):
            wrap_vlm(tokenizer, VLM, 0, [], 4, 0)

    def test_tokenizer_failure_leaves_tokens_untouched(self) -> None:
        tokens = [100]
        with pytest.raises(TokenizationError):
            wrap_vlm(FailingTokenizer(), VLM, 0, tokens, 4, 4)
        assert tokens == [100]

    def test_logs_expansion(self, tokenizer: FakeTokenizer, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="gemma_prompt.wrapping.vision"):
            wrap_vlm(tokenizer, VLM, 1, [], 10, 4)
        assert "3 image block(s) of 10 placeholders" in caplog.text


# ---------------------------------------------------------------------------
# Layout re-derivation
# ---------------------------------------------------------------------------


class TestImageBlockLayout:
    """Callers can locate placeholders without scanning."""

    def test_layout_matches_wrap_vlm(self, tokenizer: FakeTokenizer) -> None:
        layout = image_block_layout(tokenizer, VLM, 2, 10, 4)
        result = wrap_vlm(tokenizer, VLM, 2, [100, 101], 10, 4)

        assert layout.num_images == 3
        assert layout.prefix_len == len(result) - 2
        assert layout.placeholder_spans() == placeholder_spans(result)
        for span in layout.placeholder_spans():
            assert all(result[i] == IMAGE_PLACEHOLDER_ID for i in span)

    def test_block_len(self) -> None:
        layout = ImageBlockLayout(num_images=2, image_batch_size=5, begin_len=3, end_len=4)
        assert layout.block_len == 12
        assert layout.prefix_len == 24
        assert layout.placeholder_spans() == [range(3, 8), range(15, 20)]

    def test_layout_rejects_non_vision_language(self, tokenizer: FakeTokenizer) -> None:
        with pytest.raises(WrappingModeError):
            image_block_layout(tokenizer, make_info(PromptWrapping.PALIGEMMA), 0, 4, 4)


class TestPlaceholderSpans:
    """Runs of placeholder tokens are reported as ranges."""

    def test_no_placeholders(self) -> None:
        assert placeholder_spans([2, 10, 11]) == []

    def test_run_at_end(self) -> None:
        assert placeholder_spans([10, -2, -2]) == [range(1, 3)]

    def test_multiple_runs(self) -> None:
        tokens = [-2, 10, -2, -2, 11]
        assert placeholder_spans(tokens) == [range(0, 1), range(2, 4)]
