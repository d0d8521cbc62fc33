#!/usr/bin/env python3
"""Multi-turn and vision-language prompt construction.

Demonstrates:
  1. An instruction-tuned conversation: BOS on the first turn only
  2. A PaliGemma prompt with its separately encoded "\\n" separator
  3. A Gemma 3 vision prompt with image placeholder blocks, and how to
     locate the placeholders again for embedding substitution

Requirements:
    pip install gemma-prompt
    A Gemma SentencePiece model file, passed as the first argument.
"""

from __future__ import annotations

import logging
import sys

from gemma_prompt import (
    SentencePieceTokenizer,
    count_placeholders,
    image_block_layout,
    model_info_for,
    wrap_and_tokenize,
    wrap_vlm,
)


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: multimodal_prompt.py TOKENIZER_PATH", file=sys.stderr)
        sys.exit(2)
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    tokenizer = SentencePieceTokenizer(sys.argv[1])

    # 1. Instruction-tuned, two turns.
    chat = model_info_for("gemma2-2b-it")
    first = wrap_and_tokenize(tokenizer, chat, 0, "Write a haiku about the sea.")
    pos = len(first) + 20  # pretend the model answered with 20 tokens
    second = wrap_and_tokenize(tokenizer, chat, pos, "Now one about mountains.")
    print(f"turn 1: {len(first)} tokens, starts with {first[:3]}")
    print(f"turn 2: {len(second)} tokens, starts with {second[:3]}")

    # 2. PaliGemma.
    pali = model_info_for("paligemma-3b-224")
    caption = wrap_and_tokenize(tokenizer, pali, 0, "caption en")
    print(f"paligemma: {caption}")

    # 3. Gemma 3 vision.
    vlm = model_info_for("gemma3-4b-vlm")
    max_batch = vlm.max_image_batch_size or 256
    tokens = wrap_and_tokenize(tokenizer, vlm, 0, "What is in this picture?")
    wrap_vlm(tokenizer, vlm, 0, tokens, 256, max_batch)
    layout = image_block_layout(tokenizer, vlm, 0, 256, max_batch)
    print(f"vision: {len(tokens)} tokens, {count_placeholders(tokens)} placeholders")
    for span in layout.placeholder_spans():
        print(f"  image slots {span.start}..{span.stop - 1}")


if __name__ == "__main__":
    main()
