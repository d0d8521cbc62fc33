"""Reserved token ids and protocol strings shared by the Gemma model family."""

from __future__ import annotations

from typing import Final

BOS_ID: Final = 2
EOS_ID: Final = 1

# Never produced by a tokenizer. Marks one slot for an image embedding.
IMAGE_PLACEHOLDER_ID: Final = -2

SEPARATOR: Final = "\n"

BEGIN_IMAGE_PROMPT: Final = "\n\n<start_of_image>"
END_IMAGE_PROMPT: Final = "<end_of_image>\n\n"

START_OF_USER_TURN: Final = "<start_of_turn>user\n"
CONTINUE_USER_TURN: Final = "<end_of_turn>\n<start_of_turn>user\n"
START_OF_MODEL_TURN: Final = "<end_of_turn>\n<start_of_turn>model\n"
