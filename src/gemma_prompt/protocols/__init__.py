"""Protocol definitions for gemma-prompt's pluggable tokenizer backends."""

from .tokenizer import Tokenizer

__all__ = ["Tokenizer"]
