"""Shared integer helpers for gemma-prompt."""

from __future__ import annotations


def div_ceil(numerator: int, denominator: int) -> int:
    """Integer division rounding up.

    Callers validate the operands: ``numerator >= 0`` and ``denominator > 0``.
    """
    return -(-numerator // denominator)
