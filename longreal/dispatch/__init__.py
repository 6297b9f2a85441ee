"""Dispatch — операторы LongReal поверх протокола диспетчеризации."""

from .binary_ops import EQUAL, GREATER, LESS, BinaryOpsMixin, int_divide, modulo

__all__ = [
    "BinaryOpsMixin",
    "EQUAL",
    "GREATER",
    "LESS",
    "int_divide",
    "modulo",
]
