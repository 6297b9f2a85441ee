"""Conversion — токенизированный ввод/вывод LongReal через BasicIO."""

from .tokenized import basic_io_from_dict, from_basic_io, to_basic_io

__all__ = [
    "basic_io_from_dict",
    "from_basic_io",
    "to_basic_io",
]
