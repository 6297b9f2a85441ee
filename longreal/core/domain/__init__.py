"""
Domain values.

Контекст точности, протокол видов значений, BasicIO и LongReal.
"""

from longreal.core.domain.precision import (
    PREC_DEFAULT,
    PREC_QUERY,
    PrecisionContext,
    get_context,
    get_precision,
    local_precision,
    set_context,
    set_precision,
)
from longreal.core.domain.variant import NoOperand, ValueKind, kind_of
from longreal.core.domain.basic_io import BasicIO
from longreal.core.domain.long_real import LongReal

__all__ = [
    # Precision
    "PREC_DEFAULT",
    "PREC_QUERY",
    "PrecisionContext",
    "get_context",
    "get_precision",
    "local_precision",
    "set_context",
    "set_precision",
    # Variant protocol
    "NoOperand",
    "ValueKind",
    "kind_of",
    # Values
    "BasicIO",
    "LongReal",
]
