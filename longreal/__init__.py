"""
longreal — десятичные числа произвольной точности для скриптового движка

Contains:
- longreal/core/math/      : decimal kernel, radix codec, статусы Error
- longreal/core/domain/    : PrecisionContext, LongReal, BasicIO
- longreal/core/contracts/ : JSON Schema контракты
- longreal/dispatch/       : операторы и сравнения
- longreal/conversion/     : LongReal ⇄ BasicIO
- longreal/format/         : RealFormat
"""

from longreal.core.domain import (
    BasicIO,
    LongReal,
    NoOperand,
    PrecisionContext,
    get_precision,
    local_precision,
    set_precision,
)
from longreal.core.math import Error, FmtMode, LongRealError, ReleasedValueError, Sign
from longreal.conversion import from_basic_io, to_basic_io
from longreal.format import RealFormat, load_format_config

__version__ = "0.1.0"

__all__ = [
    "BasicIO",
    "Error",
    "FmtMode",
    "LongReal",
    "LongRealError",
    "NoOperand",
    "PrecisionContext",
    "RealFormat",
    "ReleasedValueError",
    "Sign",
    "from_basic_io",
    "get_precision",
    "load_format_config",
    "local_precision",
    "set_precision",
    "to_basic_io",
]
