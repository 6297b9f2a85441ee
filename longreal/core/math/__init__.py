"""
Core math modules для longreal

Decimal kernel (арифметика со статусом Error) и radix codec
(цифровые токены в основаниях 2/8/10/16).
"""

# Errors
from longreal.core.math.errors import Error, LongRealError, ReleasedValueError

# Decimal Kernel
from longreal.core.math.kernel import (
    DIVMOD_PRECISION,
    EXACT,
    EXP_MAX,
    MAX_PRECISION,
    NAN,
    DivModResult,
    KernelResult,
    QuotientRounding,
    compare,
    divmod_int,
    round_to,
    to_scientific,
)

# Radix Codec
from longreal.core.math.radix import (
    BINPRECISION,
    COMPLEMENT_BASES,
    IO_BUFFER_DIGITS,
    IO_EXP_LIMIT,
    SUPPORTED_BASES,
    FmtMode,
    InputTokens,
    OutputTokens,
    Sign,
    format_tokens,
    parse_literal,
    parse_tokens,
    scan_literal,
)

__all__ = [
    # Errors
    "Error",
    "LongRealError",
    "ReleasedValueError",
    # Kernel — Constants
    "DIVMOD_PRECISION",
    "EXACT",
    "EXP_MAX",
    "MAX_PRECISION",
    "NAN",
    # Kernel — Types
    "DivModResult",
    "KernelResult",
    "QuotientRounding",
    # Kernel — Functions
    "compare",
    "divmod_int",
    "round_to",
    "to_scientific",
    # Radix — Constants
    "BINPRECISION",
    "COMPLEMENT_BASES",
    "IO_BUFFER_DIGITS",
    "IO_EXP_LIMIT",
    "SUPPORTED_BASES",
    # Radix — Types
    "FmtMode",
    "InputTokens",
    "OutputTokens",
    "Sign",
    # Radix — Functions
    "format_tokens",
    "parse_literal",
    "parse_tokens",
    "scan_literal",
]
