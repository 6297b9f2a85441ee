"""
Radix Codec — цифровые токены в системах счисления 2/8/10/16

Двунаправленное преобразование между Decimal и цифровыми токенами:
- format_tokens: Decimal → целая часть, дробная часть, порядок, знак
- parse_tokens: токены → Decimal (с ограничением на число значащих цифр)
- scan_literal / parse_literal: разбор текстового литерала

Режимы вывода:
- FIXPOINT: без порядка
- SCIENTIFIC: одна ведущая значащая цифра + порядок
- ENGINEERING: порядок кратен 3
- COMPLEMENT2: дополнительный код (только основания 2/8/16)

Порядок — всегда степень основания мантиссы; scale base определяет лишь
систему счисления, в которой записаны цифры порядка.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Выводимые цифры принадлежат своему основанию (0-9, A-F в верхнем регистре)
2. Недесятичные преобразования точные (Fraction), округление — half-even
3. В COMPLEMENT2 ведущая цифра ≥ base/2 означает отрицательное значение
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Final, NamedTuple, Optional

from longreal.core.math.errors import Error
from longreal.core.math.kernel import (
    EXP_MAX,
    MAX_PRECISION,
    NAN,
    KernelResult,
    finish,
    make_context,
)

# =============================================================================
# ПАРАМЕТРЫ I/O
# =============================================================================

SUPPORTED_BASES: Final[tuple[int, ...]] = (2, 8, 10, 16)
COMPLEMENT_BASES: Final[tuple[int, ...]] = (2, 8, 16)

# Двоичных цифр на MAX_PRECISION десятичных
BINPRECISION: Final[int] = MAX_PRECISION * 2136 // 643

# Максимальная длина цифровой последовательности
IO_BUFFER_DIGITS: Final[int] = BINPRECISION + 5

# Граница порядка (в степенях основания) для недесятичных оснований
IO_EXP_LIMIT: Final[int] = 16384

DIGITS: Final[str] = "0123456789ABCDEF"

_BASE_PREFIXES: Final[dict[str, int]] = {"b": 2, "o": 8, "d": 10, "x": 16}


# =============================================================================
# ENUMS
# =============================================================================


class Sign(str, Enum):
    """Знак цифровой последовательности."""

    NONE = "NONE"
    PLUS = "PLUS"
    MINUS = "MINUS"
    COMPL2 = "COMPL2"


class FmtMode(str, Enum):
    """Режим вывода."""

    FIXPOINT = "FIXPOINT"
    SCIENTIFIC = "SCIENTIFIC"
    ENGINEERING = "ENGINEERING"
    COMPLEMENT2 = "COMPLEMENT2"


# =============================================================================
# ТОКЕНЫ
# =============================================================================


class OutputTokens(NamedTuple):
    """Результат format_tokens; при error != SUCCESS остальные поля пусты."""

    intpart: str = ""
    fracpart: str = ""
    exp: int = 0
    sign: Sign = Sign.NONE
    error: Error = Error.SUCCESS


@dataclass(frozen=True)
class InputTokens:
    """Входные токены для parse_tokens."""

    intpart: str
    fracpart: str = ""
    sign: Sign = Sign.NONE
    base: int = 10
    exp: str = ""
    expbase: int = 10
    expsign: Sign = Sign.NONE
    maxdigits: int = MAX_PRECISION


# =============================================================================
# ЦИФРЫ
# =============================================================================


def digit_value(ch: str) -> int:
    """Значение цифры (регистр не важен), -1 для недопустимого символа."""
    return DIGITS.find(ch.upper()) if len(ch) == 1 else -1


def is_valid_digits(seq: str, base: int) -> bool:
    """True если все символы seq — цифры основания base."""
    return all(0 <= digit_value(ch) < base for ch in seq)


def to_digits(n: int, base: int) -> str:
    """
    Неотрицательное целое в цифры основания base.

    Examples:
        >>> to_digits(255, 16)
        'FF'
        >>> to_digits(0, 2)
        '0'
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, base)
        out.append(DIGITS[r])
    return "".join(reversed(out))


def exp_to_str(exp: int, scale_base: int) -> tuple[str, Error]:
    """Модуль порядка цифрами scale_base."""
    if scale_base not in SUPPORTED_BASES:
        return "", Error.INVALID_PARAM
    return to_digits(abs(exp), scale_base), Error.SUCCESS


# =============================================================================
# ЗНАЧАЩИЕ ЦИФРЫ
# =============================================================================


def _decimal_significand(x: Decimal, digits: int) -> tuple[str, int]:
    rounded = make_context(digits).plus(x)
    seq = "".join(str(d) for d in rounded.as_tuple().digits)
    return seq.ljust(digits, "0")[:digits], rounded.adjusted()


def _radix_significand(
    x: Decimal, base: int, digits: int
) -> Optional[tuple[str, int]]:
    magnitude = Fraction(x)
    k = math.floor(x.adjusted() * math.log(10) / math.log(base))
    if abs(k) > IO_EXP_LIMIT + 1:
        return None

    power = Fraction(base)
    while power**k > magnitude:
        k -= 1
    while power ** (k + 1) <= magnitude:
        k += 1

    n = round(magnitude / power ** (k - digits + 1))
    if n >= base**digits:
        # перенос при округлении: 0.FFF → 1.000
        k += 1
        n = round(magnitude / power ** (k - digits + 1))
    if abs(k) > IO_EXP_LIMIT:
        return None
    return to_digits(n, base).rjust(digits, "0"), k


def significand(x: Decimal, base: int, digits: int) -> tuple[str, int, Error]:
    """
    Первые digits значащих цифр |x| в основании base и порядок.

    |x| ≈ D[0].D[1:] × base^k, округление half-even.

    Returns:
        (D, k, error); error = IO_EXP_OVERFLOW если k вне IO_EXP_LIMIT
    """
    magnitude = x.copy_abs()
    if base == 10:
        seq, k = _decimal_significand(magnitude, digits)
        return seq, k, Error.SUCCESS
    found = _radix_significand(magnitude, base, digits)
    if found is None:
        return "", 0, Error.IO_EXP_OVERFLOW
    return found[0], found[1], Error.SUCCESS


# =============================================================================
# РАСКЛАДКА ПО РЕЖИМАМ
# =============================================================================


def _layout_fixpoint(seq: str, k: int) -> Optional[tuple[str, str]]:
    if k >= 0:
        intlen = k + 1
        if intlen > IO_BUFFER_DIGITS:
            return None
        seq = seq.ljust(intlen, "0")
        return seq[:intlen], seq[intlen:].rstrip("0")
    fracpart = ("0" * (-k - 1) + seq).rstrip("0")
    if len(fracpart) > IO_BUFFER_DIGITS:
        return None
    return "0", fracpart


def _complement(
    intpart: str, fracpart: str, negative: bool, base: int
) -> Optional[tuple[str, str]]:
    """
    Дополнительный код для base ∈ {2, 8, 16}.

    Отрицательное -N/b^f кодируется как b^(w+f) - N при минимальной ширине
    w, у которой ведущая цифра ≥ b/2. Положительное значение с ведущей
    цифрой ≥ b/2 получает ведущий ноль.
    """
    half = base // 2
    if not negative:
        if digit_value(intpart[0]) >= half:
            intpart = "0" + intpart
        if len(intpart) + len(fracpart) > IO_BUFFER_DIGITS:
            return None
        return intpart, fracpart

    n = int(intpart + fracpart, base)
    frac_len = len(fracpart)
    width = 1
    while base ** (width + frac_len) < 2 * n:
        width += 1
    if width + frac_len > IO_BUFFER_DIGITS:
        return None
    encoded = to_digits(base ** (width + frac_len) - n, base).rjust(width + frac_len, "0")
    return encoded[:width], encoded[width:]


def format_tokens(x: Decimal, digits: int, base: int, mode: FmtMode) -> OutputTokens:
    """
    Decimal → цифровые токены.

    Args:
        x: Значение (конечное или NaN)
        digits: Число значащих цифр мантиссы
        base: Основание мантиссы (2, 8, 10, 16)
        mode: Режим вывода

    Returns:
        OutputTokens; ошибки: NO_OPERAND (NaN), INVALID_PARAM,
        IO_BUFFER_OVERFLOW, IO_EXP_OVERFLOW

    Examples:
        >>> format_tokens(Decimal("0.75"), 8, 2, FmtMode.SCIENTIFIC)
        OutputTokens(intpart='1', fracpart='1', exp=-1, sign=<Sign.PLUS: 'PLUS'>, error=<Error.SUCCESS: 'SUCCESS'>)
    """
    if x.is_nan():
        return OutputTokens(error=Error.NO_OPERAND)
    if base not in SUPPORTED_BASES or digits <= 0:
        return OutputTokens(error=Error.INVALID_PARAM)
    if mode is FmtMode.COMPLEMENT2 and base not in COMPLEMENT_BASES:
        return OutputTokens(error=Error.INVALID_PARAM)
    if digits > IO_BUFFER_DIGITS:
        return OutputTokens(error=Error.IO_BUFFER_OVERFLOW)

    if x.is_zero():
        sign = Sign.COMPL2 if mode is FmtMode.COMPLEMENT2 else Sign.NONE
        return OutputTokens("0", "", 0, sign)

    seq, k, error = significand(x, base, digits)
    if not error.ok:
        return OutputTokens(error=error)
    negative = x.is_signed()
    sign = Sign.MINUS if negative else Sign.PLUS

    if mode is FmtMode.SCIENTIFIC:
        return OutputTokens(seq[0], seq[1:].rstrip("0"), k, sign)

    if mode is FmtMode.ENGINEERING:
        shift = k % 3
        seq = seq.ljust(shift + 1, "0")
        return OutputTokens(seq[: shift + 1], seq[shift + 1 :].rstrip("0"), k - shift, sign)

    parts = _layout_fixpoint(seq, k)
    if parts is None:
        return OutputTokens(error=Error.IO_BUFFER_OVERFLOW)
    if mode is FmtMode.FIXPOINT:
        return OutputTokens(parts[0], parts[1], 0, sign)

    encoded = _complement(parts[0], parts[1], negative, base)
    if encoded is None:
        return OutputTokens(error=Error.IO_BUFFER_OVERFLOW)
    return OutputTokens(encoded[0], encoded[1], 0, Sign.COMPL2)


# =============================================================================
# РАЗБОР ТОКЕНОВ
# =============================================================================


def parse_tokens(tokens: InputTokens) -> KernelResult:
    """
    Цифровые токены → Decimal, округлённый до tokens.maxdigits цифр.

    Returns:
        KernelResult; ошибки: BAD_LITERAL (нет цифр), IO_INVALID_CHAR,
        INVALID_PARAM, IO_EXP_OVERFLOW, OVERFLOW
    """
    base = tokens.base
    if base not in SUPPORTED_BASES or tokens.maxdigits <= 0:
        return KernelResult(NAN, Error.INVALID_PARAM)
    intpart = tokens.intpart.upper()
    fracpart = tokens.fracpart.upper()
    if not intpart and not fracpart:
        return KernelResult(NAN, Error.BAD_LITERAL)
    if not (is_valid_digits(intpart, base) and is_valid_digits(fracpart, base)):
        return KernelResult(NAN, Error.IO_INVALID_CHAR)

    exp = 0
    if tokens.exp:
        if tokens.expbase not in SUPPORTED_BASES:
            return KernelResult(NAN, Error.INVALID_PARAM)
        if not is_valid_digits(tokens.exp, tokens.expbase):
            return KernelResult(NAN, Error.IO_INVALID_CHAR)
        exp = int(tokens.exp, tokens.expbase)
        if tokens.expsign is Sign.MINUS:
            exp = -exp
        if abs(exp) > (EXP_MAX if base == 10 else IO_EXP_LIMIT):
            return KernelResult(NAN, Error.IO_EXP_OVERFLOW)

    ctx = make_context(tokens.maxdigits)

    if tokens.sign is Sign.COMPL2:
        if base not in COMPLEMENT_BASES:
            return KernelResult(NAN, Error.INVALID_PARAM)
        digits = intpart + fracpart
        n = int(digits, base)
        if digit_value(digits[0]) >= base // 2:
            n -= base ** len(digits)
        value = Fraction(n, base ** len(fracpart)) * Fraction(base) ** exp
        return finish(ctx, ctx.divide(Decimal(value.numerator), Decimal(value.denominator)))

    minus = tokens.sign is Sign.MINUS
    if base == 10:
        exact = Decimal(f"{'-' if minus else ''}{intpart or '0'}.{fracpart or '0'}E{exp}")
        return finish(ctx, ctx.plus(exact))

    value = Fraction(int(intpart + fracpart, base), base ** len(fracpart)) * Fraction(base) ** exp
    if minus:
        value = -value
    return finish(ctx, ctx.divide(Decimal(value.numerator), Decimal(value.denominator)))


# =============================================================================
# ЛИТЕРАЛЫ
# =============================================================================


def _scan_base(text: str, pos: int, default: int) -> tuple[int, int]:
    marker = text[pos + 1 : pos + 2]
    if text[pos : pos + 1] != "0" or marker.lower() not in _BASE_PREFIXES:
        return default, pos
    base = _BASE_PREFIXES[marker.lower()]
    # В основании 16 "0b"/"0d" также цифры: префикс, только если за ним
    # следует цифра префиксного основания
    if 0 <= digit_value(marker) < default and not 0 <= digit_value(text[pos + 2 : pos + 3]) < base:
        return default, pos
    return base, pos + 2


def _scan_digits(text: str, pos: int, base: int) -> tuple[str, int]:
    start = pos
    while pos < len(text) and 0 <= digit_value(text[pos]) < base:
        pos += 1
    return text[start:pos], pos


def _scan_sign(text: str, pos: int) -> tuple[Sign, int]:
    ch = text[pos : pos + 1]
    if ch == "+":
        return Sign.PLUS, pos + 1
    if ch == "-":
        return Sign.MINUS, pos + 1
    return Sign.NONE, pos


def scan_literal(
    text: str,
    maxdigits: int = MAX_PRECISION,
    default_base: int = 10,
    complement: bool = False,
) -> tuple[Optional[InputTokens], Error]:
    """
    Разбор литерала в InputTokens.

    Грамматика:
        [sign] [0b|0o|0d|0x] digits [. digits] [(e|E|@) [sign] [0b|0o|0d|0x] digits]

    Маркер e/E допустим только при основании мантиссы ≤ 10, маркер @ — всегда.
    complement=True: литерал без явного знака читается как дополнительный код.

    Returns:
        (tokens, SUCCESS) или (None, BAD_LITERAL / IO_INVALID_CHAR)
    """
    text = text.strip()
    sign, pos = _scan_sign(text, 0)
    base, pos = _scan_base(text, pos, default_base)
    intpart, pos = _scan_digits(text, pos, base)
    fracpart = ""
    if text[pos : pos + 1] == ".":
        fracpart, pos = _scan_digits(text, pos + 1, base)
    if not intpart and not fracpart:
        return None, Error.BAD_LITERAL

    exp, expbase, expsign = "", 10, Sign.NONE
    marker = text[pos : pos + 1]
    if marker == "@" or (marker in ("e", "E") and base <= 10):
        expsign, pos = _scan_sign(text, pos + 1)
        expbase, pos = _scan_base(text, pos, 10)
        exp, pos = _scan_digits(text, pos, expbase)
        if not exp:
            return None, Error.BAD_LITERAL

    if pos != len(text):
        return None, Error.IO_INVALID_CHAR
    if complement and sign is Sign.NONE:
        sign = Sign.COMPL2

    tokens = InputTokens(
        intpart=intpart,
        fracpart=fracpart,
        sign=sign,
        base=base,
        exp=exp,
        expbase=expbase,
        expsign=expsign,
        maxdigits=maxdigits,
    )
    return tokens, Error.SUCCESS


def parse_literal(
    text: str,
    maxdigits: int = MAX_PRECISION,
    default_base: int = 10,
    complement: bool = False,
) -> KernelResult:
    """
    Литерал → Decimal; ошибка разбора → (NaN, error).

    Examples:
        >>> parse_literal("0x1.8")
        KernelResult(value=Decimal('1.5'), error=<Error.SUCCESS: 'SUCCESS'>)
        >>> parse_literal("12abc").error
        <Error.IO_INVALID_CHAR: 'IO_INVALID_CHAR'>
    """
    tokens, error = scan_literal(text, maxdigits, default_base, complement)
    if tokens is None:
        return KernelResult(NAN, error)
    return parse_tokens(tokens)
