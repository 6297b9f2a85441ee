"""
Decimal Kernel — арифметические примитивы поверх decimal

Адаптер над стандартным decimal, реализующий контракт kernel:
- add/sub/mul/div на заданной точности с round-half-even
- совмещённое деление с остатком (divmod_int) с выбираемым правилом
  округления частного
- трихотомное сравнение с unordered-результатом для NaN
- копирование с округлением, точное отрицание
- предикаты NaN/zero

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Примитив никогда не бросает исключение на численной ошибке:
   результат всегда KernelResult(value, error)
2. error != SUCCESS ⇒ value is NaN
3. Бесконечности наружу не выходят (kernel знает только конечные числа и NaN)
4. Каждая операция выполняется в собственном Context: глобальный контекст
   decimal не читается и не изменяется
"""

from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    Underflow,
)
from enum import Enum
from typing import Callable, Final, NamedTuple, Optional

from longreal.core.math.errors import Error

# =============================================================================
# KERNEL ПАРАМЕТРЫ
# =============================================================================

# Максимальная поддерживаемая точность (десятичные цифры)
MAX_PRECISION: Final[int] = 78

# Максимальное число цифр целого частного при вычислении остатка
DIVMOD_PRECISION: Final[int] = 250

# Граница десятичного порядка (Emax / -Emin)
EXP_MAX: Final[int] = 99_999_999

# Маркер точного копирования (без округления)
EXACT: Final[int] = 0

# Канонический NaN
NAN: Final[Decimal] = Decimal("NaN")


# =============================================================================
# ТИПЫ
# =============================================================================


class KernelResult(NamedTuple):
    """Результат примитива: значение и статус."""

    value: Decimal
    error: Error = Error.SUCCESS


class DivModResult(NamedTuple):
    """Результат совмещённого деления с остатком."""

    quotient: Decimal
    remainder: Decimal
    error: Error = Error.SUCCESS


class QuotientRounding(str, Enum):
    """
    Правило округления целого частного.

    TRUNC — к нулю, остаток имеет знак делимого
    FLOOR — к минус бесконечности, остаток имеет знак делителя
    """

    TRUNC = "TRUNC"
    FLOOR = "FLOOR"


Primitive = Callable[[Decimal, Decimal, int], KernelResult]


# =============================================================================
# CONTEXT
# =============================================================================


def make_context(prec: int) -> Context:
    """
    Изолированный decimal Context для одной операции.

    Traps отключены: ошибки читаются из flags и превращаются в Error.
    """
    return Context(
        prec=prec,
        rounding=ROUND_HALF_EVEN,
        Emax=EXP_MAX,
        Emin=-EXP_MAX,
        traps=[],
        flags=[],
    )


def finish(ctx: Context, value: Decimal) -> KernelResult:
    """Перевод flags контекста в KernelResult."""
    if ctx.flags[DivisionByZero]:
        return KernelResult(NAN, Error.ZERO_DIVIDE)
    if ctx.flags[Overflow] or value.is_infinite():
        return KernelResult(NAN, Error.OVERFLOW)
    if ctx.flags[InvalidOperation] or value.is_nan():
        return KernelResult(NAN, Error.OUT_OF_DOMAIN)
    if ctx.flags[Underflow] and value.is_zero():
        return KernelResult(NAN, Error.UNDERFLOW)
    return KernelResult(value)


# =============================================================================
# ПРЕДИКАТЫ
# =============================================================================


def is_nan(x: Decimal) -> bool:
    return x.is_nan()


def is_zero(x: Decimal) -> bool:
    return x.is_zero()


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def _binary(operation: str, a: Decimal, b: Decimal, prec: int) -> KernelResult:
    if a.is_nan() or b.is_nan():
        return KernelResult(NAN, Error.NO_OPERAND)
    ctx = make_context(prec)
    return finish(ctx, getattr(ctx, operation)(a, b))


def add(a: Decimal, b: Decimal, prec: int) -> KernelResult:
    """a + b, округлённое до prec значащих цифр."""
    return _binary("add", a, b, prec)


def sub(a: Decimal, b: Decimal, prec: int) -> KernelResult:
    """a - b, округлённое до prec значащих цифр."""
    return _binary("subtract", a, b, prec)


def mul(a: Decimal, b: Decimal, prec: int) -> KernelResult:
    """a * b, округлённое до prec значащих цифр."""
    return _binary("multiply", a, b, prec)


def div(a: Decimal, b: Decimal, prec: int) -> KernelResult:
    """
    a / b, округлённое до prec значащих цифр.

    Деление на ноль (включая 0/0) → (NaN, ZERO_DIVIDE).
    """
    if a.is_nan() or b.is_nan():
        return KernelResult(NAN, Error.NO_OPERAND)
    if b.is_zero():
        return KernelResult(NAN, Error.ZERO_DIVIDE)
    return _binary("divide", a, b, prec)


def divmod_int(
    dividend: Decimal,
    divisor: Decimal,
    prec: int,
    rounding: QuotientRounding = QuotientRounding.TRUNC,
) -> DivModResult:
    """
    Совмещённое целое деление с остатком.

    dividend = quotient * divisor + remainder, quotient целое.

    Args:
        dividend: Делимое
        divisor: Делитель
        prec: Максимальное число цифр целого частного
        rounding: Правило округления частного (default: TRUNC)

    Returns:
        DivModResult; частное длиннее prec цифр → OUT_OF_DOMAIN

    Examples:
        >>> divmod_int(Decimal(7), Decimal(2), 250)
        DivModResult(quotient=Decimal('3'), remainder=Decimal('1'), error=<Error.SUCCESS: 'SUCCESS'>)
    """
    if dividend.is_nan() or divisor.is_nan():
        return DivModResult(NAN, NAN, Error.NO_OPERAND)
    if divisor.is_zero():
        return DivModResult(NAN, NAN, Error.ZERO_DIVIDE)

    ctx = make_context(prec)
    quotient = ctx.divide_int(dividend, divisor)
    remainder = ctx.remainder(dividend, divisor)
    if (
        rounding is QuotientRounding.FLOOR
        and not remainder.is_zero()
        and remainder.is_signed() != divisor.is_signed()
    ):
        quotient = ctx.subtract(quotient, 1)
        remainder = ctx.add(remainder, divisor)

    q_status = finish(ctx, quotient)
    if not q_status.error.ok:
        return DivModResult(NAN, NAN, q_status.error)
    r_status = finish(ctx, remainder)
    if not r_status.error.ok:
        return DivModResult(NAN, NAN, r_status.error)
    return DivModResult(quotient, remainder)


# =============================================================================
# КОПИРОВАНИЕ / ЗНАК
# =============================================================================


def round_to(x: Decimal, prec: int) -> KernelResult:
    """Округление до prec значащих цифр (round-half-even)."""
    if x.is_nan():
        return KernelResult(NAN, Error.NO_OPERAND)
    ctx = make_context(prec)
    return finish(ctx, ctx.plus(x))


def copy(x: Decimal, prec: int = EXACT) -> KernelResult:
    """
    Копия значения.

    prec == EXACT → без округления (NaN копируется как NaN без ошибки),
    иначе round_to(x, prec).
    """
    if prec == EXACT:
        return KernelResult(x)
    return round_to(x, prec)


def negate(x: Decimal) -> Decimal:
    """Точное отрицание; NaN остаётся NaN."""
    if x.is_nan():
        return NAN
    return x.copy_negate()


def absolute(x: Decimal) -> Decimal:
    """Точный модуль; NaN остаётся NaN."""
    if x.is_nan():
        return NAN
    return x.copy_abs()


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare(a: Decimal, b: Decimal) -> Optional[int]:
    """
    Трихотомное сравнение.

    Returns:
        -1 / 0 / 1, либо None (unordered) если хотя бы один операнд NaN
    """
    if a.is_nan() or b.is_nan():
        return None
    return (a > b) - (a < b)


# =============================================================================
# ТЕКСТ
# =============================================================================


def to_scientific(x: Decimal) -> str:
    """
    Десятичная научная запись без лишних нулей.

    Examples:
        >>> to_scientific(Decimal("1234.50"))
        '1.2345e3'
        >>> to_scientific(Decimal("-0.001"))
        '-1e-3'
    """
    if x.is_nan():
        return "NaN"
    if x.is_zero():
        return "0"
    sign, digits, _ = x.as_tuple()
    text = "".join(str(d) for d in digits).rstrip("0")
    mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
    return f"{'-' if sign else ''}{mantissa}e{x.adjusted()}"
