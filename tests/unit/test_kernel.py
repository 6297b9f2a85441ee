"""
Тесты для Decimal Kernel

Проверяет:
1. Перевод флагов decimal в Error
2. Совмещённое деление с остатком (TRUNC / FLOOR)
3. Копирование, знак, сравнение
4. Научную запись
"""

from decimal import Decimal, getcontext

import pytest

from longreal.core.math import kernel
from longreal.core.math.errors import Error
from longreal.core.math.kernel import (
    DIVMOD_PRECISION,
    EXACT,
    NAN,
    DivModResult,
    KernelResult,
    QuotientRounding,
)


class TestArithmetic:
    """Тесты add/sub/mul/div"""

    def test_rounded_half_even(self):
        assert kernel.add(Decimal("1.25"), Decimal(0), 2).value == Decimal("1.2")
        assert kernel.add(Decimal("1.35"), Decimal(0), 2).value == Decimal("1.4")

    def test_division_precision(self):
        assert kernel.div(Decimal(2), Decimal(3), 4) == KernelResult(Decimal("0.6667"))

    def test_zero_divide(self):
        assert kernel.div(Decimal(1), Decimal(0), 10) == KernelResult(NAN, Error.ZERO_DIVIDE)

    def test_nan_operand(self):
        assert kernel.mul(NAN, Decimal(1), 10).error is Error.NO_OPERAND

    def test_overflow(self):
        result = kernel.mul(Decimal("1e99999999"), Decimal(10), 10)
        assert result.value.is_nan()
        assert result.error is Error.OVERFLOW

    def test_underflow(self):
        tiny = Decimal("1e-99999990")
        result = kernel.mul(tiny, tiny, 10)
        assert result.value.is_nan()
        assert result.error is Error.UNDERFLOW

    def test_global_context_untouched(self):
        """Операции kernel не меняют глобальный decimal контекст"""
        before = getcontext().prec
        kernel.div(Decimal(1), Decimal(7), 60)
        assert getcontext().prec == before


class TestDivMod:
    """Тесты divmod_int"""

    def test_truncated(self):
        assert kernel.divmod_int(Decimal(-7), Decimal(2), DIVMOD_PRECISION) == DivModResult(
            Decimal(-3), Decimal(-1)
        )

    def test_floor(self):
        result = kernel.divmod_int(Decimal(-7), Decimal(2), DIVMOD_PRECISION, QuotientRounding.FLOOR)
        assert (result.quotient, result.remainder) == (Decimal(-4), Decimal(1))

    def test_floor_exact(self):
        result = kernel.divmod_int(Decimal(-6), Decimal(2), DIVMOD_PRECISION, QuotientRounding.FLOOR)
        assert (result.quotient, result.remainder) == (Decimal(-3), Decimal(0))

    def test_quotient_too_long(self):
        """Частное длиннее prec цифр → OUT_OF_DOMAIN"""
        result = kernel.divmod_int(Decimal("1e100"), Decimal(1), 78)
        assert result.error is Error.OUT_OF_DOMAIN
        assert result.quotient.is_nan() and result.remainder.is_nan()

    def test_zero_divisor(self):
        assert kernel.divmod_int(Decimal(1), Decimal(0), 10).error is Error.ZERO_DIVIDE


class TestCopyAndSign:
    """Тесты copy / round_to / negate / absolute"""

    def test_exact_copy(self):
        x = Decimal("1.23456789")
        assert kernel.copy(x, EXACT) == KernelResult(x)
        assert kernel.copy(NAN).error is Error.SUCCESS

    def test_rounded_copy(self):
        assert kernel.copy(Decimal("1.23456789"), 3).value == Decimal("1.23")

    def test_round_nan(self):
        assert kernel.round_to(NAN, 3).error is Error.NO_OPERAND

    def test_negate_and_absolute(self):
        assert kernel.negate(Decimal("2.5")) == Decimal("-2.5")
        assert kernel.absolute(Decimal("-2.5")) == Decimal("2.5")
        assert kernel.negate(NAN).is_nan()


class TestCompare:
    """Тесты compare"""

    @pytest.mark.parametrize(
        "a,b,expected",
        [("1", "2", -1), ("2", "2.00", 0), ("3", "-3", 1)],
    )
    def test_trichotomy(self, a, b, expected):
        assert kernel.compare(Decimal(a), Decimal(b)) == expected

    def test_unordered(self):
        assert kernel.compare(NAN, Decimal(1)) is None
        assert kernel.compare(NAN, NAN) is None


class TestScientific:
    """Тесты to_scientific"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1234.50", "1.2345e3"),
            ("-0.001", "-1e-3"),
            ("7", "7e0"),
            ("0.000", "0"),
            ("NaN", "NaN"),
        ],
    )
    def test_text(self, value, expected):
        assert kernel.to_scientific(Decimal(value)) == expected
