"""
Тесты для Radix Codec

Проверяет:
1. Цифровые утилиты
2. format_tokens во всех режимах и основаниях
3. Дополнительный код (COMPLEMENT2)
4. parse_tokens и ограничение значащих цифр
5. Разбор литералов (префиксы оснований, маркеры порядка, ошибки)
"""

from decimal import Decimal

import pytest

from longreal.core.math.errors import Error
from longreal.core.math.kernel import NAN
from longreal.core.math.radix import (
    BINPRECISION,
    IO_BUFFER_DIGITS,
    FmtMode,
    InputTokens,
    Sign,
    digit_value,
    exp_to_str,
    format_tokens,
    is_valid_digits,
    parse_literal,
    parse_tokens,
    scan_literal,
    significand,
    to_digits,
)


# =============================================================================
# ЦИФРЫ
# =============================================================================


class TestDigits:
    """Тесты цифровых утилит"""

    def test_buffer_constants(self):
        assert BINPRECISION == 259
        assert IO_BUFFER_DIGITS == BINPRECISION + 5

    def test_digit_value(self):
        assert digit_value("7") == 7
        assert digit_value("a") == 10
        assert digit_value("F") == 15
        assert digit_value("g") == -1
        assert digit_value("12") == -1

    def test_is_valid_digits(self):
        assert is_valid_digits("1010", 2)
        assert not is_valid_digits("102", 2)
        assert is_valid_digits("deadBEEF", 16)
        assert is_valid_digits("", 8)

    @pytest.mark.parametrize(
        "n,base,expected",
        [(0, 2, "0"), (5, 2, "101"), (8, 8, "10"), (255, 16, "FF"), (1000, 10, "1000")],
    )
    def test_to_digits(self, n, base, expected):
        assert to_digits(n, base) == expected

    def test_to_digits_rejects_negative(self):
        with pytest.raises(ValueError):
            to_digits(-1, 10)

    def test_exp_to_str(self):
        assert exp_to_str(-20, 16) == ("14", Error.SUCCESS)
        assert exp_to_str(5, 2) == ("101", Error.SUCCESS)
        assert exp_to_str(5, 3) == ("", Error.INVALID_PARAM)


class TestSignificand:
    """Тесты significand"""

    def test_decimal_rounds_half_even(self):
        assert significand(Decimal("1234.5"), 10, 4) == ("1234", 3, Error.SUCCESS)
        assert significand(Decimal("1235.5"), 10, 4) == ("1236", 3, Error.SUCCESS)

    def test_decimal_pads_short_significand(self):
        assert significand(Decimal("0.5"), 10, 3) == ("500", -1, Error.SUCCESS)

    def test_binary(self):
        assert significand(Decimal("0.75"), 2, 4) == ("1100", -1, Error.SUCCESS)

    def test_radix_rounding_carry(self):
        """0.FFF... округляется с переносом в следующий разряд"""
        assert significand(Decimal("255.9"), 16, 2) == ("10", 2, Error.SUCCESS)

    def test_radix_exponent_limit(self):
        _, _, error = significand(Decimal("1e99999"), 2, 8)
        assert error is Error.IO_EXP_OVERFLOW


# =============================================================================
# FORMAT TOKENS
# =============================================================================


class TestFormatTokens:
    """Тесты format_tokens"""

    def test_scientific_decimal(self):
        tokens = format_tokens(Decimal("-1234.5"), 5, 10, FmtMode.SCIENTIFIC)
        assert tokens.intpart == "1"
        assert tokens.fracpart == "2345"
        assert tokens.exp == 3
        assert tokens.sign is Sign.MINUS
        assert tokens.error is Error.SUCCESS

    def test_scientific_binary(self):
        tokens = format_tokens(Decimal("0.75"), 8, 2, FmtMode.SCIENTIFIC)
        assert (tokens.intpart, tokens.fracpart, tokens.exp) == ("1", "1", -1)
        assert tokens.sign is Sign.PLUS

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("12345", ("12", "345", 3)),
            ("0.00125", ("1", "25", -3)),
            ("0.0125", ("12", "5", -3)),
            ("123", ("123", "", 0)),
        ],
    )
    def test_engineering_exponent_multiple_of_three(self, value, expected):
        tokens = format_tokens(Decimal(value), 5, 10, FmtMode.ENGINEERING)
        assert (tokens.intpart, tokens.fracpart, tokens.exp) == expected
        assert tokens.exp % 3 == 0

    @pytest.mark.parametrize(
        "value,base,expected",
        [
            ("10.5", 2, ("1010", "1")),
            ("0.125", 10, ("0", "125")),
            ("0.125", 8, ("0", "1")),
            ("255", 16, ("FF", "")),
            ("1000", 10, ("1000", "")),
        ],
    )
    def test_fixpoint(self, value, base, expected):
        tokens = format_tokens(Decimal(value), 20, base, FmtMode.FIXPOINT)
        assert (tokens.intpart, tokens.fracpart) == expected
        assert tokens.exp == 0

    def test_zero(self):
        tokens = format_tokens(Decimal(0), 10, 10, FmtMode.SCIENTIFIC)
        assert (tokens.intpart, tokens.fracpart, tokens.sign) == ("0", "", Sign.NONE)

    def test_zero_complement(self):
        tokens = format_tokens(Decimal(0), 10, 2, FmtMode.COMPLEMENT2)
        assert tokens.sign is Sign.COMPL2

    def test_nan(self):
        assert format_tokens(NAN, 10, 10, FmtMode.SCIENTIFIC).error is Error.NO_OPERAND

    @pytest.mark.parametrize(
        "digits,base,mode",
        [
            (0, 10, FmtMode.SCIENTIFIC),
            (10, 3, FmtMode.SCIENTIFIC),
            (10, 10, FmtMode.COMPLEMENT2),
        ],
    )
    def test_invalid_params(self, digits, base, mode):
        assert format_tokens(Decimal(1), digits, base, mode).error is Error.INVALID_PARAM

    def test_digits_beyond_buffer(self):
        tokens = format_tokens(Decimal(1), IO_BUFFER_DIGITS + 1, 2, FmtMode.SCIENTIFIC)
        assert tokens.error is Error.IO_BUFFER_OVERFLOW

    def test_fixpoint_beyond_buffer(self):
        tokens = format_tokens(Decimal("1e300"), 10, 10, FmtMode.FIXPOINT)
        assert tokens.error is Error.IO_BUFFER_OVERFLOW


class TestComplement:
    """Тесты дополнительного кода"""

    @pytest.mark.parametrize(
        "value,base,expected",
        [
            ("-1", 16, ("F", "")),
            ("-1", 2, ("1", "")),
            ("-3.25", 2, ("100", "11")),
            ("-8", 8, ("70", "")),
            ("255", 16, ("0FF", "")),
            ("5", 2, ("0101", "")),
            ("3", 16, ("3", "")),
        ],
    )
    def test_encoding(self, value, base, expected):
        tokens = format_tokens(Decimal(value), 20, base, FmtMode.COMPLEMENT2)
        assert (tokens.intpart, tokens.fracpart) == expected
        assert tokens.sign is Sign.COMPL2

    @pytest.mark.parametrize(
        "intpart,fracpart,base,expected",
        [
            ("F", "", 16, "-1"),
            ("100", "11", 2, "-3.25"),
            ("0FF", "", 16, "255"),
            ("70", "", 8, "-8"),
            ("", "8", 16, "-0.5"),
            ("", "4", 16, "0.25"),
            ("", "1", 2, "-0.5"),
        ],
    )
    def test_decoding(self, intpart, fracpart, base, expected):
        tokens = InputTokens(intpart=intpart, fracpart=fracpart, sign=Sign.COMPL2, base=base)
        assert parse_tokens(tokens).value == Decimal(expected)

    def test_decimal_base_rejected(self):
        tokens = InputTokens(intpart="9", sign=Sign.COMPL2, base=10)
        assert parse_tokens(tokens).error is Error.INVALID_PARAM


# =============================================================================
# PARSE TOKENS
# =============================================================================


class TestParseTokens:
    """Тесты parse_tokens"""

    def test_hex_integer(self):
        assert parse_tokens(InputTokens(intpart="ff", base=16)).value == Decimal(255)

    def test_binary_with_binary_exponent(self):
        """1.1b × 2^-3 = 0.1875"""
        tokens = InputTokens(
            intpart="1", fracpart="1", base=2, exp="11", expbase=2, expsign=Sign.MINUS
        )
        assert parse_tokens(tokens).value == Decimal("0.1875")

    def test_decimal_with_exponent(self):
        tokens = InputTokens(intpart="2", fracpart="5", sign=Sign.MINUS, exp="3", expsign=Sign.MINUS)
        assert parse_tokens(tokens).value == Decimal("-0.0025")

    def test_fraction_only(self):
        assert parse_tokens(InputTokens(intpart="", fracpart="8", base=16)).value == Decimal("0.5")

    def test_maxdigits_bound(self):
        """Число значащих цифр ограничено maxdigits"""
        result = parse_tokens(InputTokens(intpart="123456", maxdigits=3))
        assert result.value == Decimal(123000)

    def test_inexact_radix_value_rounded(self):
        """Недесятичная дробь округляется до maxdigits десятичных цифр"""
        result = parse_tokens(InputTokens(intpart="", fracpart="1", base=16, maxdigits=4))
        assert result.value == Decimal("0.0625")
        result = parse_tokens(InputTokens(intpart="", fracpart="5555", base=16, maxdigits=4))
        assert result.value == Decimal("0.3333")

    def test_no_digits(self):
        assert parse_tokens(InputTokens(intpart="")).error is Error.BAD_LITERAL

    def test_invalid_digit(self):
        assert parse_tokens(InputTokens(intpart="12", base=2)).error is Error.IO_INVALID_CHAR

    def test_invalid_exponent_digit(self):
        tokens = InputTokens(intpart="1", exp="9", expbase=8)
        assert parse_tokens(tokens).error is Error.IO_INVALID_CHAR

    def test_unsupported_base(self):
        assert parse_tokens(InputTokens(intpart="1", base=3)).error is Error.INVALID_PARAM

    def test_non_positive_maxdigits(self):
        assert parse_tokens(InputTokens(intpart="1", maxdigits=0)).error is Error.INVALID_PARAM

    def test_radix_exponent_overflow(self):
        tokens = InputTokens(intpart="1", base=2, exp="20000")
        assert parse_tokens(tokens).error is Error.IO_EXP_OVERFLOW

    def test_decimal_overflow(self):
        tokens = InputTokens(intpart="10", exp="99999999")
        result = parse_tokens(tokens)
        assert result.value.is_nan()
        assert result.error is Error.OVERFLOW


# =============================================================================
# ЛИТЕРАЛЫ
# =============================================================================


class TestLiterals:
    """Тесты scan_literal / parse_literal"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("42", "42"),
            ("  42  ", "42"),
            ("+1.5", "1.5"),
            ("-2.5e-3", "-0.0025"),
            ("1E2", "100"),
            (".5", "0.5"),
            ("0x1.8", "1.5"),
            ("0XfF", "255"),
            ("0b101", "5"),
            ("0o17", "15"),
            ("0d99", "99"),
            ("0x1e", "30"),
            ("0x1@2", "256"),
            ("1@0x10", "1e16"),
            ("0b1e-0b11", "0.125"),
        ],
    )
    def test_parse(self, text, expected):
        result = parse_literal(text)
        assert result.error is Error.SUCCESS
        assert result.value == Decimal(expected)

    @pytest.mark.parametrize(
        "text,error",
        [
            ("", Error.BAD_LITERAL),
            ("-", Error.BAD_LITERAL),
            ("0x", Error.BAD_LITERAL),
            ("1e", Error.BAD_LITERAL),
            ("12abc", Error.IO_INVALID_CHAR),
            ("1.2.3", Error.IO_INVALID_CHAR),
            ("0b102", Error.IO_INVALID_CHAR),
        ],
    )
    def test_errors(self, text, error):
        result = parse_literal(text)
        assert result.value.is_nan()
        assert result.error is error

    def test_default_base(self):
        assert parse_literal("FF", default_base=16).value == Decimal(255)
        assert parse_literal("0b11", default_base=16).value == Decimal(3)

    def test_hex_digits_after_leading_zero(self):
        """В основании 16 "0D" / "0B" без цифры основания префикса это цифры"""
        assert parse_literal("0DEAD", default_base=16).value == Decimal(0xDEAD)
        assert parse_literal("0BAD", default_base=16).value == Decimal(0xBAD)
        assert parse_literal("0d19", default_base=16).value == Decimal(19)

    def test_complement_literal(self):
        """Литерал без знака в режиме complement — дополнительный код"""
        assert parse_literal("FF", default_base=16, complement=True).value == Decimal(-1)
        assert parse_literal("7F", default_base=16, complement=True).value == Decimal(127)
        assert parse_literal("-FF", default_base=16, complement=True).value == Decimal(-255)

    def test_scan_tokens(self):
        tokens, error = scan_literal("-0x1.8@-2", maxdigits=20)
        assert error is Error.SUCCESS
        assert tokens == InputTokens(
            intpart="1",
            fracpart="8",
            sign=Sign.MINUS,
            base=16,
            exp="2",
            expbase=10,
            expsign=Sign.MINUS,
            maxdigits=20,
        )

    def test_scan_failure_returns_none(self):
        tokens, error = scan_literal("abc")
        assert tokens is None
        assert error is Error.BAD_LITERAL
