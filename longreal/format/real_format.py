"""RealFormat — политика вывода LongReal в текст и обратный разбор.

Настройки (FormatSettings):
- mode: FIXPOINT / SCIENTIFIC / ENGINEERING / COMPLEMENT2
- base, scale_base: основания мантиссы и цифр порядка
- precision: ограничивается [1, MAX_PRECISION]; 0 или вне диапазона → максимум
- digits: число значащих цифр; ≤ 0 или больше максимума для основания →
  максимум для основания

Максимум цифр для основания = precision × ratio / 643, где ratio — плотность
цифр основания относительно десятичной (2 → 2136, 8 → 712, 16 → 534,
остальные → 643).

Итоговый текст собирается из частей BasicIO через переопределяемые hooks:
    sign + significand_prefix + int + frac + significand_suffix
    [+ scale_prefix + scale + scale_suffix]
"""

import json
import logging
from pathlib import Path
from typing import Any, Final, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator

from longreal.conversion.tokenized import to_basic_io
from longreal.core.contracts import validate_format_settings
from longreal.core.domain.basic_io import BasicIO
from longreal.core.domain.long_real import LongReal
from longreal.core.domain.precision import PREC_DEFAULT, PrecisionContext, resolve
from longreal.core.math.kernel import MAX_PRECISION
from longreal.core.math.radix import SUPPORTED_BASES, FmtMode, Sign, parse_literal

logger = logging.getLogger(__name__)

# =============================================================================
# ПЛОТНОСТЬ ЦИФР
# =============================================================================

_DEFAULT_DIGIT_RATIO: Final[int] = 643

_DIGIT_RATIOS: Final[dict[int, int]] = {
    2: 2136,
    8: 712,
    16: 534,
}

_BASE_PREFIXES: Final[dict[int, str]] = {
    2: "0b",
    8: "0o",
    10: "",
    16: "0x",
}


def max_digits(base: int, precision: int) -> int:
    """
    Максимальное число значащих цифр основания base для precision.

    Examples:
        >>> max_digits(10, 78), max_digits(2, 78), max_digits(16, 10)
        (78, 259, 8)
    """
    ratio = _DIGIT_RATIOS.get(base, _DEFAULT_DIGIT_RATIO)
    return precision * ratio // _DEFAULT_DIGIT_RATIO


# =============================================================================
# SETTINGS
# =============================================================================


class FormatSettings(BaseModel):
    """Нормализованные настройки вывода (immutable)."""

    mode: FmtMode = Field(FmtMode.SCIENTIFIC, description="Режим вывода")
    digits: int = Field(..., ge=1, description="Число значащих цифр мантиссы")
    base: int = Field(10, description="Основание мантиссы")
    scale_base: int = Field(10, description="Основание цифр порядка")
    precision: int = Field(..., ge=1, le=MAX_PRECISION, description="Точность (десятичные цифры)")

    model_config = {"frozen": True}

    @field_validator("base", "scale_base")
    @classmethod
    def validate_base(cls, v: int) -> int:
        if v not in SUPPORTED_BASES:
            raise ValueError(f"base must be one of {SUPPORTED_BASES}, got {v}")
        return v


# =============================================================================
# REAL FORMAT
# =============================================================================


class RealFormat:
    """
    Политика вывода LongReal.

    Hooks (significand_prefix, format_int, scale_prefix, ...) переопределяются
    в наследниках для альтернативных нотаций без изменения числового ядра.

    Examples:
        >>> fmt = RealFormat(FmtMode.SCIENTIFIC, digits=4)
        >>> fmt.format(LongReal.from_literal("1234.5"))
        '1.234e3'
    """

    def __init__(
        self,
        mode: FmtMode = FmtMode.SCIENTIFIC,
        digits: int = 0,
        base: int = 10,
        scale_base: int = 10,
        precision: int = PREC_DEFAULT,
    ):
        self.set_mode(mode, digits, base, scale_base, precision)

    def set_mode(
        self,
        mode: FmtMode,
        digits: int = 0,
        base: int = 10,
        scale_base: int = 10,
        precision: int = PREC_DEFAULT,
    ) -> None:
        """
        Установка режима с нормализацией precision и digits.

        Raises:
            pydantic.ValidationError: base или scale_base не поддерживаются
        """
        if precision <= 0 or precision > MAX_PRECISION:
            precision = MAX_PRECISION
        limit = max(1, max_digits(base, precision))
        if digits <= 0 or digits > limit:
            digits = limit
        self._settings = FormatSettings(
            mode=FmtMode(mode),
            digits=digits,
            base=base,
            scale_base=scale_base,
            precision=precision,
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "RealFormat":
        """
        RealFormat из dict после проверки контракта format_settings.

        Raises:
            jsonschema.ValidationError: Если config не соответствует схеме
        """
        validate_format_settings(dict(config))
        return cls(
            mode=FmtMode(config["mode"]),
            digits=config.get("digits", 0),
            base=config.get("base", 10),
            scale_base=config.get("scale_base", 10),
            precision=config.get("precision", PREC_DEFAULT),
        )

    # -------------------------------------------------------------------------
    # Настройки
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> FormatSettings:
        return self._settings

    @property
    def mode(self) -> FmtMode:
        return self._settings.mode

    @property
    def digits(self) -> int:
        return self._settings.digits

    @property
    def base(self) -> int:
        return self._settings.base

    @property
    def scale_base(self) -> int:
        return self._settings.scale_base

    @property
    def precision(self) -> int:
        return self._settings.precision

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def significand_prefix(self) -> str:
        return _BASE_PREFIXES[self.base]

    def significand_suffix(self) -> str:
        return ""

    def scale_prefix(self) -> str:
        return "e" if self.base == 10 else "@"

    def scale_suffix(self) -> str:
        return ""

    def format_nan(self) -> str:
        return "NaN"

    def format_zero(self) -> str:
        return "0"

    def format_sign(self, sign: Sign) -> str:
        return "-" if sign is Sign.MINUS else ""

    def format_int(self, seq: str) -> str:
        return seq

    def format_frac(self, seq: str) -> str:
        return "." + seq if seq else ""

    def format_scale(self, seq: str, sign: Sign) -> str:
        return self.format_sign(sign) + _BASE_PREFIXES[self.scale_base] + seq

    # -------------------------------------------------------------------------
    # Вывод / разбор
    # -------------------------------------------------------------------------

    def convert(self, value: LongReal, ctx: Optional[PrecisionContext] = None) -> BasicIO:
        """Токенизированное представление value в текущих настройках."""
        return to_basic_io(value, self.digits, self.mode, self.base, self.scale_base, ctx)

    def compose(self, io: BasicIO) -> str:
        """Текст из частей BasicIO через hooks."""
        text = (
            self.format_sign(io.sign_significand)
            + self.significand_prefix()
            + self.format_int(io.intpart)
            + self.format_frac(io.fracpart)
            + self.significand_suffix()
        )
        if io.scale:
            text += self.scale_prefix() + self.format_scale(io.scale, io.sign_scale) + self.scale_suffix()
        return text

    def format(self, value: Any, ctx: Optional[PrecisionContext] = None) -> str:
        """
        Текст значения.

        Returns:
            "" для не-LongReal и при ошибке преобразования,
            format_nan() для NaN, format_zero() для нуля
        """
        if not isinstance(value, LongReal):
            return ""
        if value.is_nan():
            return self.format_nan()
        if value.is_zero():
            return self.format_zero()
        io = self.convert(value, ctx)
        if not io.ok:
            logger.debug("format_failed", extra={"error": io.error.value})
            return ""
        return self.compose(io)

    def parse(self, text: str, ctx: Optional[PrecisionContext] = None) -> LongReal:
        """
        Обратный разбор текста в нотации по умолчанию.

        Литерал без префикса основания читается в base; в режиме COMPLEMENT2
        литерал без явного знака — дополнительный код.
        """
        result = parse_literal(
            text,
            resolve(ctx).eval_prec,
            default_base=self.base,
            complement=self.mode is FmtMode.COMPLEMENT2,
        )
        return LongReal(result.value, result.error)

    def __repr__(self) -> str:
        s = self._settings
        return (
            f"RealFormat(mode={s.mode.value}, digits={s.digits}, base={s.base}, "
            f"scale_base={s.scale_base}, precision={s.precision})"
        )


def load_format_config(path: Union[str, Path]) -> RealFormat:
    """
    RealFormat из JSON-файла настроек.

    Raises:
        FileNotFoundError: Если файл не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        jsonschema.ValidationError: Если настройки не соответствуют схеме
    """
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)
    logger.info("format_config_loaded", extra={"path": str(path)})
    return RealFormat.from_config(config)
