"""
Tokenized I/O — преобразования LongReal ⇄ BasicIO

Write path (to_basic_io):
1. Рабочая копия значения, округлённая до eval_prec (значение вызывающего
   кода не изменяется)
2. Цифровые токены kernel для выбранного режима
3. Для SCIENTIFIC/ENGINEERING — цифры порядка в scale base и
   трихотомный знак порядка (PLUS / MINUS / NONE для нулевого)
4. Заполнение BasicIO; ошибка любого шага — запись только с error

Read path (from_basic_io): токены kernel из записи (дробные цифры — из
своего поля), ограничение eval_prec значащих цифр, разбор. Ошибка никогда
не бросается: результат — NaN с конкретным Error.
"""

import logging
from typing import Any, Dict, Optional

from longreal.core.contracts import validate_basic_io
from longreal.core.domain.basic_io import BasicIO
from longreal.core.domain.long_real import LongReal
from longreal.core.domain.precision import PrecisionContext, resolve
from longreal.core.math import kernel, radix
from longreal.core.math.errors import Error
from longreal.core.math.radix import FmtMode, InputTokens, Sign

logger = logging.getLogger(__name__)


def _scale_sign(exp: int) -> Sign:
    if exp > 0:
        return Sign.PLUS
    if exp < 0:
        return Sign.MINUS
    return Sign.NONE


def to_basic_io(
    value: LongReal,
    digits: int,
    mode: FmtMode = FmtMode.SCIENTIFIC,
    base: int = 10,
    scale_base: int = 10,
    ctx: Optional[PrecisionContext] = None,
) -> BasicIO:
    """
    LongReal → BasicIO.

    Args:
        value: Форматируемое значение
        digits: Число значащих цифр мантиссы (в основании base)
        mode: Режим вывода
        base: Основание мантиссы
        scale_base: Основание цифр порядка
        ctx: Контекст точности (default: текущий)

    Returns:
        BasicIO; при ошибке заполнено только поле error
    """
    ctx = resolve(ctx)
    if scale_base not in radix.SUPPORTED_BASES:
        return BasicIO(error=Error.INVALID_PARAM)

    work = kernel.copy(value.value, ctx.eval_prec)
    if not work.error.ok:
        return BasicIO(error=work.error)

    tokens = radix.format_tokens(work.value, digits, base, mode)
    if not tokens.error.ok:
        logger.debug(
            "format_tokens_failed",
            extra={"error": tokens.error.value, "base": base, "mode": mode.value},
        )
        return BasicIO(error=tokens.error)

    scale, sign_scale = "", Sign.NONE
    if mode in (FmtMode.SCIENTIFIC, FmtMode.ENGINEERING):
        sign_scale = _scale_sign(tokens.exp)
        scale, error = radix.exp_to_str(tokens.exp, scale_base)
        if not error.ok:
            return BasicIO(error=error)

    return BasicIO(
        base_significand=base,
        base_scale=scale_base,
        sign_significand=tokens.sign,
        sign_scale=sign_scale,
        intpart=tokens.intpart,
        fracpart=tokens.fracpart,
        scale=scale,
    )


def from_basic_io(io: BasicIO, ctx: Optional[PrecisionContext] = None) -> LongReal:
    """
    BasicIO → новый LongReal.

    Запись с error != SUCCESS даёт NaN с тем же error.
    """
    if not io.ok:
        return LongReal(kernel.NAN, io.error)

    tokens = InputTokens(
        intpart=io.intpart,
        fracpart=io.fracpart,
        sign=io.sign_significand,
        base=io.base_significand,
        exp=io.scale,
        expbase=io.base_scale,
        expsign=io.sign_scale if io.scale else Sign.NONE,
        maxdigits=resolve(ctx).eval_prec,
    )
    result = radix.parse_tokens(tokens)
    if not result.error.ok:
        logger.debug("parse_tokens_failed", extra={"error": result.error.value})
    return LongReal(result.value, result.error)


def basic_io_from_dict(data: Dict[str, Any]) -> BasicIO:
    """
    BasicIO из dict после проверки контракта basic_io.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    validate_basic_io(data)
    return BasicIO.model_validate(data)
