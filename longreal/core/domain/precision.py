"""
Precision Context — точность вычислений LongReal

Точность (число десятичных цифр) задаётся объектом PrecisionContext.
Текущий контекст хранится в ContextVar: каждый поток и каждая asyncio
задача видят свой контекст, создаваемый лениво (как decimal.getcontext()).
Любая операция может получить контекст явно через параметр ctx.

Производные точности:
- eval_prec = precision + 5 — точность промежуточного вычисления
- work_prec = precision + 3 — точность хранимого результата

Guard-цифры поглощают ошибку округления одной операции до финального
round-to-nearest.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Final, Iterator, Optional

from longreal.core.math.kernel import MAX_PRECISION

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# 0 → максимальная точность
PREC_DEFAULT: Final[int] = 0

# Отрицательное значение не меняет точность: set_precision(PREC_QUERY) это запрос
PREC_QUERY: Final[int] = -1

EVAL_GUARD_DIGITS: Final[int] = 5
WORK_GUARD_DIGITS: Final[int] = 3


# =============================================================================
# PRECISION CONTEXT
# =============================================================================


class PrecisionContext:
    """
    Настройка точности LongReal.

    Examples:
        >>> ctx = PrecisionContext(10)
        >>> ctx.set_precision(20)
        10
        >>> ctx.eval_prec, ctx.work_prec
        (25, 23)
    """

    def __init__(self, precision: int = PREC_DEFAULT):
        self._precision = MAX_PRECISION
        self.set_precision(precision)

    def set_precision(self, new: int) -> int:
        """
        Установка точности.

        Args:
            new: Новая точность; 0 или > MAX_PRECISION → MAX_PRECISION,
                отрицательное значение оставляет точность без изменений

        Returns:
            Предыдущая точность
        """
        old = self._precision
        if new == PREC_DEFAULT or new > MAX_PRECISION:
            new = MAX_PRECISION
        if new > 0:
            self._precision = new
            if new != old:
                logger.info("precision_changed", extra={"old": old, "new": new})
        elif new != PREC_QUERY:
            logger.warning("precision_rejected", extra={"requested": new, "kept": old})
        return old

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def eval_prec(self) -> int:
        """Точность промежуточного вычисления."""
        return self._precision + EVAL_GUARD_DIGITS

    @property
    def work_prec(self) -> int:
        """Точность хранимого результата."""
        return self._precision + WORK_GUARD_DIGITS

    def copy(self) -> "PrecisionContext":
        return PrecisionContext(self._precision)

    def __repr__(self) -> str:
        return f"PrecisionContext(precision={self._precision})"


# =============================================================================
# ТЕКУЩИЙ КОНТЕКСТ
# =============================================================================

_CURRENT: ContextVar[PrecisionContext] = ContextVar("longreal_precision")


def get_context() -> PrecisionContext:
    """Текущий контекст (создаётся с PREC_DEFAULT при первом обращении)."""
    try:
        return _CURRENT.get()
    except LookupError:
        ctx = PrecisionContext()
        _CURRENT.set(ctx)
        return ctx


def set_context(ctx: PrecisionContext) -> None:
    _CURRENT.set(ctx)


def resolve(ctx: Optional[PrecisionContext]) -> PrecisionContext:
    """Явно переданный контекст, иначе текущий."""
    return ctx if ctx is not None else get_context()


def set_precision(new: int) -> int:
    """
    Новая точность для текущего потока / задачи; возвращает предыдущую.

    Устанавливается копия текущего контекста: объект, унаследованный
    дочерними задачами, не изменяется.
    """
    ctx = get_context().copy()
    old = ctx.set_precision(new)
    _CURRENT.set(ctx)
    return old


def get_precision() -> int:
    return get_context().precision


@contextmanager
def local_precision(precision: Optional[int] = None) -> Iterator[PrecisionContext]:
    """
    Временный контекст.

    Устанавливает копию текущего контекста (с новой точностью, если задана)
    и восстанавливает прежний контекст на выходе.

    Examples:
        >>> with local_precision(10) as ctx:
        ...     ctx.precision
        10
    """
    ctx = get_context().copy()
    if precision is not None:
        ctx.set_precision(precision)
    token = _CURRENT.set(ctx)
    try:
        yield ctx
    finally:
        _CURRENT.reset(token)
