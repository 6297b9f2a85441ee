"""Binary-Op Dispatcher — двойная диспетчеризация арифметики и сравнений.

Протокол одного бинарного вызова:
    type-check → NotImplemented
              | вычисление на eval_prec → округление до work_prec
                → прикрепление Error → результат

- Арифметика (+, -, *, /): каждый оператор — свой примитив kernel;
  отражённые формы (__r*__) меняют операнды местами.
- Недистрибутивные операции (%, //): совмещённое деление с остатком,
  независимое от настроенной точности; без округления до work_prec.
- Сравнения: трихотомный результат против битовой маски;
  NaN (unordered) → NoOperand.

Ошибки kernel (деление на ноль и т.п.) не бросаются, а прикрепляются к
результату. Повторных попыток внутри диспетчера нет.
"""

import logging
from decimal import Decimal
from typing import Callable, Final, Optional

from longreal.core.domain.precision import PrecisionContext, resolve
from longreal.core.domain.variant import NoOperand, ValueKind, kind_of
from longreal.core.math import kernel
from longreal.core.math.kernel import (
    DIVMOD_PRECISION,
    MAX_PRECISION,
    KernelResult,
    Primitive,
)

logger = logging.getLogger(__name__)

# Маски сравнения
LESS: Final[int] = 1
EQUAL: Final[int] = 2
GREATER: Final[int] = 4

NonDistributive = Callable[[Decimal, Decimal], KernelResult]


# =============================================================================
# НЕДИСТРИБУТИВНЫЕ ПРИМИТИВЫ
# =============================================================================


def modulo(dividend: Decimal, divisor: Decimal) -> KernelResult:
    """Остаток от целого деления (частное до DIVMOD_PRECISION цифр)."""
    result = kernel.divmod_int(dividend, divisor, DIVMOD_PRECISION)
    return KernelResult(result.remainder, result.error)


def int_divide(dividend: Decimal, divisor: Decimal) -> KernelResult:
    """Целое частное, усечённое к нулю (до MAX_PRECISION цифр)."""
    result = kernel.divmod_int(dividend, divisor, MAX_PRECISION)
    return KernelResult(result.quotient, result.error)


# =============================================================================
# DISPATCH MIXIN
# =============================================================================


class BinaryOpsMixin:
    """
    Операторы Python поверх протокола диспетчеризации.

    Класс-наследник обязан предоставить:
    - kind: ValueKind
    - value: Decimal (payload)
    - clone(), is_nan()
    - конструктор cls(payload, error)
    """

    kind: ValueKind = ValueKind.UNKNOWN

    def _wrap(self, result: KernelResult, operation: str):
        if not result.error.ok:
            logger.debug(
                "kernel_error_attached",
                extra={"operation": operation, "error": result.error.value},
            )
        return type(self)(result.value, result.error)

    def call2(
        self,
        other,
        fct: Primitive,
        swap: bool = False,
        ctx: Optional[PrecisionContext] = None,
    ):
        """
        Типизированная арифметика с разделением eval/work точности.

        Args:
            other: Операнд произвольного вида
            fct: Примитив kernel (add/sub/mul/div)
            swap: Поменять операнды местами (отражённая операция)
            ctx: Контекст точности (default: текущий)

        Returns:
            NotImplemented при несовпадении видов, иначе новое значение
            с прикреплённым статусом kernel
        """
        if kind_of(other) is not self.kind:
            return NotImplemented
        ctx = resolve(ctx)
        a, b = (other.value, self.value) if swap else (self.value, other.value)
        result = fct(a, b, ctx.eval_prec)
        if result.error.ok:
            result = kernel.round_to(result.value, ctx.work_prec)
        return self._wrap(result, fct.__name__)

    def call2_nd(self, other, fct: NonDistributive, swap: bool = False):
        """Типизированная недистрибутивная операция (точность задаёт fct)."""
        if kind_of(other) is not self.kind:
            return NotImplemented
        a, b = (other.value, self.value) if swap else (self.value, other.value)
        return self._wrap(fct(a, b), fct.__name__)

    def call_cmp(self, other, mask: int):
        """
        Сравнение с маской LESS | EQUAL | GREATER.

        Returns:
            NotImplemented при несовпадении видов, NoOperand если хотя бы
            один операнд NaN, иначе bool
        """
        if kind_of(other) is not self.kind:
            return NotImplemented
        cmp = kernel.compare(self.value, other.value)
        if cmp is None:
            return NoOperand
        if cmp < 0:
            return bool(mask & LESS)
        if cmp > 0:
            return bool(mask & GREATER)
        return bool(mask & EQUAL)

    # -------------------------------------------------------------------------
    # Унарные
    # -------------------------------------------------------------------------

    def __pos__(self):
        if self.is_nan():
            return NoOperand
        return self.clone()

    def __neg__(self):
        return self._wrap(KernelResult(kernel.negate(self.value)), "negate")

    def __abs__(self):
        return self._wrap(KernelResult(kernel.absolute(self.value)), "absolute")

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other):
        return self.call2(other, kernel.add)

    def __radd__(self, other):
        return self.call2(other, kernel.add, swap=True)

    def __sub__(self, other):
        return self.call2(other, kernel.sub)

    def __rsub__(self, other):
        return self.call2(other, kernel.sub, swap=True)

    def __mul__(self, other):
        return self.call2(other, kernel.mul)

    def __rmul__(self, other):
        return self.call2(other, kernel.mul, swap=True)

    def __truediv__(self, other):
        return self.call2(other, kernel.div)

    def __rtruediv__(self, other):
        return self.call2(other, kernel.div, swap=True)

    def __mod__(self, other):
        return self.call2_nd(other, modulo)

    def __rmod__(self, other):
        return self.call2_nd(other, modulo, swap=True)

    def __floordiv__(self, other):
        return self.call2_nd(other, int_divide)

    def __rfloordiv__(self, other):
        return self.call2_nd(other, int_divide, swap=True)

    def __divmod__(self, other):
        if kind_of(other) is not self.kind:
            return NotImplemented
        return self // other, self % other

    def __rdivmod__(self, other):
        if kind_of(other) is not self.kind:
            return NotImplemented
        return other // self, other % self

    # Явные имена для внешнего уровня диспетчеризации
    idiv = __floordiv__
    swap_sub = __rsub__
    swap_div = __rtruediv__
    swap_mod = __rmod__
    swap_idiv = __rfloordiv__

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        return self.call_cmp(other, EQUAL)

    def __ne__(self, other):
        return self.call_cmp(other, LESS | GREATER)

    def __lt__(self, other):
        return self.call_cmp(other, LESS)

    def __le__(self, other):
        return self.call_cmp(other, LESS | EQUAL)

    def __gt__(self, other):
        return self.call_cmp(other, GREATER)

    def __ge__(self, other):
        return self.call_cmp(other, GREATER | EQUAL)

    __hash__ = None
