"""
LongReal — десятичное число произвольной точности с разделяемым владением

Значение — handle над payload decimal kernel (конечное число или NaN)
со счётчиком совместного владения (share count).

Дисциплина владения:
- clone() — O(1) aliasing: тот же объект, share count + 1 (не deep copy)
- release() — share count - 1; при нуле payload уничтожается
- move()/assign() — изменение на месте разрешено ТОЛЬКО при share count == 1;
  иначе возвращается False и значение не меняется (copy-on-write gate:
  вызывающий код создаёт новое значение и изменяет его)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. share count ≥ 1, пока значение достижимо
2. Изменение payload разделяемого значения невозможно
3. Ошибка разбора литерала оставляет значение в состоянии NaN
4. Чтение после финального release() → ReleasedValueError
"""

import logging
from decimal import Decimal
from typing import Optional

from longreal.core.domain.precision import PrecisionContext, resolve
from longreal.core.domain.variant import ValueKind
from longreal.core.math import kernel
from longreal.core.math.errors import Error, ReleasedValueError
from longreal.core.math.radix import parse_literal
from longreal.dispatch.binary_ops import BinaryOpsMixin

logger = logging.getLogger(__name__)


class LongReal(BinaryOpsMixin):
    """
    Десятичное число произвольной точности.

    Создаётся пустым (NaN) или из литерала. Результаты арифметики — всегда
    новые значения с share count == 1 и прикреплённым статусом kernel.

    Examples:
        >>> a = LongReal.from_literal("7")
        >>> b = LongReal.from_literal("2")
        >>> str(a % b), str(a // b)
        ('1e0', '3e0')
    """

    kind = ValueKind.LONG_REAL

    # Процессный NaN-sentinel kernel: канонический «неопределённый» payload
    NAN = kernel.NAN

    def __init__(self, payload: Decimal = kernel.NAN, error: Error = Error.SUCCESS):
        self._val: Optional[Decimal] = payload
        self._error = error
        self._refcount = 1

    @classmethod
    def from_literal(
        cls, text: str, ctx: Optional[PrecisionContext] = None
    ) -> "LongReal":
        """
        Новое значение из литерала.

        Ошибка разбора не бросается: результат — NaN с прикреплённым Error.
        """
        result = parse_literal(text, resolve(ctx).eval_prec)
        return cls(result.value, result.error)

    # -------------------------------------------------------------------------
    # Владение
    # -------------------------------------------------------------------------

    @property
    def share_count(self) -> int:
        return self._refcount

    @property
    def is_released(self) -> bool:
        return self._val is None

    def clone(self) -> "LongReal":
        """Aliasing: тот же объект, share count + 1."""
        self._check_alive()
        self._refcount += 1
        return self

    def release(self) -> None:
        """share count - 1; при нуле payload уничтожается."""
        self._check_alive()
        self._refcount -= 1
        if self._refcount <= 0:
            self._val = None
            logger.debug("long_real_destroyed", extra={"value_id": id(self)})

    def move(self, payload: Decimal) -> bool:
        """
        Принять новый payload на месте.

        Returns:
            True если значение уникально (share count == 1) и payload принят,
            False если значение разделяется (значение не изменено)
        """
        self._check_alive()
        if self._refcount != 1:
            logger.debug("in_place_mutation_refused", extra={"share_count": self._refcount})
            return False
        self._val = payload
        self._error = Error.SUCCESS
        return True

    def assign(self, text: str, ctx: Optional[PrecisionContext] = None) -> bool:
        """
        Разобрать литерал в это значение на месте.

        Returns:
            False если значение разделяется (не изменено) или литерал
            некорректен (значение становится NaN с ошибкой разбора)
        """
        self._check_alive()
        if self._refcount != 1:
            logger.debug("in_place_mutation_refused", extra={"share_count": self._refcount})
            return False
        result = parse_literal(text, resolve(ctx).eval_prec)
        self._val = result.value
        self._error = result.error
        return not self.is_nan()

    def _check_alive(self) -> None:
        if self._val is None:
            raise ReleasedValueError("LongReal payload already released")

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Decimal:
        """Payload kernel."""
        self._check_alive()
        return self._val

    @property
    def error(self) -> Error:
        """Статус kernel, прикреплённый при создании значения."""
        return self._error

    def is_nan(self) -> bool:
        return kernel.is_nan(self.value)

    def is_zero(self) -> bool:
        return kernel.is_zero(self.value)

    def __str__(self) -> str:
        return kernel.to_scientific(self.value)

    def __repr__(self) -> str:
        if self._val is None:
            return "LongReal(<released>)"
        if self._error.ok:
            return f"LongReal('{self}')"
        return f"LongReal('{self}', error={self._error.value})"
