"""
Variant Protocol — виды значений и sentinel-результаты диспетчеризации

Бинарная операция над значениями произвольного вида возвращает:
- NotImplemented (встроенный sentinel Python) — виды операндов не совпали,
  внешний уровень пробует отражённую операцию или сообщает об ошибке типа
- NoOperand — операция корректна по типам, но результат не определён
  (например, сравнение с NaN)
- обычное значение — успешный результат (возможно, с прикреплённым Error)
"""

from enum import Enum
from typing import Any, Final


class ValueKind(str, Enum):
    """Вид значения в динамически типизированном движке."""

    UNKNOWN = "UNKNOWN"
    LONG_REAL = "LONG_REAL"


def kind_of(value: Any) -> ValueKind:
    """Вид произвольного операнда; объекты без атрибута kind → UNKNOWN."""
    kind = getattr(value, "kind", ValueKind.UNKNOWN)
    return kind if isinstance(kind, ValueKind) else ValueKind.UNKNOWN


class _NoOperandType:
    """
    Sentinel «результат не определён».

    Не является ни истиной, ни ложью: bool(NoOperand) бросает TypeError,
    чтобы неопределённое сравнение не превратилось молча в False.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        raise TypeError("NoOperand has no truth value")

    def __repr__(self) -> str:
        return "NoOperand"

    def __reduce__(self):
        return (_NoOperandType, ())


NoOperand: Final = _NoOperandType()
