"""
Errors — статусы decimal kernel и исключения пакета

Kernel никогда не бросает исключение на численной ошибке: каждый примитив
возвращает результат вместе со статусом Error. Статус прикрепляется к
значению (LongReal.error) и передаётся вызывающему коду как данные.

Исключения зарезервированы для ошибок программирования:
- LongRealError — базовый класс пакета
- ReleasedValueError — чтение payload после финального release()
"""

from enum import Enum


# =============================================================================
# KERNEL STATUS
# =============================================================================


class Error(str, Enum):
    """
    Статус операции decimal kernel.

    SUCCESS — единственный статус, при котором результат осмысленный.
    Все остальные статусы сопровождаются NaN-значением.
    """

    SUCCESS = "SUCCESS"
    NO_OPERAND = "NO_OPERAND"
    ZERO_DIVIDE = "ZERO_DIVIDE"
    OUT_OF_DOMAIN = "OUT_OF_DOMAIN"
    OVERFLOW = "OVERFLOW"
    UNDERFLOW = "UNDERFLOW"
    INVALID_PARAM = "INVALID_PARAM"
    BAD_LITERAL = "BAD_LITERAL"
    IO_INVALID_CHAR = "IO_INVALID_CHAR"
    IO_BUFFER_OVERFLOW = "IO_BUFFER_OVERFLOW"
    IO_EXP_OVERFLOW = "IO_EXP_OVERFLOW"

    @property
    def ok(self) -> bool:
        """True для SUCCESS."""
        return self is Error.SUCCESS


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LongRealError(Exception):
    """Базовое исключение пакета longreal."""
    pass


class ReleasedValueError(LongRealError):
    """
    Обращение к значению, чей share count уже достиг нуля.

    После финального release() payload уничтожен; любое чтение через
    оставшуюся ссылку — ошибка программирования, а не численная ошибка.
    """
    pass
