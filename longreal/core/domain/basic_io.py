"""
BasicIO — токенизированное представление числа

Immutable Pydantic модель — мост между LongReal и текстом:
знак, цифры целой и дробной части, основание, порядок со своим знаком и
основанием, статус.

Запись создаётся форматированием LongReal (write path) или вручную
вызывающим кодом для разбора (read path). Не сохраняется.
Полная совместимость с JSON Schema (longreal/core/contracts/schema/basic_io.json).
"""

from typing import Any

from pydantic import BaseModel, Field

from longreal.core.math.errors import Error
from longreal.core.math.radix import FmtMode, Sign, is_valid_digits

__all__ = ["BasicIO", "FmtMode", "Sign"]


class BasicIO(BaseModel):
    """
    Токенизированное представление числа.

    Immutable модель (frozen=True). При error != SUCCESS остальные поля
    не несут смысла.
    """

    # Основания
    base_significand: int = Field(10, ge=2, le=16, description="Основание мантиссы")
    base_scale: int = Field(10, ge=2, le=16, description="Основание цифр порядка")

    # Знаки
    sign_significand: Sign = Field(Sign.NONE, description="Знак мантиссы")
    sign_scale: Sign = Field(Sign.NONE, description="Знак порядка (NONE для нулевого)")

    # Цифровые последовательности
    intpart: str = Field("", description="Цифры целой части")
    fracpart: str = Field("", description="Цифры дробной части")
    scale: str = Field("", description="Цифры модуля порядка (пусто без порядка)")

    # Статус
    error: Error = Field(Error.SUCCESS, description="Статус преобразования")

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.error.ok

    def is_well_formed(self) -> bool:
        """Все цифры принадлежат объявленным основаниям."""
        return (
            is_valid_digits(self.intpart, self.base_significand)
            and is_valid_digits(self.fracpart, self.base_significand)
            and is_valid_digits(self.scale, self.base_scale)
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-совместимый dict (enum → value)."""
        return self.model_dump(mode="json")
