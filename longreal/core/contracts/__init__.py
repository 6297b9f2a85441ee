"""
Contract Validation Module

Модуль для валидации JSON контрактов пакета longreal.
"""

from .validators import (
    BasicIOValidator,
    ContractValidator,
    FormatSettingsValidator,
    SchemaLoader,
    validate_basic_io,
    validate_format_settings,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BasicIOValidator",
    "FormatSettingsValidator",
    # Functions
    "validate_basic_io",
    "validate_format_settings",
]
