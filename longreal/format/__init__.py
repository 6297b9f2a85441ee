"""Format — политика вывода LongReal (RealFormat)."""

from .real_format import FormatSettings, RealFormat, load_format_config, max_digits

__all__ = [
    "FormatSettings",
    "RealFormat",
    "load_format_config",
    "max_digits",
]
