"""
Core: decimal kernel, radix codec, domain values and contracts.

Числовое ядро и доменные значения, не зависящие от внешнего уровня
(интерпретатора, форматирования, конфигурации).
"""
