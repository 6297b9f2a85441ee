"""Общие fixtures: каждый тест начинает с чистого контекста точности."""

import pytest

from longreal.core.domain.precision import PrecisionContext, _CURRENT


@pytest.fixture(autouse=True)
def fresh_precision():
    """Контекст с максимальной точностью на время теста."""
    token = _CURRENT.set(PrecisionContext())
    yield
    _CURRENT.reset(token)
