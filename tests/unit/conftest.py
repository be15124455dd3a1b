"""
Общие fixtures: прогон value-слоя на каждом доступном backend-е.
"""

import pytest

from src.bigmath.calculator import (
    DecimalCalculator,
    GmpCalculator,
    NativeCalculator,
    use_calculator,
)

BACKEND_PARAMS = [
    pytest.param(NativeCalculator, id="native"),
    pytest.param(
        DecimalCalculator,
        id="decimal",
        marks=pytest.mark.skipif(
            not DecimalCalculator.is_available(), reason="_decimal accelerator is not available"
        ),
    ),
    pytest.param(
        GmpCalculator,
        id="gmp",
        marks=pytest.mark.skipif(not GmpCalculator.is_available(), reason="gmpy2 is not installed"),
    ),
]


@pytest.fixture(params=BACKEND_PARAMS)
def calculator(request):
    """Calculator процесса, подменённый на конкретный backend на время теста."""
    instance = request.param()
    with use_calculator(instance):
        yield instance
