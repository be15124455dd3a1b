"""
RoundingMode / DivisionMode — правила округления и деления

RoundingMode применяется при уменьшении scale у BigDecimal и при делении
с округлением. Направления для отрицательных чисел зафиксированы так:
- CEILING: к +∞
- FLOOR:   к −∞
- UP:      от нуля
- DOWN:    к нулю

Таблица (результат округления до целого):

    value   UP  DOWN  CEILING  FLOOR  HALF_UP  HALF_DOWN  HALF_EVEN
     5.5     6     5        6      5        6          5          6
     2.5     3     2        3      2        3          2          2
     1.6     2     1        2      1        2          2          2
     1.1     2     1        2      1        1          1          1
    -1.1    -2    -1       -1     -2       -1         -1         -1
    -2.5    -3    -2       -2     -3       -3         -2         -2
    -5.5    -6    -5       -5     -6       -6         -5         -6
"""

from enum import Enum


class RoundingMode(str, Enum):
    """Режим округления при потере точности."""

    UP = "UP"
    DOWN = "DOWN"
    CEILING = "CEILING"
    FLOOR = "FLOOR"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_CEILING = "HALF_CEILING"
    HALF_FLOOR = "HALF_FLOOR"
    HALF_EVEN = "HALF_EVEN"
    UNNECESSARY = "UNNECESSARY"


class DivisionMode(str, Enum):
    """
    Конвенция целочисленного деления с остатком.

    - TRUNCATE: частное округляется к нулю, остаток имеет знак делимого
    - FLOOR: частное округляется к −∞, остаток имеет знак делителя
      (семантика Python // и %)
    """

    TRUNCATE = "TRUNCATE"
    FLOOR = "FLOOR"
