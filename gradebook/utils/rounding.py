"""
Half-up rounding.

Python's round() is banker's rounding (round(0.5) == 0). Report figures use
half-up rounding instead: 72.5 -> 73, 7.85 -> 7.9 (modulo float representation).
"""
import math


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
