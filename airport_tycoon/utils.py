"""Utility functions shared by the engine modules."""

import math
import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def format_currency(amount: float) -> str:
    """
    Format cash as whole dollars with thousand separators.

    Args:
        amount: Cash value to format

    Returns:
        Formatted string like "$80,000" or "-$3,000"

    Examples:
        >>> format_currency(80000)
        '$80,000'
        >>> format_currency(-3000.4)
        '-$3,000'
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


def random_int(rng: random.Random, minimum: int, maximum: int) -> int:
    """Random integer in [minimum, maximum], both inclusive."""
    return rng.randint(minimum, maximum)


def random_element(rng: random.Random, items: Sequence[T]) -> T:
    return items[rng.randrange(len(items))]


def generate_flight_number(rng: random.Random, prefixes: List[str]) -> str:
    """Airline prefix followed by a three digit number, e.g. ``LH456``."""
    return f"{random_element(rng, prefixes)}{random_int(rng, 100, 999)}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def terminal_gate_name(number: int, gates_per_terminal: int) -> str:
    """
    Name the n-th gate (1-based), filling terminals A, B, C, ... in turn.

    Examples:
        >>> terminal_gate_name(1, 3)
        'Gate A1'
        >>> terminal_gate_name(5, 3)
        'Gate B2'
    """
    terminal = chr(ord("A") + (number - 1) // gates_per_terminal)
    return f"Gate {terminal}{(number - 1) % gates_per_terminal + 1}"
