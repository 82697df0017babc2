"""Runtime values and helpers for Lox.

A Lox value is one of:

* `NIL`, the single instance of `NilVal`
* a Python `bool`
* a Python `float` (every Lox number is a double)
* a Python `str`
* a callable: `FunctionValue` (user function) or `BuiltinFunction` (native)

Because `bool` is a subclass of `int` and never of `float`, a value is a
number exactly when `isinstance(value, float)` holds.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any


class NilVal:
    """Marker object for the Lox `nil` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NilVal)

    def __hash__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()


def is_number(value: Any) -> bool:
    return isinstance(value, float)


def is_truthy(value: Any) -> bool:
    """`nil` and `false` are falsy; every other value is truthy."""
    if isinstance(value, NilVal):
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Lox equality: values of different kinds are never equal."""
    if type(a) is not type(b):
        return False
    if isinstance(a, float):
        # NaN is equal to itself in Lox
        if math.isnan(a) and math.isnan(b):
            return True
        return a == b
    if isinstance(a, (NilVal, bool, str)):
        return a == b
    return a is b


def format_number(n: float) -> str:
    """Format a number the way `print` shows it.

    Integral values drop the fractional part, other values use the shortest
    representation that round-trips.
    """
    if math.isnan(n):
        return 'NaN'
    if math.isinf(n):
        return 'inf' if n > 0 else '-inf'
    if n == 0 and math.copysign(1.0, n) < 0:
        return '-0'
    # Shortest round-trip digits, written out without an exponent
    text = format(Decimal(repr(n)), 'f')
    if text.endswith('.0'):
        text = text[:-2]
    return text


def to_string(value: Any) -> str:
    """Convert a Lox value to its printed representation."""
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    return str(value)

