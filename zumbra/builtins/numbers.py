"""Built-in numeric functions: quadratic roots and random numbers."""

from __future__ import annotations

import math
import random
from typing import Optional

from zumbra.objects import Array, Float, Integer, Null, Object, new_error


def _divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics: division by zero gives an infinity or NaN."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def bhaskara(*args: Object) -> Optional[Object]:
    """Solve a*x^2 + b*x + c = 0 for three integer coefficients.

    Returns Null when there is no real root, a Float for a double root and
    an Array of two Floats otherwise.
    """
    if len(args) != 3:
        return new_error(f"wrong number of arguments. got={len(args)}, want=3")
    if not all(isinstance(arg, Integer) for arg in args):
        return new_error("All arguments to `bhaskara` must be INT")

    a, b, c = (float(arg.value) for arg in args)
    discriminant = b * b - (4 * a) * c

    if discriminant < 0:
        return Null()
    if discriminant == 0:
        return Float(_divide(-b, 2 * a))

    root = math.sqrt(discriminant)
    return Array(
        [
            Float(_divide(-b + root, 2 * a)),
            Float(_divide(-b - root, 2 * a)),
        ]
    )


def random_integer(*args: Object) -> Optional[Object]:
    """Return a random integer between two bounds, inclusive.

    With no arguments the range is 0..10, with one it is 0..n.
    """
    low, high = 0, 10
    if len(args) == 1:
        if not isinstance(args[0], Integer):
            return new_error(
                f"argument to `generateRandomInteger` must be INTEGER, got {args[0].type}"
            )
        high = args[0].value
    elif len(args) == 2:
        if not all(isinstance(arg, Integer) for arg in args):
            return new_error(
                "first argument to `generateRandomInteger` must be INTEGER, "
                f"got {args[0].type}"
            )
        low, high = args[0].value, args[1].value

    low, high = min(low, high), max(low, high)
    return Integer(random.randint(low, high))


def random_float(*args: Object) -> Optional[Object]:
    """Return a random float between two bounds.

    With no arguments the range is 0..10, with one it is 0..n.
    """
    low, high = 0.0, 10.0
    if len(args) == 1:
        arg = args[0]
        if not isinstance(arg, (Integer, Float)):
            return new_error("All arguments to `generateRandomFloat` must be INT or FLOAT")
        high = float(arg.value)
    elif len(args) == 2:
        both_floats = all(isinstance(arg, Float) for arg in args)
        both_ints = all(isinstance(arg, Integer) for arg in args)
        if not (both_floats or both_ints):
            return new_error("All arguments to `generateRandomFloat` must be FLOAT")
        low, high = float(args[0].value), float(args[1].value)

    low, high = min(low, high), max(low, high)
    return Float(low + random.random() * (high - low))