# scalar_aad/errors.py
"""
Exceptions raised by the scalar AAD package.

Floating-point edge cases (division by zero, overflow) are never errors:
they yield inf/NaN and propagate numerically.
"""


class AADError(ValueError):
    """Base class for errors raised by this package."""


class GraphError(AADError):
    """Structural misuse of the computation graph (mixed tapes, unknown ids or op tags)."""


class ConstructionError(AADError):
    """A fixed-size parameter array was built with the wrong number of values."""

    def __init__(self, what: str, expected: int, actual: int):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: expected exactly {expected} values, got {actual}")


class GradientCheckError(AADError):
    """Reverse-mode partial disagrees with its central-difference estimate."""

    def __init__(self, index: int, analytic: float, numeric: float):
        self.index = index
        self.analytic = analytic
        self.numeric = numeric
        super().__init__(
            f"gradient mismatch at input {index}: reverse-mode {analytic!r}, "
            f"central difference {numeric!r}"
        )
