"""
VectorPath Errors

Typed exceptions raised by the geometry kernel. Most geometric edge cases
degrade to an empty or partial result instead of raising; these cover the
cases where no safe default exists.
"""


class VectorPathError(Exception):
    """Base error for the package."""


class GeometricDegeneracyError(VectorPathError, ZeroDivisionError):
    """A computation divided by a (near) zero magnitude."""


class UnsupportedInputError(VectorPathError, ValueError):
    """Input that a strict helper cannot interpret (malformed data, unknown names)."""
