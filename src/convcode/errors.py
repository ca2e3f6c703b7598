# src/convcode/errors.py
from __future__ import annotations


class ConvCodeError(ValueError):
    """Base class for every precondition failure raised by convcode."""


class InvalidParameters(ConvCodeError):
    """Constraint length < 1, empty generator set, or a generator of the wrong length."""


class LengthMismatch(ConvCodeError):
    """Operands of a fixed-arity primitive differ in length."""


class InvalidInputLength(ConvCodeError):
    """Received sequence is not a whole number of n-bit blocks."""


class InvalidBitSequence(ConvCodeError):
    """A symbol other than 0/1 (or '0'/'1') reached the input boundary."""
