"""Exception types for the vAMM pricing core.

Arithmetic failures subclass ``ArithmeticError`` and signal corrupted or
unexpected account state; they are never retried inside the core.
"""

from __future__ import annotations


class VammError(Exception):
    """Base class for all vAMM core errors."""


class InvalidSwapAmountError(VammError, ValueError):
    """Raised when a swap amount is negative."""

    def __init__(self, swap_amount: int) -> None:
        self.swap_amount = swap_amount
        super().__init__(f"swap_amount must be non-negative: {swap_amount}")


class VammMathError(VammError, ArithmeticError):
    """Raised when an integer step cannot be computed the way the on-chain program does."""


class VammDivisionByZeroError(VammMathError):
    """Raised when a zero reserve, peg or price reaches a division step."""


class VammUnderflowError(VammMathError):
    """Raised when an unsigned subtraction would go below zero."""


class VammOverflowError(VammMathError):
    """Raised when a result does not fit the on-chain 128-bit unsigned width."""
