"""8-bit arithmetic and logic operations with their flag results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AluResult:
    """The outcome of an ALU operation.

    ``carry`` is None when the operation leaves the carry flag unchanged.
    """

    value: int
    zero: bool
    subtract: bool
    half_carry: bool
    carry: bool | None = None


def add(a: int, value: int, carry: bool = False) -> AluResult:
    """Add ``value`` and an optional carry-in to ``a``."""
    carry_in = int(bool(carry))
    total = a + value + carry_in
    result = total & 0xFF
    return AluResult(
        value=result,
        zero=result == 0,
        subtract=False,
        half_carry=(a & 0x0F) + (value & 0x0F) + carry_in > 0x0F,
        carry=total > 0xFF,
    )


def sub(a: int, value: int, carry: bool = False) -> AluResult:
    """Subtract ``value`` and an optional borrow-in from ``a``."""
    carry_in = int(bool(carry))
    total = a - value - carry_in
    result = total & 0xFF
    return AluResult(
        value=result,
        zero=result == 0,
        subtract=True,
        half_carry=(a & 0x0F) < (value & 0x0F) + carry_in,
        carry=total < 0,
    )


def _logic(result: int, half_carry: bool) -> AluResult:
    return AluResult(
        value=result,
        zero=result == 0,
        subtract=False,
        half_carry=half_carry,
        carry=False,
    )


def and_(a: int, value: int) -> AluResult:
    """Bitwise AND; sets the half-carry flag and clears carry."""
    return _logic(a & value & 0xFF, True)


def or_(a: int, value: int) -> AluResult:
    """Bitwise OR; clears half-carry and carry."""
    return _logic((a | value) & 0xFF, False)


def xor(a: int, value: int) -> AluResult:
    """Bitwise XOR; clears half-carry and carry."""
    return _logic((a ^ value) & 0xFF, False)


def compare(a: int, value: int) -> AluResult:
    """Flags of ``a - value``; the caller leaves the accumulator untouched."""
    return sub(a, value, False)


def inc(value: int) -> AluResult:
    """Increment by one; the carry flag is not affected."""
    result = (value + 1) & 0xFF
    return AluResult(
        value=result,
        zero=result == 0,
        subtract=False,
        half_carry=(value & 0x0F) == 0x0F,
    )


def dec(value: int) -> AluResult:
    """Decrement by one; the carry flag is not affected."""
    result = (value - 1) & 0xFF
    return AluResult(
        value=result,
        zero=result == 0,
        subtract=True,
        half_carry=(value & 0x0F) == 0x00,
    )