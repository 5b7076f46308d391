"""CPU register file and flag handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

_REGISTERS = frozenset("abcdehl")
_PAIRS = {"af": ("a", "f"), "bc": ("b", "c"), "de": ("d", "e"), "hl": ("h", "l")}


class Flag(IntFlag):
    """Bits of the F register."""

    Z = 0b1000_0000
    N = 0b0100_0000
    H = 0b0010_0000
    C = 0b0001_0000


_CONDITIONS = {
    "z": (Flag.Z, True),
    "nz": (Flag.Z, False),
    "c": (Flag.C, True),
    "nc": (Flag.C, False),
}


@dataclass
class Cpu:
    """The 8-bit registers, the 16-bit pointers and the CPU state bits."""

    a: int = 0
    b: int = 0
    c: int = 0
    d: int = 0
    e: int = 0
    h: int = 0
    l: int = 0  # noqa: E741
    sp: int = 0
    pc: int = 0
    f: int = 0
    halted: bool = True
    ime: bool = False

    def register(self, name: str) -> int:
        """Return the value of an 8-bit general register (a, b, c, d, e, h, l)."""
        if name not in _REGISTERS:
            raise ValueError(f"unknown register: {name!r}")
        return getattr(self, name)

    def set_register(self, name: str, value: int) -> None:
        """Store a value, truncated to 8 bits, in a general register."""
        if name not in _REGISTERS:
            raise ValueError(f"unknown register: {name!r}")
        setattr(self, name, value & 0xFF)

    def pair(self, name: str) -> int:
        """Return the 16-bit value of af, bc, de, hl or sp."""
        if name == "sp":
            return self.sp
        try:
            high, low = _PAIRS[name]
        except KeyError:
            raise ValueError(f"unknown register pair: {name!r}") from None
        return getattr(self, high) << 8 | getattr(self, low)

    def set_pair(self, name: str, value: int) -> None:
        """Store a value, truncated to 16 bits, in af, bc, de, hl or sp."""
        value &= 0xFFFF
        if name == "sp":
            self.sp = value
            return
        try:
            high, low = _PAIRS[name]
        except KeyError:
            raise ValueError(f"unknown register pair: {name!r}") from None
        setattr(self, high, value >> 8)
        setattr(self, low, value & 0xFF)

    def flag(self, flag: Flag) -> bool:
        """Return whether a flag bit is set."""
        return bool(self.f & flag)

    def set_flag(self, flag: Flag, on: bool) -> None:
        """Set or clear a flag bit."""
        if on:
            self.f |= flag
        else:
            self.f &= ~flag & 0xFF

    def condition(self, name: str) -> bool:
        """Evaluate a branch condition: z, nz, c or nc."""
        try:
            flag, wanted = _CONDITIONS[name]
        except KeyError:
            raise ValueError(f"unknown condition: {name!r}") from None
        return self.flag(flag) == wanted