"""Command that runs a short call/return demonstration on the CPU."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from dmgcore.gameboy import Gameboy


def _demo_machine() -> Gameboy:
    gb = Gameboy()
    gb.cpu.sp = 0xFFFE
    gb.cpu.halted = False
    gb.load(0x0100, [0xCD, 0x10, 0x01, 0x76])  # call 0x0110; halt
    gb.load(0x0110, [0x3E, 0x42, 0xC9])  # ld a,0x42; ret
    gb.cpu.pc = 0x0100
    return gb


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demonstration program and print the CPU state after each step."""
    parser = argparse.ArgumentParser(
        prog="dmgcore",
        description="Run a short call/return program on the emulated CPU.",
    )
    parser.parse_args(argv)

    gb = _demo_machine()
    gb.step()
    print(f"after call: pc = {gb.cpu.pc:04X}, sp = {gb.cpu.sp:04X}")
    gb.step()
    print(f"after load: a = {gb.cpu.a:02X}")
    gb.step()
    print(f"after ret: pc = {gb.cpu.pc:04X}, sp = {gb.cpu.sp:04X}")
    gb.step()
    print(f"final: a = {gb.cpu.a:02X}, halted = {str(gb.cpu.halted).lower()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())