"""The machine: 64 KiB of memory, instruction fetch and the opcode dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional

from dmgcore import alu
from dmgcore.alu import AluResult
from dmgcore.cpu import Cpu, Flag

MEMORY_SIZE = 0x10000
INTERRUPT_FLAG = 0xFF0F
INTERRUPT_ENABLE = 0xFFFF


class UnknownOpcodeError(Exception):
    """Raised when an opcode has no implementation."""

    def __init__(self, opcode: int) -> None:
        self.opcode = opcode
        super().__init__(f"unknown opcode: 0x{opcode:02X}")


@dataclass
class Gameboy:
    """A CPU attached to a flat 64 KiB address space."""

    cpu: Cpu = field(default_factory=Cpu)
    memory: bytearray = field(default_factory=lambda: bytearray(MEMORY_SIZE))

    def load(self, address: int, data: Iterable[int]) -> None:
        """Copy bytes into memory starting at ``address``."""
        payload = bytes(data)
        if address < 0 or address + len(payload) > MEMORY_SIZE:
            raise ValueError(
                f"{len(payload)} bytes at 0x{address:04X} do not fit in memory"
            )
        self.memory[address : address + len(payload)] = payload

    def fetch_byte(self) -> int:
        """Read the byte at pc and advance pc, wrapping at 16 bits."""
        value = self.memory[self.cpu.pc]
        self.cpu.pc = (self.cpu.pc + 1) & 0xFFFF
        return value

    def fetch_word(self) -> int:
        """Read a little-endian 16-bit operand at pc."""
        low = self.fetch_byte()
        high = self.fetch_byte()
        return high << 8 | low

    def step(self) -> None:
        """Execute one instruction, or wait while halted with no pending interrupt."""
        if self.cpu.halted:
            if not self.memory[INTERRUPT_FLAG] & self.memory[INTERRUPT_ENABLE]:
                return
            self.cpu.halted = False
        self.execute(self.fetch_byte())

    def execute(self, opcode: int) -> None:
        """Run the instruction for ``opcode``; operands are fetched from pc."""
        try:
            handler = _OPCODES[opcode]
        except KeyError:
            raise UnknownOpcodeError(opcode) from None
        handler(self)

    # helpers used by the opcode table

    def _hl_value(self) -> int:
        return self.memory[self.cpu.pair("hl")]

    def _set_flags(self, result: AluResult) -> None:
        self.cpu.set_flag(Flag.Z, result.zero)
        self.cpu.set_flag(Flag.N, result.subtract)
        self.cpu.set_flag(Flag.H, result.half_carry)
        if result.carry is not None:
            self.cpu.set_flag(Flag.C, result.carry)

    def _push(self, value: int) -> None:
        cpu = self.cpu
        cpu.sp = (cpu.sp - 1) & 0xFFFF
        self.memory[cpu.sp] = (value >> 8) & 0xFF
        cpu.sp = (cpu.sp - 1) & 0xFFFF
        self.memory[cpu.sp] = value & 0xFF

    def _pop(self) -> int:
        cpu = self.cpu
        low = self.memory[cpu.sp]
        cpu.sp = (cpu.sp + 1) & 0xFFFF
        high = self.memory[cpu.sp]
        cpu.sp = (cpu.sp + 1) & 0xFFFF
        return high << 8 | low

    def _call(self, target: int) -> None:
        self._push(self.cpu.pc)
        self.cpu.pc = target

    def _ret(self) -> None:
        self.cpu.pc = self._pop()

    def _jump_relative(self, offset: int) -> None:
        signed = offset - 0x100 if offset >= 0x80 else offset
        self.cpu.pc = (self.cpu.pc + signed) & 0xFFFF


Handler = Callable[[Gameboy], None]
Reader = Callable[[Gameboy], int]

# Operand order of the register fields in an opcode; index 6 is (hl).
_REGISTER_ORDER: tuple[Optional[str], ...] = ("b", "c", "d", "e", "h", "l", None, "a")

# Base opcode of each register-operand ALU row, its immediate opcode, and
# whether the result is written back to the accumulator.
_ALU_ROWS = (
    (0x80, 0xC6, alu.add, True),
    (0x90, 0xD6, alu.sub, True),
    (0xA0, 0xE6, alu.and_, True),
    (0xA8, 0xEE, alu.xor, True),
    (0xB0, 0xF6, alu.or_, True),
    (0xB8, 0xFE, alu.compare, False),
)

# Condition names with their offset from the "nz" opcode of each family.
_CONDITION_OFFSETS = (("nz", 0x00), ("z", 0x08), ("nc", 0x10), ("c", 0x18))


def _register_reader(name: str) -> Reader:
    return lambda gb: gb.cpu.register(name)


def _alu_handler(operation: Callable[[int, int], AluResult], store: bool, read: Reader) -> Handler:
    def handler(gb: Gameboy) -> None:
        result = operation(gb.cpu.a, read(gb))
        gb._set_flags(result)
        if store:
            gb.cpu.a = result.value

    return handler


def _load_immediate(name: str) -> Handler:
    return lambda gb: gb.cpu.set_register(name, gb.fetch_byte())


def _load_register(dest: str, src: str) -> Handler:
    return lambda gb: gb.cpu.set_register(dest, gb.cpu.register(src))


def _step_register(name: str, operation: Callable[[int], AluResult]) -> Handler:
    def handler(gb: Gameboy) -> None:
        result = operation(gb.cpu.register(name))
        gb.cpu.set_register(name, result.value)
        gb._set_flags(result)

    return handler


def _step_pair(name: str, delta: int) -> Handler:
    return lambda gb: gb.cpu.set_pair(name, gb.cpu.pair(name) + delta)


def _push_pair(name: str) -> Handler:
    return lambda gb: gb._push(gb.cpu.pair(name))


def _pop_pair(name: str) -> Handler:
    return lambda gb: gb.cpu.set_pair(name, gb._pop())


def _ret_if(condition: str) -> Handler:
    def handler(gb: Gameboy) -> None:
        if gb.cpu.condition(condition):
            gb._ret()

    return handler


def _jump_if(condition: str) -> Handler:
    def handler(gb: Gameboy) -> None:
        target = gb.fetch_word()
        if gb.cpu.condition(condition):
            gb.cpu.pc = target

    return handler


def _call_if(condition: str) -> Handler:
    def handler(gb: Gameboy) -> None:
        target = gb.fetch_word()
        if gb.cpu.condition(condition):
            gb._call(target)

    return handler


def _jump_relative_if(condition: str) -> Handler:
    def handler(gb: Gameboy) -> None:
        offset = gb.fetch_byte()
        if gb.cpu.condition(condition):
            gb._jump_relative(offset)

    return handler


def _nop(gb: Gameboy) -> None:
    pass


def _halt(gb: Gameboy) -> None:
    gb.cpu.halted = True


def _reti(gb: Gameboy) -> None:
    gb._ret()
    gb.cpu.ime = True


def _load_a_absolute(gb: Gameboy) -> None:
    gb.cpu.a = gb.memory[gb.fetch_word()]


def _jump_hl(gb: Gameboy) -> None:
    gb.cpu.pc = gb.cpu.pair("hl")


def _build_table() -> Dict[int, Handler]:
    table: Dict[int, Handler] = {}

    for index, name in enumerate(_REGISTER_ORDER):
        read: Reader = Gameboy._hl_value if name is None else _register_reader(name)
        for base, _, operation, store in _ALU_ROWS:
            table[base + index] = _alu_handler(operation, store, read)
        if name is None:
            continue
        table[0x06 + 8 * index] = _load_immediate(name)
        table[0x04 + 8 * index] = _step_register(name, alu.inc)
        table[0x05 + 8 * index] = _step_register(name, alu.dec)
        for src_index, src in enumerate(_REGISTER_ORDER):
            if src is not None:
                table[0x40 + 8 * index + src_index] = _load_register(name, src)

    for _, immediate, operation, store in _ALU_ROWS:
        table[immediate] = _alu_handler(operation, store, Gameboy.fetch_byte)

    for index, pair in enumerate(("bc", "de", "hl", "sp")):
        table[0x03 + 16 * index] = _step_pair(pair, 1)
        table[0x0B + 16 * index] = _step_pair(pair, -1)

    for index, pair in enumerate(("bc", "de", "hl", "af")):
        table[0xC1 + 16 * index] = _pop_pair(pair)
        table[0xC5 + 16 * index] = _push_pair(pair)

    for condition, offset in _CONDITION_OFFSETS:
        table[0xC0 + offset] = _ret_if(condition)
        table[0xC2 + offset] = _jump_if(condition)
        table[0xC4 + offset] = _call_if(condition)
        table[0x20 + offset] = _jump_relative_if(condition)

    table[0x00] = _nop
    table[0x76] = _halt
    table[0xC3] = lambda gb: setattr(gb.cpu, "pc", gb.fetch_word())
    table[0xC9] = Gameboy._ret
    table[0xCD] = lambda gb: gb._call(gb.fetch_word())
    table[0xD9] = _reti
    table[0xE9] = _jump_hl
    table[0xFA] = _load_a_absolute
    table[0x18] = lambda gb: gb._jump_relative(gb.fetch_byte())
    return table


_OPCODES: Dict[int, Handler] = _build_table()