# dmgcore

A compact core for the Game Boy (DMG) CPU. It models the register file and
flags, the 8-bit arithmetic and logic unit, and a stepper that fetches and
executes instructions from a flat 64 KiB memory.

## Supported instructions

- immediate loads `LD r,n` and register-to-register loads `LD r,r'`
- `LD A,(nn)`
- `ADD`, `SUB`, `AND`, `OR`, `XOR` and `CP` in their register, `(HL)` and
  immediate forms
- 8-bit `INC r` / `DEC r` and 16-bit `INC rr` / `DEC rr` (BC, DE, HL, SP)
- `PUSH` / `POP` for AF, BC, DE and HL
- `JP nn`, `JP cc,nn`, `JP (HL)`, `JR n`, `JR cc,n`
- `CALL nn`, `CALL cc,nn`, `RET`, `RET cc`, `RETI`
- `NOP` and `HALT`

The conditions are `nz`, `z`, `nc` and `c`. Executing any other opcode raises
`dmgcore.gameboy.UnknownOpcodeError`, whose `opcode` attribute holds the
offending byte.

## Installation

```
pip install .
```

## Using the library

```python
from dmgcore.gameboy import Gameboy

gb = Gameboy()
gb.cpu.sp = 0xFFFE
gb.cpu.halted = False

gb.load(0x0100, bytes([0xCD, 0x10, 0x01, 0x76]))  # call 0x0110; halt
gb.load(0x0110, bytes([0x3E, 0x42, 0xC9]))        # ld a,0x42; ret
gb.cpu.pc = 0x0100

for _ in range(4):
    gb.step()

print(hex(gb.cpu.a), gb.cpu.halted)  # 0x42 True
```

`Gameboy` holds a `cpu` (a `dmgcore.cpu.Cpu`) and `memory`, a 64 KiB
`bytearray`. `Gameboy.load(address, data)` copies bytes into memory and raises
`ValueError` if they do not fit. `fetch_byte()` and `fetch_word()` read
operands at the program counter (words are little-endian) and advance it,
wrapping at 16 bits. `execute(opcode)` runs a single instruction, and
`step()` fetches and executes the next one.

A fresh CPU starts halted, with every register at zero and interrupts
disabled. While halted, `step()` does nothing until a bit is set in both the
interrupt flag register (`0xFF0F`) and the interrupt enable register
(`0xFFFF`); the CPU then leaves the halted state and runs the next
instruction.

### Registers and flags

Registers are read and written by name through `Cpu.register` /
`Cpu.set_register` (`a`, `b`, `c`, `d`, `e`, `h`, `l`), register pairs through
`Cpu.pair` / `Cpu.set_pair` (`af`, `bc`, `de`, `hl`, `sp`), and flags through
`Cpu.flag` / `Cpu.set_flag` with the `Flag` enum (`Z`, `N`, `H`, `C`).
`Cpu.condition(name)` evaluates `z`, `nz`, `c` or `nc`. Written values are
truncated to 8 or 16 bits; unknown names raise `ValueError`.

### ALU helpers

The pure functions in `dmgcore.alu` — `add(a, value, carry)`,
`sub(a, value, carry)`, `and_`, `or_`, `xor`, `compare`, `inc` and `dec` —
return an `AluResult` with the new `value` and the `zero`, `subtract`,
`half_carry` and `carry` flags. `carry` is `None` for `inc` and `dec`, which
leave the carry flag untouched.

## Demo

```
dmgcore
```

runs a tiny built-in program that calls a subroutine, loads a value into A,
returns and halts, printing the program counter, stack pointer and
accumulator after each step. The command takes no options other than
`--help`.

## What it does not do

This is only the CPU core. There is no cartridge or ROM loading from files,
no memory banking, no display, sound, timers or joypad, no interrupt
dispatch (only the wake-from-halt check), and no cycle counting. `ADC`,
`SBC`, the `CB`-prefixed instructions and the remaining load and stack
instructions are not implemented.

## Tests

```
pip install .[test]
pytest
```