"""A small Game Boy (DMG) CPU core: registers, flags, ALU and instruction stepper."""

__version__ = "0.1.0"