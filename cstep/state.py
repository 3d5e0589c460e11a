#!/usr/bin/env python3

"""
Machine State

Everything the CPU reads and writes: the V registers, the index register, the
program counter, RAM, the call stack, both timers, and the framebuffer.  There
is no behaviour here beyond setting the machine up, so a state can be built,
inspected, and compared in tests without a CPU attached.

The random number source is injected, so that a seeded generator can be used
to make RND repeatable.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import FONT_LOC, PROGRAM_LOC, SYSTEM_FONT
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack


class MachineState:
    def __init__(self, program=b"", random_source=None):
        self.v = memoryview(bytearray(16))  # V0-VF, with VF doubling as the flag register
        self.i = 0                          # Index register
        self.pc = PROGRAM_LOC
        self.dt = 0                         # Delay timer
        self.st = 0                         # Sound timer
        self.ram = RAM()
        self.stack = Stack()
        self.framebuffer = Framebuffer()
        self.random_source = Random() if random_source is None else random_source

        # Register index that LD Vx, K will write to, while waiting for a key.  None if not waiting.
        self.pending_key_register = None

        self.ram.write_block(FONT_LOC, SYSTEM_FONT)
        self.ram.write_block(PROGRAM_LOC, program)  # Raises RAMError if the program doesn't fit

    @property
    def stack_pointer(self):
        return self.stack.pointer

    @property
    def awaiting_key(self):
        return self.pending_key_register is not None

    def snapshot(self):
        # Comparable copy of the machine, excluding the random source
        return {
            "v": bytes(self.v),
            "i": self.i,
            "pc": self.pc,
            "dt": self.dt,
            "st": self.st,
            "stack": tuple(self.stack.get_items()),
            "ram": self.ram.mem.tobytes(),
            "vram": self.framebuffer.vram.mem.tobytes(),
            "pending_key_register": self.pending_key_register,
        }
