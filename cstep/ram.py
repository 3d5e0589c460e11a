#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes.

Single byte reads and writes made by running programs wrap around the address
space, the same way the address lines of a real machine would.  Block writes
are only used for loading fonts and programs, so these are checked instead, as
a program that doesn't fit should never be silently truncated.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        if mem_size <= 0:
            raise RAMError("Memory size must be positive")

        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        return self.mem[location % self.mem_size]

    def read_block(self, location, size=1):
        mem_size = self.mem_size
        return bytes(self.mem[(location + offset) % mem_size] for offset in range(size))

    def write(self, location, byte):
        self.mem[location % self.mem_size] = byte & 0xFF

    def write_block(self, location, block):
        block_size = len(block)

        if not block_size:
            return

        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top:
            raise RAMError("Memory overflow")

    def clear(self):
        self.mem[:] = bytes(self.mem_size)
