#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cstep.ram import RAM, RAMError


class TestRAM(unittest.TestCase):
    def setUp(self):
        self.ram = RAM(5)

    def test_ram_init(self):
        ram = RAM()
        self.assertEqual(0x1000, ram.mem_size)
        self.assertEqual(0xFFF, ram.mem_top)

    def test_ram_init_invalid(self):
        self.assertRaises(RAMError, RAM, 0)

    def test_ram_empty(self):
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_write(self):
        self.ram.write(1, 255)
        self.assertEqual("00ff000000", self.ram.mem.hex())

    def test_ram_write_wrap(self):
        self.ram.write(6, 0x12)
        self.assertEqual("0012000000", self.ram.mem.hex())
        self.assertEqual(0x12, self.ram.read(11))

    def test_ram_write_masks_byte(self):
        self.ram.write(0, 0x1FE)
        self.assertEqual(0xFE, self.ram.read(0))

    def test_ram_write_block(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.ram.write_block(4, bytearray(b"\xFF"))
        self.assertEqual("00fdfe00ff", self.ram.mem.hex())

    def test_ram_write_block_empty(self):
        self.ram.write_block(5, b"")
        self.assertEqual("0000000000", self.ram.mem.hex())

    def test_ram_block_overflow(self):
        self.assertRaises(RAMError, self.ram.write_block, 4, bytearray(b"\xFE\xFF"))

    def test_ram_read_block_wrap(self):
        self.ram.write_block(0, b"\x01\x02\x03\x04\x05")
        self.assertEqual(b"\x04\x05\x01", self.ram.read_block(3, 3))

    def test_ram_clear(self):
        self.ram.write_block(1, bytearray(b"\xFD\xFE"))
        self.assertEqual("00fdfe0000", self.ram.mem.hex())
        self.ram.clear()
        self.assertEqual("0000000000", self.ram.mem.hex())
