#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from random import Random
from cstep.constants import SYSTEM_FONT
from cstep.ram import RAMError
from cstep.state import MachineState


class TestMachineState(unittest.TestCase):
    def test_state_defaults(self):
        state = MachineState()
        self.assertEqual(bytes(16), bytes(state.v))
        self.assertEqual((0, 0x200, 0, 0), (state.i, state.pc, state.dt, state.st))
        self.assertEqual(0, state.stack_pointer)
        self.assertTrue(state.framebuffer.is_blank())
        self.assertFalse(state.awaiting_key)

    def test_state_font_loaded(self):
        state = MachineState()
        self.assertEqual(80, len(SYSTEM_FONT))
        self.assertEqual(SYSTEM_FONT, state.ram.read_block(0x000, 80))
        # Reserved area is left empty
        self.assertEqual(bytes(0x200 - 80), state.ram.read_block(80, 0x200 - 80))

    def test_state_program_loaded(self):
        state = MachineState(b"\x12\x34\x56")
        self.assertEqual(b"\x12\x34\x56\x00", state.ram.read_block(0x200, 4))

    def test_state_program_fills_memory(self):
        state = MachineState(b"\x01" * 0xE00)
        self.assertEqual(0x01, state.ram.read(0xFFF))

    def test_state_program_too_large(self):
        self.assertRaises(RAMError, MachineState, b"\x01" * 0xE01)

    def test_state_random_source(self):
        source = Random(5)
        self.assertIs(source, MachineState(random_source=source).random_source)

    def test_state_snapshot(self):
        state = MachineState(b"\x00\xE0", random_source=Random(1))
        other = MachineState(b"\x00\xE0", random_source=Random(2))
        self.assertEqual(state.snapshot(), other.snapshot())
        other.v[0x3] = 1
        self.assertNotEqual(state.snapshot(), other.snapshot())
