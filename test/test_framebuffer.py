#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cstep.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer(4, 5)

    def test_framebuffer_default_size(self):
        self.assertEqual((64, 32), Framebuffer().get_vid_size())

    def test_framebuffer_invalid_size(self):
        self.assertRaises(FramebufferError, Framebuffer, 0, 32)

    def test_framebuffer_writes(self):
        fb = self.framebuffer
        self.assertFalse(fb.xor_pixel(0, 0))
        self.assertEqual("ff00000000000000000000000000000000000000", fb.vram.mem.hex())
        self.assertFalse(fb.xor_pixel(1, 1))
        self.assertEqual("ff00000000ff0000000000000000000000000000", fb.vram.mem.hex())
        self.assertTrue(fb.xor_pixel(4, 5))  # Wraps round to the first pixel, which was lit
        self.assertEqual("0000000000ff0000000000000000000000000000", fb.vram.mem.hex())

        # Check clear works
        fb.clear()
        self.assertTrue(fb.is_blank())

    def test_framebuffer_is_lit(self):
        fb = self.framebuffer
        fb.xor_pixel(3, 4)
        self.assertTrue(fb.is_lit(3, 4))
        self.assertTrue(fb.is_lit(-1, -1))
        self.assertFalse(fb.is_lit(0, 0))

    def test_framebuffer_to_pixels(self):
        fb = self.framebuffer
        fb.xor_pixel(1, 0)
        pixels = fb.to_pixels()
        self.assertEqual(20, len(pixels))
        self.assertEqual([0, 0xFFFFFF, 0, 0], pixels[:4])
        self.assertEqual([0, 1, 0, 0], fb.to_pixels(1, 0)[:4])

    def test_framebuffer_str(self):
        fb = self.framebuffer
        fb.xor_pixel(0, 0)
        fb.xor_pixel(3, 4)
        self.assertEqual("#...\n....\n....\n....\n...#", str(fb))
