#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and are only handed to the host rendering
system when a sprite has been drawn or the screen has been cleared.  The CPU
never talks to a renderer directly, so the same machine can run with a window,
with no display at all, or inside a test.

Programs cannot write directly into video RAM.  Instead, sprites are drawn
using an XOR method, and the coordinates wrap around both edges of the screen
(the display is toroidal).

A collision is where a pixel was set, but was unset by an XOR.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import SCREEN_WIDTH, SCREEN_HEIGHT, LIT_COLOUR, UNLIT_COLOUR
from .ram import RAM

PIXEL_ON = 0xFF
PIXEL_OFF = 0x00


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=SCREEN_WIDTH, vid_height=SCREEN_HEIGHT):
        if vid_width <= 0 or vid_height <= 0:
            raise FramebufferError("Display must be at least 1x1 pixels")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.vram = RAM(self.vid_size)

    def clear(self):
        self.vram.clear()

    def xor_pixel(self, x, y):
        # Flips a pixel, returning True if it was lit beforehand (i.e. the flip turned it off)
        vram_loc = (y % self.vid_height) * self.vid_width + (x % self.vid_width)
        pixel = self.vram.read(vram_loc)
        self.vram.write(vram_loc, pixel ^ PIXEL_ON)
        return pixel != PIXEL_OFF

    def is_lit(self, x, y):
        return self.vram.read((y % self.vid_height) * self.vid_width + (x % self.vid_width)) != PIXEL_OFF

    def is_blank(self):
        return not any(self.vram.mem)

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def to_pixels(self, lit=LIT_COLOUR, unlit=UNLIT_COLOUR):
        # Row-major list, one value per pixel, in whatever format the renderer wants
        return [lit if pixel else unlit for pixel in self.vram.mem]

    def __str__(self):
        # Handy when a test fails
        width = self.vid_width
        rows = self.vram.mem.tobytes()
        return "\n".join(
            "".join("#" if pixel else "." for pixel in rows[y:y + width]) for y in range(0, self.vid_size, width)
        )
