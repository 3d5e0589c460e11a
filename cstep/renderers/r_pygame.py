#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  The surface is
allocated at the emulated resolution, and then stretched (in the correct
aspect ratio using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.

Only two colours are needed: one for unlit pixels, and one for lit pixels.
Both can be overridden with a palette option.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

# Unlit, lit
DEFAULT_PALETTE = [0x222222, 0xDDDDDD]


class Renderer(RendererBase):
    def __init__(self, scale=None, palette=None, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied

        pygame.display.init()
        pygame.display.set_caption(APP_NAME)
        self.rgb_buffer = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        colour_map = list(DEFAULT_PALETTE)

        # Override one (or both) of the colours with a user-defined palette, if necessary
        if palette is not None:
            palette_split = palette.split(",")

            if len(palette_split) > len(colour_map):
                raise RendererError("Too many palette colours defined.  Only 2 are used")

            for colour_num, colour in enumerate(palette_split):
                if len(colour) != 6:
                    raise RendererError("Palette colours must all be 6 hex digits long.")

                try:
                    colour_map[colour_num] = int(colour, 16)
                except ValueError:
                    raise RendererError("Invalid palette colour defined.") from None

        # Split compound RGB values for faster byte-based copying later
        self.rgb_map = [bytes((i >> 16, (i >> 8) & 0xFF, i & 0xFF)) for i in colour_map]

        super().__init__(scale)

    def set_resolution(self, width, height):
        super().set_resolution(width, height)
        self.rgb_buffer = bytearray(self.rgb_map[0] * (width * height))  # 24-bit
        self.content_changed = True

    def draw(self, framebuffer):
        super().draw(framebuffer)
        # Build the RGB buffer in one go, rather than calling PyGame for each pixel
        rgb_map = self.rgb_map
        self.rgb_buffer = bytearray(b"".join(rgb_map[pixel] for pixel in self.pixels))

    def refresh_display(self):
        if self.content_changed and self.rgb_buffer:
            # Blit the bytearray straight to the surface, then scale it up to the window
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().refresh_display()

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame can segfault if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
