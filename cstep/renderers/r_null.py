#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

This module can be used on its own as a Renderer plugin if you only want to see
debug output, or to run a ROM headless.  The last presented screen is kept as
a list of pixel colours, so it can still be inspected.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import SCREEN_WIDTH, SCREEN_HEIGHT


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.title = ""
        self.pixels = []
        self.content_changed = False
        self.set_resolution(SCREEN_WIDTH, SCREEN_HEIGHT)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height
        self.pixels = [0] * (width * height)

    def draw(self, framebuffer):
        # Copy a framebuffer into the renderer.  Shown on the next refresh.
        if framebuffer.get_vid_size() != (self.width, self.height):
            raise RendererError("Framebuffer size does not match the display")

        self.pixels = framebuffer.to_pixels(1, 0)
        self.content_changed = True

    def refresh_display(self):
        self.content_changed = False

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
