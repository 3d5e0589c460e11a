#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Two kinds of key information are tracked, since the CPU needs both:
    * Which keys are held right now (for SKP and SKNP)
    * The last key pressed and released since setup_keypress() was called
      (for LD Vx, K)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer):
        self.keymap_dict = {}
        self.renderer = renderer
        self.key_down = [False] * 0x10
        keymap_split = keymap.split(",")

        if len(keymap_split) != 0x10:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            self.keymap_dict[key_defined_ord] = key_num

        self.last_keypress = None

    def process_messages(self):
        return False  # Don't exit the program

    def is_key_down(self, key):
        return self.key_down[key]

    def get_held_key(self):
        # Lowest numbered key currently held, if any
        for key_num, down in enumerate(self.key_down):
            if down:
                return key_num

        return None

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress

    def shutdown(self):
        pass
