#!/usr/bin/env python3

"""
Stack Emulator

The call stack is kept out of system RAM, since programs have no way of
addressing it, and there is no stack pointer register visible to them.  A list
bounded at a fixed depth is enough.

CHIP-8 programs should never nest more than 16 calls deep, or return without a
matching call.  Either case is a bug in the ROM, so it is reported rather than
clamped.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_DEPTH


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size=STACK_DEPTH):
        self.items = []
        self.size = size

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow ({} levels)".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    @property
    def pointer(self):
        # Number of return addresses currently saved
        return len(self.items)

    def get_items(self):
        # For debugging
        return self.items
