#!/usr/bin/env python3

"""
Host and CPU Messages

The CPU is stepped by a host loop, one instruction at a time.  Along with each
step, the host may pass in one event:

    * None           - Nothing happened since the last step
    * KeyPress(k)    - Key k (0-F) is currently held down
    * KeyResolved(k) - Key k was pressed, satisfying a pending LD Vx, K

Each step returns one outcome, telling the host what it needs to do next:

    * None           - Nothing to do
    * Redraw(fb)     - The framebuffer has changed and should be presented
    * AwaitKey(x)    - The CPU is waiting for a key to be stored in register
                       Vx.  The same instruction is repeated on every step
                       until a KeyResolved event is supplied.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple


class EventError(Exception):
    pass


def _check_key(key):
    if not 0x0 <= key <= 0xF:
        raise EventError("Key 0x{:x} is out of range.  Only keys 0-F exist".format(key))


class KeyPress(namedtuple("KeyPress", "key")):
    __slots__ = ()

    def __new__(cls, key):
        _check_key(key)
        return super().__new__(cls, key)


class KeyResolved(namedtuple("KeyResolved", "key")):
    __slots__ = ()

    def __new__(cls, key):
        _check_key(key)
        return super().__new__(cls, key)


Redraw = namedtuple("Redraw", "framebuffer")
AwaitKey = namedtuple("AwaitKey", "register")
