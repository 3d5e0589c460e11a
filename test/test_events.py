#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from cstep.events import KeyPress, KeyResolved, AwaitKey, EventError


class TestEvents(unittest.TestCase):
    def test_events_key_range(self):
        for key in range(0x10):
            self.assertEqual(key, KeyPress(key).key)
            self.assertEqual(key, KeyResolved(key).key)

        for key in -1, 0x10:
            self.assertRaises(EventError, KeyPress, key)
            self.assertRaises(EventError, KeyResolved, key)

    def test_events_distinct(self):
        self.assertNotIsInstance(KeyPress(0x1), KeyResolved)
        self.assertNotIsInstance(KeyResolved(0x1), KeyPress)
        self.assertEqual(AwaitKey(0x2), AwaitKey(0x2))
