#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import unittest
from contextlib import redirect_stdout
from chipstep import parse_args
from cstep import main, StartupError
from cstep.constants import DEFAULT_KEYMAP


class TestStartup(unittest.TestCase):
    def test_startup_parse_args(self):
        args = vars(parse_args(["game.ch8", "-c", "500", "-t", "30", "-r", "null", "-d"]))
        self.assertEqual("game.ch8", args["filename"])
        self.assertEqual(500, args["clock_speed"])
        self.assertEqual(30.0, args["timer_freq"])
        self.assertEqual("null", args["renderer"])
        self.assertEqual(DEFAULT_KEYMAP, args["keymap"])
        self.assertTrue(args["debug"])

    def test_startup_parse_args_defaults(self):
        args = vars(parse_args(["game.ch8"]))
        self.assertIsNone(args["clock_speed"])
        self.assertIsNone(args["renderer"])
        self.assertFalse(args["debug"])

    def test_startup_unknown_renderer(self):
        args = vars(parse_args(["game.ch8"]))
        args["renderer"] = "teletype"

        with redirect_stdout(io.StringIO()):
            self.assertRaises(StartupError, main, args)

    def test_startup_missing_rom(self):
        args = vars(parse_args(["NoFile.ch8", "-r", "null"]))

        with redirect_stdout(io.StringIO()):
            self.assertRaises(FileNotFoundError, main, args)
