#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries for later writing into RAM.  The system font is
built in, so there is nothing else to load.  There is no save state support;
programs are small and start quickly enough not to need it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import PROGRAM_MAX_SIZE


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_program(self, filename):
        data = self.load_binary(filename)

        if len(data) > PROGRAM_MAX_SIZE:
            raise LoaderError(
                "ROM is {} bytes, but only {} bytes are available for programs".format(len(data), PROGRAM_MAX_SIZE)
            )

        return data
