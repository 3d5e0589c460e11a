#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT
from .cpu import CPU
from .debugger import Debugger
from .host import Host
from .hostio import Loader
from .state import MachineState


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    opt_renderer = args["renderer"]

    if opt_renderer is None or opt_renderer == "pygame":
        # pylint: disable=import-outside-toplevel, raise-missing-from
        try:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer
        except ImportError:
            raise StartupError("PyGame does not appear to be installed.  Try the 'null' renderer")
    elif opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
    else:
        raise StartupError("Unknown renderer '{}'".format(opt_renderer))

    # Read ROM binary.  The machine writes it, along with the system font, into RAM
    program = Loader().load_program(args["filename"])
    state = MachineState(program)

    # Set up a new rendering system, and link inputs to it in case it provides inputs too
    renderer = Renderer(scale=args["scale"], palette=args["palette"])
    inputs = Inputs(args["keymap"], renderer)

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    cpu = CPU(state, debugger)
    host = Host(cpu, renderer, inputs, clock_speed=args["clock_speed"], timer_freq=args["timer_freq"])

    try:
        host.run()
    finally:
        # The host has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        inputs.shutdown()
        renderer.shutdown()
