#!/usr/bin/env python3

"""
Host Loop

Owns the real-time clock.  The CPU only knows how to run one instruction at a
time, so this decides how often that happens, how often the timers tick, and
when the screen is refreshed and the keyboard is checked.

The instruction rate and the timer rate are separate settings.  Programs
written for the original machine expect roughly 500-1000 instructions per
second against a 60Hz timer, but neither is enforced by the CPU.

Timing is done by spinning on perf_counter, since sleeping is far too coarse
for instruction intervals measured in microseconds.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DEFAULT_CLOCK_SPEED, DEFAULT_TIMER_FREQ, DISPLAY_FREQ
from .events import KeyPress, KeyResolved, Redraw, AwaitKey

DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ


class HostError(Exception):
    pass


class Host:
    def __init__(self, cpu, renderer, inputs, clock_speed=None, timer_freq=None):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs

        # User can specify a clock speed of 0 for uncapped
        auto_clock_speed = DEFAULT_CLOCK_SPEED if clock_speed is None else clock_speed
        self.core_interval = None if auto_clock_speed <= 0 else 1.0 / auto_clock_speed

        timer_freq = DEFAULT_TIMER_FREQ if timer_freq is None else timer_freq

        if timer_freq <= 0:
            raise HostError("Timer frequency must be above 0Hz")

        self.timer_interval = 1.0 / timer_freq
        self.awaiting_key = False

        # Realtime clock monitors
        self.next_display_update_time = 0
        self.next_timer_time = 0

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0

        self.report_perf()
        self.renderer.draw(cpu.state.framebuffer)

    def run(self):
        self.next_timer_time = perf_counter() + self.timer_interval

        while True:
            this_time = perf_counter()  # Do this first for maximum precision

            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                # Report before a refresh, as refreshing will likely show the report
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            # Prevent unnecessary display rendering in excess of host frame rate
            if this_time >= self.next_display_update_time:
                if self.inputs.process_messages():  # Process inputs at 60Hz too, to avoid slowdown
                    return

                self.next_display_update_time = this_time + DISPLAY_INTERVAL
                self.renderer.refresh_display()
                self.perf_counter_fps += 1

            # If the CPU gets lagged, the timers catch up rather than drift
            while this_time >= self.next_timer_time:
                self.cpu.tick_timers()
                self.next_timer_time += self.timer_interval

            self.cycle()

            if self.core_interval is not None:
                # Wait for next CPU instruction, taking into account time spent on this one
                next_time = this_time + self.core_interval

                while perf_counter() < next_time:
                    pass

            self.perf_counter_ops += 1

    def next_event(self):
        inputs = self.inputs

        if self.awaiting_key:
            key = inputs.get_keypress()

            if key is not None:
                return KeyResolved(key)

        key = inputs.get_held_key()
        return None if key is None else KeyPress(key)

    def cycle(self):
        # Run one instruction, and act on whatever the CPU asks for
        outcome = self.cpu.step(self.next_event())

        if isinstance(outcome, AwaitKey):
            if not self.awaiting_key:
                # Forget keys pressed before the wait started
                self.inputs.setup_keypress()
                self.awaiting_key = True
        else:
            self.awaiting_key = False

            if isinstance(outcome, Redraw):
                self.renderer.draw(outcome.framebuffer)

        return outcome

    def report_perf(self, fps=0, ops=0):
        self.renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, fps, ops))
