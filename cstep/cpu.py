#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Unlike a
real computer, the CPU doesn't own a clock: the host calls step() once per
instruction, and tick_timers() at whatever rate it chooses for the delay and
sound timers (normally 60Hz).  This keeps the CPU free of any I/O, so it can
be run flat out in tests, or paced by a window's frame loop.

Every call to step() fetches an opcode, decodes it into its fields, moves the
program counter on, then executes it.  Anything the host needs to act on is
returned as an outcome (see the events module).
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from .constants import APP_INTRO, FONT_LOC, FONT_GLYPH_SIZE
from .debugger import Debugger
from .events import KeyPress, KeyResolved, Redraw, AwaitKey
from .stack import StackError

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
ADDR_MASK = 0xFFF   # Program counter and jump targets are 12 bits wide
INDEX_MASK = 0xFFFF

# The first nibble of an opcode selects which bits identify the instruction.  Anything not listed is identified by its
# first nibble alone (mask 0xF000).
FAMILY_MASKS = {
    0x0: 0xFFFF,
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

# All fields are extracted up front, whether the instruction uses them or not.
# n = Nibble
# kk = Byte
# nnn = address
# x/y = register (0-15)
Instruction = namedtuple("Instruction", "opcode pattern x y n kk nnn")

MNEMONICS = {
    0x0000: "SYS 0x{nnn:03x}",
    0x00E0: "CLS",
    0x00EE: "RET",
    0x1000: "JP 0x{nnn:03x}",
    0x2000: "CALL 0x{nnn:03x}",
    0x3000: "SE V{x:01x}, 0x{kk:02x}",
    0x4000: "SNE V{x:01x}, 0x{kk:02x}",
    0x5000: "SE V{x:01x}, V{y:01x}",
    0x6000: "LD V{x:01x}, 0x{kk:02x}",
    0x7000: "ADD V{x:01x}, 0x{kk:02x}",
    0x8000: "LD V{x:01x}, V{y:01x}",
    0x8001: "OR V{x:01x}, V{y:01x}",
    0x8002: "AND V{x:01x}, V{y:01x}",
    0x8003: "XOR V{x:01x}, V{y:01x}",
    0x8004: "ADD V{x:01x}, V{y:01x}",
    0x8005: "SUB V{x:01x}, V{y:01x}",
    0x8006: "SHR V{x:01x}",
    0x8007: "SUBN V{x:01x}, V{y:01x}",
    0x800E: "SHL V{x:01x}",
    0x9000: "SNE V{x:01x}, V{y:01x}",
    0xA000: "LD I, 0x{nnn:03x}",
    0xB000: "JP V0, 0x{nnn:03x}",
    0xC000: "RND V{x:01x}, 0x{kk:02x}",
    0xD000: "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    0xE09E: "SKP V{x:01x}",
    0xE0A1: "SKNP V{x:01x}",
    0xF007: "LD V{x:01x}, DT",
    0xF00A: "LD V{x:01x}, K",
    0xF015: "LD DT, V{x:01x}",
    0xF018: "LD ST, V{x:01x}",
    0xF01E: "ADD I, V{x:01x}",
    0xF029: "LD F, V{x:01x}",
    0xF033: "LD B, V{x:01x}",
    0xF055: "LD [I], V{x:01x}",
    0xF065: "LD V{x:01x}, [I]"
}


class CPUError(Exception):
    pass


def disassemble(instruction):
    return MNEMONICS[instruction.pattern].format(**instruction._asdict())


class CPU:
    def __init__(self, state, debugger=None):
        self.state = state
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()

        # Opcode and address of the instruction being executed, kept for crash reports
        self.opcode = 0
        self.debug_pc = state.pc

        # Event supplied by the host for the current step
        self.event = None

        # Instruction pointers, keyed by opcode after masking with the bitmask for its family
        self.instructions = {
            0x0000: self._0nnn,  # Catches everything in family 0x0 not matched exactly
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            0x1000: self._1nnn,
            0x2000: self._2nnn,
            0x3000: self._3xkk,
            0x4000: self._4xkk,
            0x5000: self._5xy0,
            0x6000: self._6xkk,
            0x7000: self._7xkk,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            0xA000: self._Annn,
            0xB000: self._Bnnn,
            0xC000: self._Cxkk,
            0xD000: self._Dxyn,
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

    def step(self, event=None):
        state = self.state
        self.debug_pc = state.pc  # Do this all the time in case there is a crash
        self.opcode = self.fetch()
        instruction = self.decode(self.opcode)  # Raises before anything is changed if the opcode is unknown
        self.event = event

        if self.live_debug:
            self.debugger.output(self, disassemble(instruction))

        # Program counter updates after decode, but before execute, so skips only need one further increment
        self.inc_pc()

        try:
            return self.instructions[instruction.pattern](instruction)
        except StackError as err:
            # Leave the program counter on the offending CALL/RET
            state.pc = self.debug_pc
            self._halt(
                "{} at address 0x{:03x}.".format(err, self.debug_pc), disassemble(instruction)
            )

    def tick_timers(self):
        state = self.state

        if state.dt > 0:
            state.dt -= 1

        if state.st > 0:
            state.st -= 1

    def fetch(self):
        return int.from_bytes(self.state.ram.read_block(self.state.pc, 2), CPU_ENDIAN, signed=False)

    def decode(self, opcode):
        family = opcode >> 12
        pattern = opcode & FAMILY_MASKS.get(family, 0xF000)

        if pattern not in self.instructions:
            if family != 0x0:
                self._opcode_unsupported(opcode)

            pattern = 0x0000

        return Instruction(
            opcode=opcode,
            pattern=pattern,
            x=(opcode & 0xF00) >> 8,
            y=(opcode & 0xF0) >> 4,
            n=opcode & 0xF,
            kk=opcode & 0xFF,
            nnn=opcode & 0xFFF
        )

    def inc_pc(self):
        self.state.pc = (self.state.pc + 2) & ADDR_MASK

    def dec_pc(self):
        # Only used to re-run instructions (i.e. waiting for a keypress)
        self.state.pc = (self.state.pc - 2) & ADDR_MASK

    def font_location(self, digit):
        if not 0x0 <= digit <= 0xF:
            self._halt("There is no system font glyph for 0x{:x}.".format(digit))

        return FONT_LOC + FONT_GLYPH_SIZE * digit

    def _halt(self, reason, instruction="???"):
        raise CPUError(
            "Emulation halted.\n\n{}Debug info:\n{}\n\n{}".format(
                APP_INTRO, self.debugger.debug(self, instruction, verbose=True), reason
            )
        ) from None

    def _opcode_unsupported(self, opcode):
        self._halt("Opcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction.".format(opcode, self.debug_pc))

    def _held_key(self):
        event = self.event
        return event.key if isinstance(event, KeyPress) else None

    def _0nnn(self, ins):  # SYS addr
        # Machine code routines can't be run, so treat it as a jump
        self.state.pc = ins.nnn

    def _00E0(self, _):  # CLS
        framebuffer = self.state.framebuffer
        framebuffer.clear()
        return Redraw(framebuffer)

    def _00EE(self, _):  # RET
        self.state.pc = self.state.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self.state.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        state = self.state
        state.stack.push(state.pc)  # Already pointing at the next instruction
        state.pc = ins.nnn

    def _3xkk(self, ins):  # SE Vx, byte
        if self.state.v[ins.x] == ins.kk:
            self.inc_pc()

    def _4xkk(self, ins):  # SNE Vx, byte
        if self.state.v[ins.x] != ins.kk:
            self.inc_pc()

    def _5xy0(self, ins):  # SE Vx, Vy
        v = self.state.v

        if v[ins.x] == v[ins.y]:
            self.inc_pc()

    def _6xkk(self, ins):  # LD Vx, byte
        self.state.v[ins.x] = ins.kk

    def _7xkk(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        v = self.state.v
        v[ins.x] = (v[ins.x] + ins.kk) & 0xFF

    def _8xy0(self, ins):  # LD Vx, Vy
        v = self.state.v
        v[ins.x] = v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        v = self.state.v
        v[ins.x] |= v[ins.y]

    def _8xy2(self, ins):  # AND Vx, Vy
        v = self.state.v
        v[ins.x] &= v[ins.y]

    def _8xy3(self, ins):  # XOR Vx, Vy
        v = self.state.v
        v[ins.x] ^= v[ins.y]

    # Flags must be set AFTER Vx, as Vf may be the destination register.  The flag wins in that case.

    def _8xy4(self, ins):  # ADD Vx, Vy
        v = self.state.v
        val = v[ins.x] + v[ins.y]
        v[ins.x] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _8xy5(self, ins):  # SUB Vx, Vy
        v = self.state.v
        vx = v[ins.x]
        vy = v[ins.y]
        v[ins.x] = (vx - vy) & 0xFF
        v[0xF] = int(vx > vy)  # Vf is set when NOT borrowing

    def _8xy6(self, ins):  # SHR Vx
        v = self.state.v
        val = v[ins.x]
        v[ins.x] = val >> 1
        v[0xF] = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        v = self.state.v
        vx = v[ins.x]
        vy = v[ins.y]
        v[ins.x] = (vy - vx) & 0xFF
        v[0xF] = int(vy > vx)

    def _8xyE(self, ins):  # SHL Vx
        v = self.state.v
        val = v[ins.x]
        v[ins.x] = (val << 1) & 0xFF
        v[0xF] = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        v = self.state.v

        if v[ins.x] != v[ins.y]:
            self.inc_pc()

    def _Annn(self, ins):  # LD I, addr
        self.state.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        state = self.state
        state.pc = (ins.nnn + state.v[0x0]) & ADDR_MASK

    def _Cxkk(self, ins):  # RND Vx, byte
        state = self.state
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        state.v[ins.x] = state.random_source.randint(0, 0xFF) & ins.kk

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        # Sprites are 8 pixels wide and n rows high, one byte per row, most-significant bit on the left.  The start
        # position and every pixel after it wrap around the screen edges.
        state = self.state
        framebuffer = state.framebuffer
        ram = state.ram
        vx_pos = state.v[ins.x]
        vy_pos = state.v[ins.y]
        i = state.i
        collided = False

        for y in range(ins.n):
            spr_data = ram.read(i + y)
            scr_y = vy_pos + y

            for x in range(8):
                if spr_data & (0x80 >> x) and framebuffer.xor_pixel(vx_pos + x, scr_y):
                    # Don't stop drawing.  A single lit pixel switched off is a collision for the whole sprite.
                    collided = True

        state.v[0xF] = int(collided)
        return Redraw(framebuffer)

    def _Ex9E(self, ins):  # SKP Vx
        key = self._held_key()

        if key is not None and key == self.state.v[ins.x] & 0xF:
            self.inc_pc()

    def _ExA1(self, ins):  # SKNP Vx
        key = self._held_key()

        if key is None or key != self.state.v[ins.x] & 0xF:
            self.inc_pc()

    def _Fx07(self, ins):  # LD Vx, DT
        state = self.state
        state.v[ins.x] = state.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # The CPU can't block, since the host still has to run timers and update the screen.  Instead, wind the program
        # counter back so this instruction runs again, and ask the host for a key.  The host answers with KeyResolved.
        state = self.state
        event = self.event

        if isinstance(event, KeyResolved):
            state.v[ins.x] = event.key
            state.pending_key_register = None
            return None

        state.pending_key_register = ins.x
        self.dec_pc()
        return AwaitKey(ins.x)

    def _Fx15(self, ins):  # LD DT, Vx
        state = self.state
        state.dt = state.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        state = self.state
        state.st = state.v[ins.x]

    def _Fx1E(self, ins):  # ADD I, Vx
        state = self.state
        state.i = (state.i + state.v[ins.x]) & INDEX_MASK

    def _Fx29(self, ins):  # LD F, Vx
        state = self.state
        state.i = self.font_location(state.v[ins.x] & 0xF)

    def _Fx33(self, ins):  # LD B, Vx
        state = self.state
        ram = state.ram
        val = state.v[ins.x]
        i = state.i
        ram.write(i, val // 100)           # Most-significant digit
        ram.write(i + 1, (val // 10) % 10)  # Middle digit
        ram.write(i + 2, val % 10)          # Least-significant digit

    def _Fx55(self, ins):  # LD [I], Vx
        state = self.state
        ram = state.ram
        i = state.i

        # Ensure with +1 that the final register is copied.  I is left alone.
        for reg in range(ins.x + 1):
            ram.write(i + reg, state.v[reg])

    def _Fx65(self, ins):  # LD Vx, [I]
        state = self.state
        ram = state.ram
        i = state.i

        for reg in range(ins.x + 1):
            state.v[reg] = ram.read(i + reg)
