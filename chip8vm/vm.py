# CHIP8 Virtual Machine:
# Memory - 4096 bytes holding the font (0x000-0x04F) and the ROM (from 0x200).
# CPU - 16 byte registers V0..VF, index register I, program counter, two timers.
# Input - a 16 key latch written from outside once per frame.
# Output - a 64x32 framebuffer read from outside once per frame.
#----------------------------------------------------------------------------------------------
# One cycle() is one fetch / decode / execute step plus one timer tick. Pacing and
# the actual stall while waiting for a key belong to the driver (see driver.py).

import os
import random
from enum import Enum

from .bits import split_byte
from .constants import (FONTSET, FONT_START, GLYPH_SIZE, MAX_PROGRAM_SIZE,
                        PROGRAM_START, WORD_SIZE, FLAG)
from .errors import NotRunningError, ProgramTooLargeError
from .log import log
from .opcodes import Op, decode
from .state import Framebuffer, Keyboard, Memory, Registers, Stack


class VMState(Enum):
    IDLE = "idle"        # constructed
    READY = "ready"      # font loaded
    RUNNING = "running"  # program loaded


class Chip8:

    def __init__(self, rng=None):
        self.memory = Memory()
        self.regs = Registers()
        self.stack = Stack()
        self.gfx = Framebuffer()
        self.keyboard = Keyboard()
        self.rng = rng if rng is not None else random.Random()

        self.font_loaded = False
        self.program_size = None

        # Prepare opcode function map
        self.setup_funcmap()

    # ---- Lifecycle ----
    @property
    def state(self):
        if self.program_size is not None:
            return VMState.RUNNING
        if self.font_loaded:
            return VMState.READY
        return VMState.IDLE

    @property
    def waiting_for_keyboard(self):
        return self.keyboard.waiting_for_keyboard

    @waiting_for_keyboard.setter
    def waiting_for_keyboard(self, value):
        self.keyboard.waiting_for_keyboard = bool(value)

    @property
    def keyboard_register(self):
        return self.keyboard.keyboard_register

    def initialize(self):
        # Load fontset into memory
        self.memory.write_block(FONT_START, FONTSET)
        self.font_loaded = True

    def load_program(self, program):
        """Copy a program image into memory at 0x200.

        `program` is either the raw bytes or a path to a ROM file.
        """
        if isinstance(program, (str, os.PathLike)):
            log("Loading ROM:", program)
            with open(program, "rb") as f:
                program = f.read()
        elif not isinstance(program, (bytes, bytearray)):
            raise TypeError(f"program must be bytes, bytearray, str or PathLike, not {type(program).__name__}")
        data = bytes(program)
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(len(data), MAX_PROGRAM_SIZE)
        self.memory.write_block(PROGRAM_START, data)
        self.program_size = len(data)
        log(f"Loaded {len(data)} bytes at 0x{PROGRAM_START:03X}")

    # ---- Cycle ----
    def fetch(self, pc=None):
        """Read the opcode at pc (default PC) as four nibbles."""
        if pc is None:
            pc = self.regs.pc
        hi = self.memory.read(pc)
        lo = self.memory.read(pc + 1)
        return split_byte(hi) + split_byte(lo)

    def decode(self, nibbles):
        return decode(nibbles, self.regs.pc)

    def execute(self, ins):
        # Default PC increment; jumps, calls and returns overwrite it, skips add another word
        self.regs.pc = (self.regs.pc + WORD_SIZE) & 0xFFFF
        self.funcmap[ins.op](ins)

    def cycle(self):
        if self.state is not VMState.RUNNING:
            raise NotRunningError(f"cycle() called while {self.state.value}; load a program first")
        self.execute(self.decode(self.fetch()))
        self.regs.tick_timers()

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.SYS: self.op_SYS,
            Op.CLS: self.op_CLS,
            Op.RET: self.op_RET,
            Op.JP: self.op_JP,
            Op.CALL: self.op_CALL,
            Op.SE_VX_KK: self.op_SE_Vx_kk,
            Op.SNE_VX_KK: self.op_SNE_Vx_kk,
            Op.SE_VX_VY: self.op_SE_Vx_Vy,
            Op.LD_VX_KK: self.op_LD_Vx_kk,
            Op.ADD_VX_KK: self.op_ADD_Vx_kk,

            Op.LD_VX_VY: self.op_LD_Vx_Vy,
            Op.OR: self.op_OR,
            Op.AND: self.op_AND,
            Op.XOR: self.op_XOR,
            Op.ADD: self.op_ADD,
            Op.SUB: self.op_SUB,
            Op.SHR: self.op_SHR,
            Op.SUBN: self.op_SUBN,
            Op.SHL: self.op_SHL,

            Op.SNE_VX_VY: self.op_SNE_Vx_Vy,
            Op.LD_I: self.op_LD_I,
            Op.JP_V0: self.op_JP_V0,
            Op.RND: self.op_RND,
            Op.DRW: self.op_DRW,

            Op.SKP: self.op_SKP,
            Op.SKNP: self.op_SKNP,

            Op.LD_VX_DT: self.op_LD_Vx_DT,
            Op.WAITKEY: self.op_WAITKEY,
            Op.LD_DT_VX: self.op_LD_DT_Vx,
            Op.LD_ST_VX: self.op_LD_ST_Vx,
            Op.ADD_I_VX: self.op_ADD_I_Vx,
            Op.FONT: self.op_FONT,
            Op.BCD: self.op_BCD,
            Op.STORE: self.op_STORE,
            Op.LOAD: self.op_LOAD,
        }

    def _skip_if(self, condition):
        if condition:
            self.regs.pc = (self.regs.pc + WORD_SIZE) & 0xFFFF

    # ---- Opcode Handlers ----

    def op_SYS(self, ins):
        # 0nnn is ignored on modern interpreters
        log("SYS call ignored (0nnn)")

    def op_CLS(self, ins):
        self.gfx.clear()
        log("Clear the display")

    def op_RET(self, ins):
        self.regs.pc = self.stack.pop()
        log("Return to", hex(self.regs.pc))

    def op_JP(self, ins):
        self.regs.pc = ins.nnn
        log("Jump to address", hex(ins.nnn))

    def op_CALL(self, ins):
        # PC already points past the call
        self.stack.push(self.regs.pc)
        self.regs.pc = ins.nnn
        log("Call subroutine at", hex(ins.nnn))

    def op_SE_Vx_kk(self, ins):
        self._skip_if(self.regs.V[ins.x] == ins.kk)

    def op_SNE_Vx_kk(self, ins):
        self._skip_if(self.regs.V[ins.x] != ins.kk)

    def op_SE_Vx_Vy(self, ins):
        self._skip_if(self.regs.V[ins.x] == self.regs.V[ins.y])

    def op_LD_Vx_kk(self, ins):
        self.regs.V[ins.x] = ins.kk

    def op_ADD_Vx_kk(self, ins):
        self.regs.V[ins.x] = (self.regs.V[ins.x] + ins.kk) & 0xFF

    def op_LD_Vx_Vy(self, ins):
        self.regs.V[ins.x] = self.regs.V[ins.y]

    def op_OR(self, ins):
        self.regs.V[ins.x] |= self.regs.V[ins.y]

    def op_AND(self, ins):
        self.regs.V[ins.x] &= self.regs.V[ins.y]

    def op_XOR(self, ins):
        self.regs.V[ins.x] ^= self.regs.V[ins.y]

    # flag writes come last so VF keeps the flag when x == F
    def op_ADD(self, ins):
        V = self.regs.V
        total = V[ins.x] + V[ins.y]
        V[ins.x] = total & 0xFF
        V[FLAG] = 1 if total > 0xFF else 0

    def op_SUB(self, ins):
        V = self.regs.V
        no_borrow = 1 if V[ins.x] >= V[ins.y] else 0
        V[ins.x] = (V[ins.x] - V[ins.y]) & 0xFF
        V[FLAG] = no_borrow

    def op_SHR(self, ins):
        V = self.regs.V
        lsb = V[ins.x] & 1
        V[ins.x] >>= 1
        V[FLAG] = lsb

    def op_SUBN(self, ins):
        V = self.regs.V
        no_borrow = 1 if V[ins.y] >= V[ins.x] else 0
        V[ins.x] = (V[ins.y] - V[ins.x]) & 0xFF
        V[FLAG] = no_borrow

    def op_SHL(self, ins):
        V = self.regs.V
        msb = (V[ins.x] >> 7) & 1
        V[ins.x] = (V[ins.x] << 1) & 0xFF
        V[FLAG] = msb

    def op_SNE_Vx_Vy(self, ins):
        self._skip_if(self.regs.V[ins.x] != self.regs.V[ins.y])

    def op_LD_I(self, ins):
        self.regs.I = ins.nnn

    def op_JP_V0(self, ins):
        self.regs.pc = (ins.nnn + self.regs.V[0]) & 0xFFFF
        log(f"Jump to address V0 + {ins.nnn:03X} = {self.regs.pc:03X}")

    def op_RND(self, ins):
        self.regs.V[ins.x] = self.rng.getrandbits(8) & ins.kk

    def op_DRW(self, ins):
        x = self.regs.V[ins.x]
        y = self.regs.V[ins.y]
        rows = self.memory.read_block(self.regs.I, ins.n)
        collision = self.gfx.draw_sprite(x, y, rows)
        self.regs.V[FLAG] = 1 if collision else 0
        log(f"Drew sprite at ({x}, {y}), collision={self.regs.V[FLAG]}")

    def op_SKP(self, ins):
        self._skip_if(self.keyboard[self.regs.V[ins.x]])

    def op_SKNP(self, ins):
        self._skip_if(not self.keyboard[self.regs.V[ins.x]])

    def op_LD_Vx_DT(self, ins):
        self.regs.V[ins.x] = self.regs.delay_timer

    def op_WAITKEY(self, ins):
        # only raises the flag; the driver stops calling cycle() until a key arrives
        self.keyboard.wait_for_key(ins.x)
        log(f"Waiting for key into V{ins.x:X}")

    def op_LD_DT_Vx(self, ins):
        self.regs.delay_timer = self.regs.V[ins.x]

    def op_LD_ST_Vx(self, ins):
        self.regs.sound_timer = self.regs.V[ins.x]

    def op_ADD_I_Vx(self, ins):
        self.regs.I = (self.regs.I + self.regs.V[ins.x]) & 0xFFFF

    def op_FONT(self, ins):
        self.regs.I = FONT_START + self.regs.V[ins.x] * GLYPH_SIZE

    def op_BCD(self, ins):
        v = self.regs.V[ins.x]
        self.memory.write_block(self.regs.I, [v // 100, (v // 10) % 10, v % 10])

    def op_STORE(self, ins):
        self.memory.write_block(self.regs.I, self.regs.V[:ins.x + 1])

    def op_LOAD(self, ins):
        self.regs.V[:ins.x + 1] = self.memory.read_block(self.regs.I, ins.x + 1)
