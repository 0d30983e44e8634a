# State records owned by the interpreter: memory, registers, stack,
# framebuffer and keyboard latch.

import numpy as np

from .constants import (MEMORY_SIZE, NUM_REGISTERS, PROGRAM_START, STACK_DEPTH,
                        WIDTH, HEIGHT, NUM_KEYS)
from .errors import AddressError, StackOverflowError, StackUnderflowError


class Memory:
    """Flat 4096 byte address space."""

    def __init__(self, size=MEMORY_SIZE):
        self.data = bytearray(size)

    def __len__(self):
        return len(self.data)

    def _check(self, address, length=1):
        if address < 0 or address + length > len(self.data):
            raise AddressError(address if not 0 <= address < len(self.data) else len(self.data))

    def read(self, address):
        self._check(address)
        return self.data[address]

    def read_block(self, address, length):
        self._check(address, length)
        return bytes(self.data[address:address + length])

    def write_block(self, address, values):
        values = bytes(values)
        self._check(address, len(values))
        self.data[address:address + len(values)] = values


class Registers:
    def __init__(self):
        self.V = [0] * NUM_REGISTERS  # V0..VF
        self.I = 0
        self.pc = PROGRAM_START
        self.delay_timer = 0
        self.sound_timer = 0

    def tick_timers(self):
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1


class Stack:
    """Fixed depth return-address stack; push and pop raise instead of wrapping."""

    def __init__(self, depth=STACK_DEPTH):
        self.stack = np.zeros(depth, dtype=np.uint16)
        self.sp = 0

    def __len__(self):
        return self.sp

    def push(self, address):
        if self.sp >= len(self.stack):
            raise StackOverflowError(f"Stack overflow: more than {len(self.stack)} nested calls")
        self.stack[self.sp] = address
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise StackUnderflowError("Stack underflow: return with an empty stack")
        self.sp -= 1
        return int(self.stack[self.sp])


class Framebuffer:
    """64x32 grid of lit pixels, indexed as pixels[x, y]."""

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((width, height), dtype=bool)

    def clear(self):
        self.pixels[:] = False

    def is_lit(self, x, y):
        return bool(self.pixels[x % self.width, y % self.height])

    def draw_sprite(self, x, y, rows):
        """XOR the sprite rows in at (x, y), wrapping each pixel around the
        screen edges. Returns True when a lit pixel was switched off."""
        collision = False
        for row, sprite in enumerate(rows):
            if sprite == 0:
                continue
            py = (y + row) % self.height
            for bit in range(8):
                if sprite & (0x80 >> bit):
                    px = (x + bit) % self.width
                    if self.pixels[px, py]:
                        collision = True
                    self.pixels[px, py] ^= True
        return collision

    def lit(self):
        """Yield (x, y) of every lit pixel."""
        for x, y in zip(*np.nonzero(self.pixels)):
            yield int(x), int(y)


class Keyboard:
    def __init__(self, num_keys=NUM_KEYS):
        self.keys = np.zeros(num_keys, dtype=bool)
        self.waiting_for_keyboard = False
        self.keyboard_register = 0

    def __getitem__(self, key):
        return bool(self.keys[key & 0xF])

    def __setitem__(self, key, pressed):
        self.keys[key & 0xF] = bool(pressed)

    def set_all(self, states):
        self.keys[:] = [bool(s) for s in states]

    def wait_for_key(self, register):
        self.waiting_for_keyboard = True
        self.keyboard_register = register
